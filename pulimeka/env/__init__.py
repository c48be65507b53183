"""Gymnasium environment wrapper."""

from .gym_env import PuliMekaEnv

__all__ = ["PuliMekaEnv"]
