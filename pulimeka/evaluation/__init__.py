"""Evaluation helpers for playing AI tiers against each other."""

from .match import EvaluationResult, evaluate_policies, evaluate_tiers, play_game

__all__ = ["EvaluationResult", "evaluate_policies", "evaluate_tiers", "play_game"]
