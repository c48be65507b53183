"""Puli Meka rules engine and AI core package."""

from . import ai, core, env, evaluation, features, validation
from .ai import MinimaxSearch, SearchConfig, choose_move, make_policy
from .config import AIConfig, load_ai_config
from .core import (
    Difficulty,
    GameResult,
    GameState,
    Move,
    Role,
    WinStatus,
    apply_move,
    evaluate_win,
    initialize_game_state,
    legal_moves,
    play_move,
)
from .env import PuliMekaEnv
from .evaluation import EvaluationResult, evaluate_policies, evaluate_tiers

__all__ = [
    "ai",
    "core",
    "env",
    "evaluation",
    "features",
    "validation",
    "MinimaxSearch",
    "SearchConfig",
    "choose_move",
    "make_policy",
    "AIConfig",
    "load_ai_config",
    "Difficulty",
    "GameResult",
    "GameState",
    "Move",
    "Role",
    "WinStatus",
    "apply_move",
    "evaluate_win",
    "initialize_game_state",
    "legal_moves",
    "play_move",
    "PuliMekaEnv",
    "EvaluationResult",
    "evaluate_policies",
    "evaluate_tiers",
]
