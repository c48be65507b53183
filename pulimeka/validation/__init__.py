"""Invariant checks for boards and game states."""

from .board_checks import BoardInvariantError, validate_board, validate_state

__all__ = ["BoardInvariantError", "validate_board", "validate_state"]
