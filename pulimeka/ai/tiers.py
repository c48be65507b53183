from __future__ import annotations

from copy import deepcopy
from typing import List, Optional

import numpy as np
from loguru import logger

from pulimeka.core import (
    TOTAL_GOATS,
    Difficulty,
    GameState,
    Move,
    Role,
    enumerate_moves,
)

from .heuristics import choose_placement
from .search import MinimaxSearch, SearchConfig


class Policy:
    """Move selection interface for one side."""

    def __init__(self, role: Role, rng: Optional[np.random.Generator] = None) -> None:
        self.role = role
        self.rng = rng or np.random.default_rng()

    def select(self, state: GameState) -> Optional[Move]:
        raise NotImplementedError

    def spawn(self, seed: Optional[int] = None) -> "Policy":
        """Return a copy of this policy with its own random source."""
        return type(self)(self.role, rng=np.random.default_rng(seed))

    def _pick(self, moves: List[Move]) -> Optional[Move]:
        if not moves:
            return None
        return moves[int(self.rng.integers(len(moves)))]


class RandomPolicy(Policy):
    def select(self, state: GameState) -> Optional[Move]:
        return self._pick(enumerate_moves(state.board, self.role, state.goats_placed))


class GreedyPolicy(Policy):
    """Takes a capture whenever one exists, otherwise plays randomly."""

    def select(self, state: GameState) -> Optional[Move]:
        moves = enumerate_moves(state.board, self.role, state.goats_placed)
        if self.role == Role.TIGER:
            captures = [move for move in moves if move.is_capture]
            if captures:
                return self._pick(captures)
        return self._pick(moves)


class SearchPolicy(Policy):
    def __init__(
        self,
        role: Role,
        rng: Optional[np.random.Generator] = None,
        *,
        config: Optional[SearchConfig] = None,
    ) -> None:
        super().__init__(role, rng)
        self._config = deepcopy(config) if config else SearchConfig()
        self.search = MinimaxSearch(self._config, rng=self.rng)

    def select(self, state: GameState) -> Optional[Move]:
        if self.role == Role.GOAT and state.goats_placed < TOTAL_GOATS:
            return choose_placement(state.board, self.rng)

        own_previous = state.history[-1].last_move if state.history else None
        result = self.search.best_move(
            state.board,
            self.role,
            state.goats_placed,
            state.goats_captured,
            own_previous=own_previous,
            opponent_previous=state.last_move,
        )
        return result.move

    def spawn(self, seed: Optional[int] = None) -> "SearchPolicy":
        return SearchPolicy(self.role, np.random.default_rng(seed), config=self._config)


POLICIES = {
    Difficulty.EASY: RandomPolicy,
    Difficulty.MEDIUM: GreedyPolicy,
    Difficulty.HARD: SearchPolicy,
}


def make_policy(
    difficulty: Difficulty,
    ai_role: Role,
    *,
    rng: Optional[np.random.Generator] = None,
    config: Optional[SearchConfig] = None,
) -> Policy:
    difficulty = Difficulty(difficulty)
    if difficulty == Difficulty.HARD:
        return SearchPolicy(ai_role, rng, config=config)
    return POLICIES[difficulty](ai_role, rng)


def choose_move(
    state: GameState,
    difficulty: Difficulty,
    ai_role: Role,
    *,
    rng: Optional[np.random.Generator] = None,
    config: Optional[SearchConfig] = None,
) -> Optional[Move]:
    """Pick a move for ``ai_role``; ``None`` means the side has no legal move."""
    move = make_policy(difficulty, ai_role, rng=rng, config=config).select(state)
    if move is None:
        logger.warning(f"No legal move for {ai_role.name} in {state!r}")
    return move
