from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

import numpy as np
from loguru import logger

from pulimeka.ai import Policy, SearchConfig, make_policy
from pulimeka.core import Difficulty, GameResult, GameState, Role, initialize_game_state, play_move


@dataclass
class EvaluationResult:
    games_played: int
    tiger_wins: int
    goat_wins: int
    draws: int
    average_length: float

    def winrate_tiger(self) -> float:
        return self.tiger_wins / max(1, self.games_played)

    def winrate_goat(self) -> float:
        return self.goat_wins / max(1, self.games_played)


def play_game(tiger: Policy, goat: Policy, *, max_ply: int = 300) -> GameState:
    """Play one game between two policies; stops early if a side cannot move."""
    state = initialize_game_state()
    policies = {Role.TIGER: tiger, Role.GOAT: goat}
    for _ in range(max_ply):
        if state.is_terminal:
            break
        move = policies[state.turn].select(state)
        if move is None:
            break
        state = play_move(state, move)
    return state


def evaluate_policies(
    tiger: Policy,
    goat: Policy,
    *,
    episodes: int,
    max_ply: int = 300,
    progress: Optional[Callable[[Iterable[int]], Iterable[int]]] = None,
) -> EvaluationResult:
    tiger_wins = 0
    goat_wins = 0
    draws = 0
    total_ply = 0

    episode_iter = progress(range(episodes)) if progress else range(episodes)
    for episode in episode_iter:
        state = play_game(tiger, goat, max_ply=max_ply)
        total_ply += len(state.history)
        if state.result == GameResult.TIGER_WIN:
            tiger_wins += 1
        elif state.result == GameResult.GOAT_WIN:
            goat_wins += 1
        else:
            draws += 1
        logger.debug(f"Episode {episode}: {state.result.value} after {len(state.history)} plies")

    return EvaluationResult(
        games_played=episodes,
        tiger_wins=tiger_wins,
        goat_wins=goat_wins,
        draws=draws,
        average_length=total_ply / max(1, episodes),
    )


def evaluate_tiers(
    tiger_difficulty: Difficulty,
    goat_difficulty: Difficulty,
    *,
    episodes: int,
    max_ply: int = 300,
    seed: Optional[int] = None,
    search_config: Optional[SearchConfig] = None,
    progress: Optional[Callable[[Iterable[int]], Iterable[int]]] = None,
) -> EvaluationResult:
    seeds = np.random.SeedSequence(seed).spawn(2)
    tiger = make_policy(
        tiger_difficulty, Role.TIGER, rng=np.random.default_rng(seeds[0]), config=search_config
    )
    goat = make_policy(
        goat_difficulty, Role.GOAT, rng=np.random.default_rng(seeds[1]), config=search_config
    )
    return evaluate_policies(tiger, goat, episodes=episodes, max_ply=max_ply, progress=progress)
