import numpy as np

from pulimeka.ai import GreedyPolicy, RandomPolicy
from pulimeka.core import GameResult, Role
from pulimeka.evaluation import evaluate_policies, evaluate_tiers, play_game


def test_evaluate_random_vs_random_small():
    tiger = RandomPolicy(Role.TIGER, np.random.default_rng(0))
    goat = RandomPolicy(Role.GOAT, np.random.default_rng(1))
    result = evaluate_policies(tiger, goat, episodes=2)
    assert result.games_played == 2
    assert result.tiger_wins + result.goat_wins + result.draws == 2
    assert result.average_length > 0
    assert 0.0 <= result.winrate_tiger() <= 1.0
    assert result.winrate_tiger() + result.winrate_goat() <= 1.0
    assert result.winrate_goat() == result.goat_wins / 2


def test_play_game_respects_ply_limit():
    tiger = GreedyPolicy(Role.TIGER, np.random.default_rng(2))
    goat = RandomPolicy(Role.GOAT, np.random.default_rng(3))
    state = play_game(tiger, goat, max_ply=10)
    assert len(state.history) == 10
    assert state.result == GameResult.ONGOING


def test_evaluate_tiers_is_reproducible_with_seed():
    first = evaluate_tiers("easy", "medium", episodes=3, max_ply=120, seed=11)
    second = evaluate_tiers("easy", "medium", episodes=3, max_ply=120, seed=11)
    assert first == second
    assert first.games_played == 3


def test_evaluate_tiers_uses_progress_wrapper():
    seen = []

    def progress(iterable):
        for item in iterable:
            seen.append(item)
            yield item

    evaluate_tiers("easy", "easy", episodes=2, max_ply=20, seed=0, progress=progress)
    assert seen == [0, 1]
