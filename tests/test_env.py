import numpy as np
import pytest

from pulimeka import PuliMekaEnv
from pulimeka.core import (
    ACTION_VECTOR_SIZE,
    TOTAL_GOATS,
    Difficulty,
    GameState,
    Move,
    Role,
    encode_move,
    enumerate_moves,
    make_board,
)


def test_reset_returns_valid_observation():
    env = PuliMekaEnv()
    obs, info = env.reset(seed=0)

    assert obs["board"].shape == (3, 24)
    assert obs["aux"].shape == (2,)
    assert info["legal_action_mask"].shape == (ACTION_VECTOR_SIZE,)
    # one placement per empty node
    assert np.count_nonzero(info["legal_action_mask"]) == 20
    assert info["turn"] == Role.GOAT


def test_legal_mask_matches_enumeration():
    env = PuliMekaEnv()
    env.reset(seed=0)
    env.step(encode_move(Move(destination=1)))
    mask = env.legal_action_mask()
    legal = enumerate_moves(env.state.board, env.state.turn, env.state.goats_placed)
    assert np.count_nonzero(mask) == len(legal)
    for move in legal:
        assert mask[encode_move(move)] == 1


def test_step_advances_state_and_returns_reward():
    env = PuliMekaEnv()
    obs, info = env.reset(seed=0)
    action = encode_move(Move(destination=1))
    assert action == 25

    next_obs, reward, terminated, truncated, next_info = env.step(action)

    assert reward == 0.0
    assert not terminated
    assert not truncated
    assert next_obs["board"][1, 1] == 1.0
    assert np.any(next_obs["board"] != obs["board"])
    assert next_info["turn"] == Role.TIGER


def test_illegal_action_is_rejected():
    env = PuliMekaEnv()
    env.reset(seed=0)
    with pytest.raises(ValueError):
        env.step(encode_move(Move(destination=0)))
    with pytest.raises(ValueError):
        env.step(ACTION_VECTOR_SIZE)


def test_opponent_moves_first_when_agent_is_tiger():
    env = PuliMekaEnv(agent_role=Role.TIGER, opponent_difficulty=Difficulty.EASY)
    _, info = env.reset(seed=3)
    assert env.state.goats_placed == 1
    assert env.state.turn == Role.TIGER
    action = int(np.flatnonzero(info["legal_action_mask"])[0])
    env.step(action)
    assert env.state.turn == Role.TIGER
    assert env.state.goats_placed == 2


def test_episode_against_opponent_finishes_or_truncates():
    env = PuliMekaEnv(agent_role=Role.GOAT, opponent_difficulty="medium", max_ply=40)
    _, info = env.reset(seed=1)
    rng = np.random.default_rng(1)
    terminated = truncated = False
    reward = 0.0
    while not (terminated or truncated):
        legal = np.flatnonzero(info["legal_action_mask"])
        _, reward, terminated, truncated, info = env.step(int(rng.choice(legal)))
    if terminated:
        assert reward in (-1.0, 1.0)
    else:
        assert reward == 0.0


def test_render_ansi_board():
    env = PuliMekaEnv(render_mode="ansi")
    env.reset(seed=0)
    text = env.render()
    assert text.count("T") == 4
    assert "G" not in text


def test_stalemate_is_reported_when_side_to_move_is_stuck():
    env = PuliMekaEnv()
    env.reset(seed=0)
    assert not env._build_info()["stalemate"]
    env._state = GameState(board=make_board(), turn=Role.GOAT, goats_placed=TOTAL_GOATS)
    info = env._build_info()
    assert info["stalemate"]
    assert not info["legal_action_mask"].any()
