import numpy as np
import pytest

from pulimeka.ai import GreedyPolicy, RandomPolicy, SearchConfig, SearchPolicy, choose_move, make_policy
from pulimeka.core import (
    JUMP_PATHS,
    TOTAL_GOATS,
    Difficulty,
    GameState,
    Move,
    Role,
    enumerate_moves,
    initialize_game_state,
    legal_moves,
    make_board,
    play_move,
)

FAST_SEARCH = SearchConfig(placement_depth=2, movement_depth=2)


def midgame_state(seed: int, plies: int = 12) -> GameState:
    rng = np.random.default_rng(seed)
    state = initialize_game_state()
    for _ in range(plies):
        moves = enumerate_moves(state.board, state.turn, state.goats_placed)
        if state.is_terminal or not moves:
            break
        state = play_move(state, moves[int(rng.integers(len(moves)))])
    return state


@pytest.mark.parametrize("seed", range(5))
@pytest.mark.parametrize("role", [Role.TIGER, Role.GOAT])
def test_easy_move_is_always_legal(seed, role):
    state = midgame_state(seed)
    move = choose_move(state, Difficulty.EASY, role, rng=np.random.default_rng(seed))
    legal = enumerate_moves(state.board, role, state.goats_placed)
    assert move in legal
    if not move.is_placement:
        assert move.destination in legal_moves(move.source, role, state.board, state.goats_placed)


def test_medium_tiger_always_captures_when_possible():
    board = make_board(tigers=(0, 3, 8, 5), goats=(13, 20, 21, 1))
    state = GameState(board=board, turn=Role.TIGER, goats_placed=4)
    for seed in range(10):
        move = choose_move(state, Difficulty.MEDIUM, Role.TIGER, rng=np.random.default_rng(seed))
        assert move.is_capture
        assert move.as_tuple() == (8, 18)


def test_medium_goat_plays_legal_move():
    state = midgame_state(3)
    move = choose_move(state, "medium", Role.GOAT, rng=np.random.default_rng(0))
    assert move in enumerate_moves(state.board, Role.GOAT, state.goats_placed)


def test_hard_tiger_fast_path_wins_immediately():
    board = make_board(tigers=(0, 3, 8, 5), goats=(13, 20, 21, 16, 17, 22, 23, 11, 15, 10))
    state = GameState(board=board, turn=Role.TIGER, goats_placed=TOTAL_GOATS, goats_captured=7)
    move = choose_move(state, Difficulty.HARD, Role.TIGER, rng=np.random.default_rng(0))
    assert move == Move(destination=18, source=8, is_capture=True)


@pytest.mark.parametrize("seed", range(5))
def test_hard_goat_opening_placement_is_never_exposed(seed):
    state = initialize_game_state()
    move = choose_move(state, Difficulty.HARD, Role.GOAT, rng=np.random.default_rng(seed))
    assert move.is_placement
    for start, middle, end in JUMP_PATHS:
        if middle != move.destination:
            continue
        tiger_at_start = state.board[start] == Role.TIGER and state.board[end] == 0
        tiger_at_end = state.board[end] == Role.TIGER and state.board[start] == 0
        assert not (tiger_at_start or tiger_at_end)


def test_hard_search_returns_legal_move_in_movement_phase():
    state = midgame_state(7, plies=60)
    if state.is_terminal:
        pytest.skip("random playout finished early")
    move = choose_move(state, Difficulty.HARD, state.turn, rng=np.random.default_rng(0), config=FAST_SEARCH)
    legal = enumerate_moves(state.board, state.turn, state.goats_placed)
    if legal:
        assert move in legal
    else:
        assert move is None


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_no_legal_move_returns_none(difficulty):
    # movement phase with no goats left on the board
    state = GameState(board=make_board(), turn=Role.GOAT, goats_placed=TOTAL_GOATS)
    assert choose_move(state, difficulty, Role.GOAT, rng=np.random.default_rng(0), config=FAST_SEARCH) is None


def test_make_policy_maps_difficulty_to_tier():
    assert isinstance(make_policy(Difficulty.EASY, Role.TIGER), RandomPolicy)
    assert isinstance(make_policy("medium", Role.TIGER), GreedyPolicy)
    policy = make_policy(Difficulty.HARD, Role.GOAT, config=FAST_SEARCH)
    assert isinstance(policy, SearchPolicy)
    assert policy.search.config.movement_depth == 2


def test_spawned_policies_are_reproducible():
    state = midgame_state(1)
    policy = make_policy(Difficulty.EASY, state.turn)
    a = policy.spawn(5).select(state)
    b = policy.spawn(5).select(state)
    assert a == b
    hard = make_policy(Difficulty.HARD, Role.TIGER, config=FAST_SEARCH).spawn(9)
    assert isinstance(hard, SearchPolicy)
    assert hard.search.config.placement_depth == 2
