import numpy as np

from pulimeka.ai import choose_placement, order_moves, placement_scores, score, tiger_features
from pulimeka.ai.heuristics import DANGER_PENALTY, goat_connections, is_exposed, placement_score
from pulimeka.core import TOTAL_GOATS, Move, Role, make_board

# Nodes next to a tiger on the opening board; each can be jumped straight away.
OPENING_EXPOSED = {2, 4, 7, 9, 12, 14, 18}


def test_tiger_features_on_opening_board():
    features = tiger_features(make_board())
    assert features.mobility == 9
    assert features.capture_opportunities == 0
    assert features.trapped == 0
    assert features.coordination == 3


def test_score_opening_board_for_each_role():
    board = make_board()
    assert score(board, Role.TIGER, 0, 0) == 9 * 30 + 3 * 60
    assert score(board, Role.GOAT, 0, 0) == -9 * 50


def test_tiger_score_adds_near_win_bonus():
    board = make_board()
    assert score(board, Role.TIGER, 7, TOTAL_GOATS) == 7 * 2000 + 5000 + 450
    assert score(board, Role.TIGER, 6, TOTAL_GOATS) == 6 * 2000 + 450


def test_capture_opportunity_helps_tiger_and_hurts_goat():
    safe = make_board(tigers=(0, 3, 8, 5), goats=(13, 18))
    threatened = make_board(tigers=(0, 3, 8, 5), goats=(13,))
    assert tiger_features(threatened).capture_opportunities == 1
    assert tiger_features(safe).capture_opportunities == 0
    assert score(threatened, Role.TIGER, 0, TOTAL_GOATS) > score(safe, Role.TIGER, 0, TOTAL_GOATS)
    assert score(threatened, Role.GOAT, 0, TOTAL_GOATS) < score(safe, Role.GOAT, 0, TOTAL_GOATS)


def test_trapped_tiger_counts():
    board = make_board(tigers=(0, 16, 20, 23), goats=(2, 3, 4, 7, 8, 9))
    features = tiger_features(board)
    assert features.trapped == 1
    assert features.coordination == 0


def test_goat_connections_count_each_edge_once():
    board = make_board(tigers=(0, 1, 5, 6), goats=(12, 17, 18, 22))
    assert goat_connections(board) == 3


def test_goat_score_rewards_centre_and_walls():
    tigers = (16, 20, 21, 23)
    centre = make_board(tigers=tigers, goats=(8, 13))
    edge = make_board(tigers=tigers, goats=(1, 6))
    assert score(centre, Role.GOAT, 0, TOTAL_GOATS) - score(edge, Role.GOAT, 0, TOTAL_GOATS) == 2 * 70


def test_exposed_nodes_on_opening_board():
    board = make_board()
    exposed = {node for node in range(24) if board[node] == 0 and is_exposed(board, node)}
    assert exposed == OPENING_EXPOSED
    for node in OPENING_EXPOSED:
        assert placement_score(board, node) == DANGER_PENALTY


def test_placement_score_components():
    board = make_board(tigers=(0, 3, 22, 23), goats=(7, 12, 13))
    # 8 touches tiger 3 and goats 7 and 13; neither line through it has an open landing
    assert not is_exposed(board, 8)
    assert placement_score(board, 8) == 200 + 2 * 50 + 100


def test_placement_scores_noise_is_bounded():
    board = make_board()
    scores = placement_scores(board, np.random.default_rng(3))
    assert set(scores) == {node for node in range(24) if board[node] == 0}
    for node, value in scores.items():
        base = placement_score(board, node)
        assert base <= value < base + 10


def test_choose_placement_avoids_exposed_nodes():
    board = make_board()
    for seed in range(10):
        move = choose_placement(board, np.random.default_rng(seed))
        assert move.is_placement
        assert move.destination not in OPENING_EXPOSED


def test_order_moves_puts_captures_then_centre_first():
    moves = [
        Move(destination=1, source=2),
        Move(destination=13, source=12),
        Move(destination=18, source=8, is_capture=True),
        Move(destination=7, source=6),
    ]
    ordered = order_moves(moves)
    assert ordered[0].is_capture
    assert [move.destination for move in ordered] == [18, 13, 7, 1]
