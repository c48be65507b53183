from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, List, Optional, Sequence

import numpy as np

from pulimeka.core import (
    ADJACENCY,
    CAPTURES_TO_WIN,
    CENTRAL_NODES,
    EMPTY,
    INNER_CENTRE_NODES,
    OUTER_CENTRE_NODES,
    SPANS_OVER,
    TOTAL_GOATS,
    BoardArray,
    Move,
    Role,
    are_adjacent,
    empty_nodes,
    enumerate_moves,
    pieces,
)

# Tiger perspective.
CAPTURE_VALUE = 2000
NEAR_WIN_BONUS = 5000
OPPORTUNITY_VALUE = 500
TRAPPED_PENALTY = 1500
MOBILITY_VALUE = 30
COORDINATION_VALUE = 60

# Goat perspective.
LOSS_PENALTY = 2500
TRAPPED_BONUS = 1500
MOBILITY_PENALTY = 50
THREAT_PENALTY = 1000
CONNECTION_VALUE = 40
CENTRE_VALUE = 70

# Placement heuristic.
DANGER_PENALTY = -10000
CROWD_TIGER_VALUE = 200
WALL_VALUE = 50
INNER_CENTRE_VALUE = 100
OUTER_CENTRE_VALUE = 60
PLACEMENT_NOISE = 10.0


@dataclass(frozen=True)
class TigerFeatures:
    capture_opportunities: int
    trapped: int
    mobility: int
    coordination: int


def tiger_features(board: BoardArray) -> TigerFeatures:
    tigers = pieces(board, Role.TIGER)
    moves = enumerate_moves(board, Role.TIGER, TOTAL_GOATS)
    per_tiger = Counter(move.source for move in moves)
    return TigerFeatures(
        capture_opportunities=sum(1 for move in moves if move.is_capture),
        trapped=sum(1 for node in tigers if per_tiger[node] == 0),
        mobility=len(moves),
        coordination=sum(1 for a, b in combinations(tigers, 2) if are_adjacent(a, b)),
    )


def goat_connections(board: BoardArray) -> int:
    goats = set(pieces(board, Role.GOAT))
    # each edge is seen from both ends
    return sum(1 for node in goats for other in ADJACENCY[node] if other in goats) // 2


def score(board: BoardArray, ai_role: Role, goats_captured: int, goats_placed: int) -> int:
    """Static evaluation of ``board``; larger is better for ``ai_role``.

    The sign is fixed to the AI's role, not to whichever side moves next.
    ``goats_placed`` is accepted for symmetry with the search call and does not
    change the value.
    """
    features = tiger_features(board)

    if ai_role == Role.TIGER:
        value = goats_captured * CAPTURE_VALUE
        if goats_captured >= CAPTURES_TO_WIN - 1:
            value += NEAR_WIN_BONUS
        value += features.capture_opportunities * OPPORTUNITY_VALUE
        value -= features.trapped * TRAPPED_PENALTY
        value += features.mobility * MOBILITY_VALUE
        value += features.coordination * COORDINATION_VALUE
        return value

    goats = pieces(board, Role.GOAT)
    value = -goats_captured * LOSS_PENALTY
    value += features.trapped * TRAPPED_BONUS
    value -= features.mobility * MOBILITY_PENALTY
    value -= features.capture_opportunities * THREAT_PENALTY
    value += goat_connections(board) * CONNECTION_VALUE
    value += sum(CENTRE_VALUE for node in goats if node in CENTRAL_NODES)
    return value


# ----------------------------------------------------------------------
# Goat placement without search
# ----------------------------------------------------------------------
def is_exposed(board: BoardArray, node: int) -> bool:
    """True if a goat on ``node`` could be jumped by a tiger on the next turn."""
    for start, end in SPANS_OVER[node]:
        if board[start] == Role.TIGER and board[end] == EMPTY:
            return True
        if board[end] == Role.TIGER and board[start] == EMPTY:
            return True
    return False


def placement_score(board: BoardArray, node: int) -> int:
    if is_exposed(board, node):
        return DANGER_PENALTY
    value = 0
    for neighbour in ADJACENCY[node]:
        if board[neighbour] == Role.TIGER:
            value += CROWD_TIGER_VALUE
        elif board[neighbour] == Role.GOAT:
            value += WALL_VALUE
    if node in INNER_CENTRE_NODES:
        value += INNER_CENTRE_VALUE
    elif node in OUTER_CENTRE_NODES:
        value += OUTER_CENTRE_VALUE
    return value


def placement_scores(board: BoardArray, rng: Optional[np.random.Generator] = None) -> Dict[int, float]:
    rng = rng or np.random.default_rng()
    return {
        node: placement_score(board, node) + float(rng.uniform(0.0, PLACEMENT_NOISE))
        for node in empty_nodes(board)
    }


def choose_placement(board: BoardArray, rng: Optional[np.random.Generator] = None) -> Optional[Move]:
    scores = placement_scores(board, rng)
    if not scores:
        return None
    best = max(scores, key=scores.__getitem__)
    return Move(destination=best)


# ----------------------------------------------------------------------
# Move ordering
# ----------------------------------------------------------------------
def centrality(node: int) -> int:
    if node in INNER_CENTRE_NODES:
        return 2
    if node in OUTER_CENTRE_NODES:
        return 1
    return 0


def order_moves(moves: Sequence[Move]) -> List[Move]:
    """Captures first, then moves towards the centre; stable otherwise."""
    return sorted(moves, key=lambda move: (move.is_capture, centrality(move.destination)), reverse=True)
