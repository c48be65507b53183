from __future__ import annotations

from typing import Dict, FrozenSet, Optional, Tuple

NUM_NODES = 24
TOTAL_GOATS = 18
TOTAL_TIGERS = 4
CAPTURES_TO_WIN = 8
TIGER_START_NODES: Tuple[int, ...] = (0, 3, 8, 13)

ADJACENCY: Dict[int, Tuple[int, ...]] = {
    0: (2, 3, 4),
    1: (2, 6),
    2: (1, 3, 0, 7),
    3: (2, 4, 0, 8),
    4: (3, 5, 0, 9),
    5: (4, 10),
    6: (1, 7),
    7: (6, 8, 2, 12),
    8: (7, 9, 3, 13),
    9: (8, 10, 4, 14),
    10: (5, 9),
    11: (12, 16),
    12: (11, 13, 7, 17),
    13: (12, 14, 8, 18),
    14: (13, 15, 9, 19),
    15: (14, 20),
    16: (11, 17),
    17: (16, 18, 12, 21),
    18: (17, 19, 13, 22),
    19: (18, 20, 14, 23),
    20: (15, 19),
    21: (17, 22),
    22: (18, 21, 23),
    23: (22, 19),
}

# (start, middle, end); a tiger may jump in either direction along a path.
JUMP_PATHS: Tuple[Tuple[int, int, int], ...] = (
    # vertical lines
    (0, 3, 8), (3, 8, 13), (8, 13, 18), (13, 18, 22),
    (0, 2, 7), (2, 7, 12), (7, 12, 17), (12, 17, 21),
    (0, 4, 9), (4, 9, 14), (9, 14, 19), (14, 19, 23),
    # horizontal lines
    (1, 2, 3), (2, 3, 4), (3, 4, 5),
    (6, 7, 8), (7, 8, 9), (8, 9, 10),
    (11, 12, 13), (12, 13, 14), (13, 14, 15),
    (16, 17, 18), (17, 18, 19), (18, 19, 20),
    (21, 22, 23),
)

# Heuristic node sets.
CENTRAL_NODES: FrozenSet[int] = frozenset({3, 7, 8, 9, 13})
INNER_CENTRE_NODES: FrozenSet[int] = frozenset({8, 13})
OUTER_CENTRE_NODES: FrozenSet[int] = frozenset({3, 7, 9, 12, 14})


def _index_jumps() -> Dict[int, Tuple[Tuple[int, int], ...]]:
    by_origin: Dict[int, list] = {node: [] for node in range(NUM_NODES)}
    for start, middle, end in JUMP_PATHS:
        by_origin[start].append((middle, end))
        by_origin[end].append((middle, start))
    return {node: tuple(entries) for node, entries in by_origin.items()}


def _index_landings() -> Dict[Tuple[int, int], int]:
    landings: Dict[Tuple[int, int], int] = {}
    for start, middle, end in JUMP_PATHS:
        landings[(start, end)] = middle
        landings[(end, start)] = middle
    return landings


def _index_spans() -> Dict[int, Tuple[Tuple[int, int], ...]]:
    spans: Dict[int, list] = {node: [] for node in range(NUM_NODES)}
    for start, middle, end in JUMP_PATHS:
        spans[middle].append((start, end))
    return {node: tuple(entries) for node, entries in spans.items()}


# origin -> ((jumped node, landing node), ...), both orientations of every path.
JUMPS_FROM: Dict[int, Tuple[Tuple[int, int], ...]] = _index_jumps()
# (origin, landing) -> jumped node.
JUMPED_NODE: Dict[Tuple[int, int], int] = _index_landings()
# middle -> ((start, end), ...) for every path that jumps over that node.
SPANS_OVER: Dict[int, Tuple[Tuple[int, int], ...]] = _index_spans()


def are_adjacent(a: int, b: int) -> bool:
    return b in ADJACENCY[a]


def jumped_node(source: int, destination: int) -> Optional[int]:
    """Return the middle node if ``source -> destination`` follows a jump path."""
    return JUMPED_NODE.get((source, destination))


def _check_topology() -> None:
    if len(ADJACENCY) != NUM_NODES:
        raise RuntimeError("Adjacency table must cover every node.")
    for node, neighbours in ADJACENCY.items():
        for other in neighbours:
            if node not in ADJACENCY[other]:
                raise RuntimeError(f"Adjacency {node}-{other} is not symmetric.")
    for start, middle, end in JUMP_PATHS:
        if not (are_adjacent(start, middle) and are_adjacent(middle, end)):
            raise RuntimeError(f"Jump path {(start, middle, end)} does not follow edges.")


_check_topology()
