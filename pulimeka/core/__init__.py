"""Core game logic for Puli Meka."""

from .state import (
    EMPTY,
    BoardArray,
    Difficulty,
    GameResult,
    GameState,
    Move,
    Phase,
    Role,
    Snapshot,
    WinStatus,
    empty_nodes,
    make_board,
    phase_for,
    pieces,
)
from .topology import (
    ADJACENCY,
    CAPTURES_TO_WIN,
    CENTRAL_NODES,
    INNER_CENTRE_NODES,
    JUMP_PATHS,
    NUM_NODES,
    OUTER_CENTRE_NODES,
    SPANS_OVER,
    TIGER_START_NODES,
    TOTAL_GOATS,
    TOTAL_TIGERS,
    are_adjacent,
    jumped_node,
)
from .rules import (
    ACTION_VECTOR_SIZE,
    REASON_BLOCKED,
    REASON_CAPTURES,
    REASON_SURRENDER,
    IllegalMoveError,
    apply_move,
    decode_move,
    encode_move,
    enumerate_moves,
    evaluate_win,
    has_any_move,
    initialize_game_state,
    is_legal,
    legal_moves,
    play_move,
    render_board,
    surrender,
    undo,
)

__all__ = [
    "EMPTY",
    "BoardArray",
    "Difficulty",
    "GameResult",
    "GameState",
    "Move",
    "Phase",
    "Role",
    "Snapshot",
    "WinStatus",
    "empty_nodes",
    "make_board",
    "phase_for",
    "pieces",
    "ADJACENCY",
    "CAPTURES_TO_WIN",
    "CENTRAL_NODES",
    "INNER_CENTRE_NODES",
    "JUMP_PATHS",
    "NUM_NODES",
    "OUTER_CENTRE_NODES",
    "SPANS_OVER",
    "TIGER_START_NODES",
    "TOTAL_GOATS",
    "TOTAL_TIGERS",
    "are_adjacent",
    "jumped_node",
    "ACTION_VECTOR_SIZE",
    "REASON_BLOCKED",
    "REASON_CAPTURES",
    "REASON_SURRENDER",
    "IllegalMoveError",
    "apply_move",
    "decode_move",
    "encode_move",
    "enumerate_moves",
    "evaluate_win",
    "has_any_move",
    "initialize_game_state",
    "is_legal",
    "legal_moves",
    "play_move",
    "render_board",
    "surrender",
    "undo",
]
