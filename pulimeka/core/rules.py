from __future__ import annotations

from typing import FrozenSet, List, Optional, Tuple

import numpy as np

from .state import (
    EMPTY,
    BoardArray,
    GameResult,
    GameState,
    Move,
    Role,
    Snapshot,
    WinStatus,
    empty_nodes,
    freeze,
    make_board,
    pieces,
)
from .topology import (
    ADJACENCY,
    CAPTURES_TO_WIN,
    JUMPS_FROM,
    NUM_NODES,
    TOTAL_GOATS,
    jumped_node,
)

ACTION_VECTOR_SIZE = NUM_NODES * NUM_NODES

REASON_CAPTURES = "capture threshold reached"
REASON_BLOCKED = "capturing side fully blocked"
REASON_SURRENDER = "surrendered"


class IllegalMoveError(ValueError):
    pass


# ----------------------------------------------------------------------
# Move generation
# ----------------------------------------------------------------------
def _destinations(node: int, side: Role, board: BoardArray, goats_placed: int) -> List[Tuple[int, bool]]:
    if side == Role.GOAT and goats_placed < TOTAL_GOATS:
        return []

    found: List[Tuple[int, bool]] = [
        (neighbour, False) for neighbour in ADJACENCY[node] if board[neighbour] == EMPTY
    ]
    if side == Role.TIGER:
        for middle, landing in JUMPS_FROM[node]:
            if board[middle] == Role.GOAT and board[landing] == EMPTY:
                found.append((landing, True))
    return found


def legal_moves(node: int, side: Role, board: BoardArray, goats_placed: int) -> FrozenSet[int]:
    """Destinations reachable by the piece on ``node`` for ``side``.

    Goats have no board moves while any remain to be placed. Tigers may also land
    beyond a goat along any jump path, in either direction.
    """
    return frozenset(dest for dest, _ in _destinations(node, side, board, goats_placed))


def enumerate_moves(board: BoardArray, side: Role, goats_placed: int) -> List[Move]:
    if side == Role.GOAT and goats_placed < TOTAL_GOATS:
        return [Move(destination=node) for node in empty_nodes(board)]

    moves: List[Move] = []
    for node in pieces(board, side):
        for dest, is_capture in _destinations(node, side, board, goats_placed):
            moves.append(Move(destination=dest, source=node, is_capture=is_capture))
    return moves


def has_any_move(board: BoardArray, side: Role, goats_placed: int) -> bool:
    if side == Role.GOAT and goats_placed < TOTAL_GOATS:
        return bool(np.any(board == EMPTY))
    return any(_destinations(node, side, board, goats_placed) for node in pieces(board, side))


# ----------------------------------------------------------------------
# Win evaluation
# ----------------------------------------------------------------------
def evaluate_win(board: BoardArray, goats_captured: int, side: Role) -> WinStatus:
    """Decide whether the game is over.

    ``side`` is the side about to move; the outcome does not depend on it. Tiger
    mobility is checked with placement complete so that jumps count as moves.
    """
    if goats_captured >= CAPTURES_TO_WIN:
        return WinStatus(over=True, winner=Role.TIGER, reason=REASON_CAPTURES)

    tigers = pieces(board, Role.TIGER)
    if not tigers:
        return WinStatus(over=False)

    if not any(_destinations(node, Role.TIGER, board, TOTAL_GOATS) for node in tigers):
        return WinStatus(over=True, winner=Role.GOAT, reason=REASON_BLOCKED)
    return WinStatus(over=False)


# ----------------------------------------------------------------------
# Move simulation
# ----------------------------------------------------------------------
def apply_move(board: BoardArray, move: Move, side: Role, goats_captured: int) -> Tuple[BoardArray, int]:
    """Return the board and capture count after ``side`` plays ``move``.

    The input board is never modified. The goats-placed counter is owned by the
    caller.
    """
    next_board = board.copy()
    captured = goats_captured

    if move.source is not None:
        next_board[move.source] = EMPTY
    next_board[move.destination] = int(side)

    if side == Role.TIGER and move.source is not None:
        middle = jumped_node(move.source, move.destination)
        if middle is not None and next_board[middle] == Role.GOAT:
            next_board[middle] = EMPTY
            captured += 1

    return freeze(next_board), captured


def is_legal(state: GameState, move: Move) -> bool:
    board = state.board
    if not 0 <= move.destination < NUM_NODES:
        return False
    if state.turn == Role.GOAT and state.goats_placed < TOTAL_GOATS:
        return move.is_placement and board[move.destination] == EMPTY
    if move.source is None or not 0 <= move.source < NUM_NODES:
        return False
    if board[move.source] != state.turn:
        return False
    return move.destination in legal_moves(move.source, state.turn, board, state.goats_placed)


# ----------------------------------------------------------------------
# Game session
# ----------------------------------------------------------------------
def initialize_game_state() -> GameState:
    return GameState(board=make_board())


def play_move(state: GameState, move: Move) -> GameState:
    if state.is_terminal:
        raise IllegalMoveError("Cannot play a move on a finished game.")
    if not is_legal(state, move):
        raise IllegalMoveError(f"Illegal move {move.as_tuple()} for {state.turn.name}.")

    board, captured = apply_move(state.board, move, state.turn, state.goats_captured)
    placed = state.goats_placed + 1 if move.is_placement else state.goats_placed
    recorded = Move(
        destination=move.destination,
        source=move.source,
        is_capture=captured > state.goats_captured,
    )

    next_turn = state.turn.opponent
    status = evaluate_win(board, captured, next_turn)
    return GameState(
        board=board,
        turn=next_turn,
        goats_placed=placed,
        goats_captured=captured,
        history=state.history + (state.snapshot(),),
        result=GameResult.for_winner(status.winner) if status.over else GameResult.ONGOING,
        reason=status.reason,
        last_move=recorded,
    )


def surrender(state: GameState) -> GameState:
    """End the game with the side to move conceding."""
    if state.is_terminal:
        raise IllegalMoveError("Game is already over.")
    return GameState(
        board=state.board,
        turn=state.turn,
        goats_placed=state.goats_placed,
        goats_captured=state.goats_captured,
        history=state.history,
        result=GameResult.for_winner(state.turn.opponent),
        reason=REASON_SURRENDER,
        last_move=state.last_move,
    )


def undo(state: GameState) -> GameState:
    """Step back one ply; on a surrendered game, only the surrender is taken back."""
    if state.reason == REASON_SURRENDER:
        return GameState(
            board=state.board,
            turn=state.turn,
            goats_placed=state.goats_placed,
            goats_captured=state.goats_captured,
            history=state.history,
            last_move=state.last_move,
        )
    if not state.history:
        raise IllegalMoveError("Nothing to undo.")
    previous: Snapshot = state.history[-1]
    return GameState(
        board=previous.board,
        turn=previous.turn,
        goats_placed=previous.goats_placed,
        goats_captured=previous.goats_captured,
        history=state.history[:-1],
        last_move=previous.last_move,
    )


# ----------------------------------------------------------------------
# Action encoding
# ----------------------------------------------------------------------
def encode_move(move: Move) -> int:
    source = move.destination if move.source is None else move.source
    return source * NUM_NODES + move.destination


def decode_move(index: int, board: Optional[BoardArray] = None) -> Move:
    """Inverse of :func:`encode_move`; ``board`` fills in the capture flag."""
    if not 0 <= index < ACTION_VECTOR_SIZE:
        raise ValueError("Action index out of range.")
    source, destination = divmod(int(index), NUM_NODES)
    if source == destination:
        return Move(destination=destination)
    is_capture = False
    if board is not None:
        middle = jumped_node(source, destination)
        is_capture = middle is not None and board[middle] == Role.GOAT
    return Move(destination=destination, source=source, is_capture=is_capture)


def render_board(board: BoardArray) -> str:
    symbols = {EMPTY: ".", int(Role.TIGER): Role.TIGER.symbol, int(Role.GOAT): Role.GOAT.symbol}
    rows = [
        (0,),
        (1, 2, 3, 4, 5),
        (6, 7, 8, 9, 10),
        (11, 12, 13, 14, 15),
        (16, 17, 18, 19, 20),
        (21, 22, 23),
    ]
    lines = []
    for row in rows:
        cells = " ".join(f"{node:>2}{symbols[int(board[node])]}" for node in row)
        lines.append(cells.center(25).rstrip())
    return "\n".join(lines)
