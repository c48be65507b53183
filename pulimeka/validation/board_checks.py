from __future__ import annotations

import numpy as np

from pulimeka.core import (
    CAPTURES_TO_WIN,
    EMPTY,
    NUM_NODES,
    TOTAL_GOATS,
    TOTAL_TIGERS,
    BoardArray,
    GameState,
    Role,
)


class BoardInvariantError(ValueError):
    pass


def validate_board(board: BoardArray, goats_placed: int, goats_captured: int) -> None:
    if board.shape != (NUM_NODES,):
        raise BoardInvariantError(f"board must have shape ({NUM_NODES},), got {board.shape}")
    if not np.isin(board, (EMPTY, int(Role.TIGER), int(Role.GOAT))).all():
        raise BoardInvariantError("board contains unknown occupant codes")
    if not 0 <= goats_placed <= TOTAL_GOATS:
        raise BoardInvariantError(f"goats placed out of range: {goats_placed}")
    if not 0 <= goats_captured <= min(goats_placed, CAPTURES_TO_WIN):
        raise BoardInvariantError(f"goats captured out of range: {goats_captured}")
    tigers = int(np.count_nonzero(board == int(Role.TIGER)))
    if tigers != TOTAL_TIGERS:
        raise BoardInvariantError(f"expected {TOTAL_TIGERS} tigers, found {tigers}")
    goats = int(np.count_nonzero(board == int(Role.GOAT)))
    if goats != goats_placed - goats_captured:
        raise BoardInvariantError(
            f"expected {goats_placed - goats_captured} goats on the board, found {goats}"
        )


def validate_state(state: GameState) -> None:
    validate_board(state.board, state.goats_placed, state.goats_captured)
    for snapshot in state.history:
        validate_board(snapshot.board, snapshot.goats_placed, snapshot.goats_captured)
