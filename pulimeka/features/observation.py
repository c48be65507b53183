from __future__ import annotations

from typing import Tuple

import numpy as np

from pulimeka.core import CAPTURES_TO_WIN, NUM_NODES, TOTAL_GOATS, GameState, Role

BOARD_CHANNELS = 3  # tiger plane, goat plane, side-to-move plane
AUX_VECTOR_SIZE = 2  # placed fraction, captured fraction


def build_board_tensor(state: GameState) -> np.ndarray:
    """Return board tensor with shape (3, 24) channel-first."""
    tensor = np.zeros((BOARD_CHANNELS, NUM_NODES), dtype=np.float32)
    tensor[0] = state.board == int(Role.TIGER)
    tensor[1] = state.board == int(Role.GOAT)
    if state.turn == Role.TIGER:
        tensor[2] = 1.0
    return tensor


def build_aux_vector(state: GameState) -> np.ndarray:
    aux = np.zeros((AUX_VECTOR_SIZE,), dtype=np.float32)
    aux[0] = state.goats_placed / TOTAL_GOATS
    aux[1] = min(state.goats_captured, CAPTURES_TO_WIN) / CAPTURES_TO_WIN
    return aux


def state_to_numpy(state: GameState) -> Tuple[np.ndarray, np.ndarray]:
    return build_board_tensor(state), build_aux_vector(state)
