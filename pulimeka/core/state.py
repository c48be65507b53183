from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterable, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .topology import NUM_NODES, TIGER_START_NODES, TOTAL_GOATS

BoardArray = NDArray[np.int8]

EMPTY = 0


class Role(IntEnum):
    TIGER = 1
    GOAT = 2

    @property
    def opponent(self) -> "Role":
        return Role.GOAT if self == Role.TIGER else Role.TIGER

    @property
    def symbol(self) -> str:
        return "T" if self == Role.TIGER else "G"


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Phase(Enum):
    PLACEMENT = "placement"
    MOVEMENT = "movement"


class GameResult(Enum):
    ONGOING = "ongoing"
    TIGER_WIN = "tiger_win"
    GOAT_WIN = "goat_win"

    @staticmethod
    def for_winner(winner: Optional[Role]) -> "GameResult":
        if winner is None:
            return GameResult.ONGOING
        return GameResult.TIGER_WIN if winner == Role.TIGER else GameResult.GOAT_WIN


def phase_for(goats_placed: int) -> Phase:
    return Phase.PLACEMENT if goats_placed < TOTAL_GOATS else Phase.MOVEMENT


def make_board(tigers: Iterable[int] = TIGER_START_NODES, goats: Iterable[int] = ()) -> BoardArray:
    """Build a read-only board with the given tiger and goat nodes."""
    board = np.zeros(NUM_NODES, dtype=np.int8)
    for node in tigers:
        board[node] = Role.TIGER
    for node in goats:
        if board[node] != EMPTY:
            raise ValueError(f"Node {node} is already occupied.")
        board[node] = Role.GOAT
    return freeze(board)


def freeze(board: BoardArray) -> BoardArray:
    board.flags.writeable = False
    return board


def pieces(board: BoardArray, role: Role) -> Tuple[int, ...]:
    return tuple(int(node) for node in np.flatnonzero(board == int(role)))


def empty_nodes(board: BoardArray) -> Tuple[int, ...]:
    return tuple(int(node) for node in np.flatnonzero(board == EMPTY))


@dataclass(frozen=True)
class Move:
    destination: int
    source: Optional[int] = None
    is_capture: bool = False

    @property
    def is_placement(self) -> bool:
        return self.source is None

    def reverses(self, other: Optional["Move"]) -> bool:
        """True when this slide undoes ``other`` (source and destination swapped)."""
        if other is None or self.source is None or other.source is None:
            return False
        return self.source == other.destination and self.destination == other.source

    def as_tuple(self) -> Tuple[Optional[int], int]:
        return (self.source, self.destination)


@dataclass(frozen=True)
class WinStatus:
    over: bool
    winner: Optional[Role] = None
    reason: str = ""


@dataclass(frozen=True, eq=False)
class Snapshot:
    board: BoardArray
    turn: Role
    goats_placed: int
    goats_captured: int
    last_move: Optional[Move] = None


@dataclass(frozen=True, eq=False)
class GameState:
    board: BoardArray  # shape (24,), dtype=np.int8, values 0 (empty), 1 tiger, 2 goat
    turn: Role = Role.GOAT
    goats_placed: int = 0
    goats_captured: int = 0
    history: Tuple[Snapshot, ...] = field(default_factory=tuple)
    result: GameResult = GameResult.ONGOING
    reason: str = ""
    last_move: Optional[Move] = None

    @property
    def is_terminal(self) -> bool:
        return self.result != GameResult.ONGOING

    @property
    def phase(self) -> Phase:
        return phase_for(self.goats_placed)

    @property
    def winner(self) -> Optional[Role]:
        if self.result == GameResult.TIGER_WIN:
            return Role.TIGER
        if self.result == GameResult.GOAT_WIN:
            return Role.GOAT
        return None

    @property
    def goats_remaining(self) -> int:
        return TOTAL_GOATS - self.goats_placed

    def pieces(self, role: Role) -> Tuple[int, ...]:
        return pieces(self.board, role)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            board=self.board,
            turn=self.turn,
            goats_placed=self.goats_placed,
            goats_captured=self.goats_captured,
            last_move=self.last_move,
        )

    def __repr__(self) -> str:
        return (
            f"GameState(turn={self.turn.name}, placed={self.goats_placed}, "
            f"captured={self.goats_captured}, result={self.result.value})"
        )
