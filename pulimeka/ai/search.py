from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
from loguru import logger

from pulimeka.core import (
    CAPTURES_TO_WIN,
    TOTAL_GOATS,
    BoardArray,
    Move,
    Role,
    apply_move,
    enumerate_moves,
    evaluate_win,
)

from .heuristics import order_moves, score

INF = 10**9


@dataclass
class SearchConfig:
    placement_depth: int = 4
    movement_depth: int = 6
    win_score: int = 20000

    def depth_for(self, goats_placed: int) -> int:
        return self.placement_depth if goats_placed < TOTAL_GOATS else self.movement_depth


@dataclass
class SearchResult:
    move: Optional[Move]
    score: int
    depth: int
    nodes: int
    candidates: int = 0
    fast_path: bool = False


def _without_reversal(moves: Sequence[Move], previous: Optional[Move]) -> List[Move]:
    kept = [move for move in moves if not move.reverses(previous)]
    return kept if kept else list(moves)


class MinimaxSearch:
    """Depth-limited minimax with alpha-beta pruning.

    Scores are always from ``ai_role``'s point of view. Each ply carries the
    last move made by each side so a side is discouraged from immediately
    sliding a piece straight back.
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        *,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.config = config or SearchConfig()
        self.rng = rng or np.random.default_rng()
        self._nodes = 0

    # ------------------------------------------------------------------
    def best_move(
        self,
        board: BoardArray,
        ai_role: Role,
        goats_placed: int,
        goats_captured: int,
        depth: Optional[int] = None,
        *,
        own_previous: Optional[Move] = None,
        opponent_previous: Optional[Move] = None,
    ) -> SearchResult:
        depth = self.config.depth_for(goats_placed) if depth is None else depth
        self._nodes = 0

        moves = order_moves(enumerate_moves(board, ai_role, goats_placed))
        if not moves:
            return SearchResult(move=None, score=-INF, depth=depth, nodes=0)

        if ai_role == Role.TIGER and goats_captured + 1 >= CAPTURES_TO_WIN:
            winning = [move for move in moves if move.is_capture]
            if winning:
                logger.debug(f"Capture threshold reachable, playing {winning[0].as_tuple()}")
                return SearchResult(
                    move=winning[0],
                    score=self.config.win_score + depth,
                    depth=depth,
                    nodes=0,
                    candidates=len(moves),
                    fast_path=True,
                )

        moves = _without_reversal(moves, own_previous)

        best_score = -INF
        best_moves: List[Move] = []
        for move in moves:
            next_board, next_captured = apply_move(board, move, ai_role, goats_captured)
            next_placed = goats_placed + 1 if move.is_placement else goats_placed
            # window opened one below the best so equal scores come back exact
            value = self._minimax(
                next_board,
                depth - 1,
                best_score - 1 if best_score > -INF else -INF,
                INF,
                False,
                ai_role,
                next_placed,
                next_captured,
                mover_previous=opponent_previous,
                other_previous=move,
            )
            if value > best_score:
                best_score = value
                best_moves = [move]
            elif value == best_score:
                best_moves.append(move)

        chosen = best_moves[int(self.rng.integers(len(best_moves)))]
        logger.debug(
            f"{ai_role.name} search depth={depth} nodes={self._nodes} "
            f"score={best_score} tied={len(best_moves)} move={chosen.as_tuple()}"
        )
        return SearchResult(
            move=chosen,
            score=best_score,
            depth=depth,
            nodes=self._nodes,
            candidates=len(moves),
        )

    # ------------------------------------------------------------------
    def _minimax(
        self,
        board: BoardArray,
        depth: int,
        alpha: int,
        beta: int,
        maximizing: bool,
        ai_role: Role,
        goats_placed: int,
        goats_captured: int,
        *,
        mover_previous: Optional[Move],
        other_previous: Optional[Move],
    ) -> int:
        self._nodes += 1
        side = ai_role if maximizing else ai_role.opponent
        win_score = self.config.win_score

        status = evaluate_win(board, goats_captured, side)
        if status.over:
            if status.winner == ai_role:
                return win_score + depth
            return -win_score - depth

        if depth <= 0:
            return score(board, ai_role, goats_captured, goats_placed)

        moves = order_moves(enumerate_moves(board, side, goats_placed))
        moves = _without_reversal(moves, mover_previous)
        if not moves:
            logger.warning(
                f"{side.name} has no moves in a non-terminal position; scoring it as a loss for {side.name}"
            )
            return -win_score - depth if side == ai_role else win_score + depth

        if maximizing:
            value = -INF
            for move in moves:
                next_board, next_captured = apply_move(board, move, side, goats_captured)
                next_placed = goats_placed + 1 if move.is_placement else goats_placed
                value = max(
                    value,
                    self._minimax(
                        next_board,
                        depth - 1,
                        alpha,
                        beta,
                        False,
                        ai_role,
                        next_placed,
                        next_captured,
                        mover_previous=other_previous,
                        other_previous=move,
                    ),
                )
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return value

        value = INF
        for move in moves:
            next_board, next_captured = apply_move(board, move, side, goats_captured)
            next_placed = goats_placed + 1 if move.is_placement else goats_placed
            value = min(
                value,
                self._minimax(
                    next_board,
                    depth - 1,
                    alpha,
                    beta,
                    True,
                    ai_role,
                    next_placed,
                    next_captured,
                    mover_previous=other_previous,
                    other_previous=move,
                ),
            )
            beta = min(beta, value)
            if beta <= alpha:
                break
        return value
