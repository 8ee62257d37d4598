from __future__ import annotations

import logging
import math
from typing import List, Optional

from .game.board import Board, Color, Move
from .game.rules import apply_move, legal_moves


LOG = logging.getLogger("checkers.ai")

Score = float

MAN_VALUE = 1.0
KING_VALUE = 2.5
MOBILITY_WEIGHT = 0.05


class SearchConfigError(ValueError):
    pass


def evaluate(board: Board, root: Color) -> Score:
    # Material plus a small mobility term, from root's side
    material = 0.0
    for _, piece in board.pieces():
        value = KING_VALUE if piece.king else MAN_VALUE
        material += value if piece.color is root else -value

    mobility = len(legal_moves(board, root)) - len(legal_moves(board, root.opponent()))
    return material + MOBILITY_WEIGHT * mobility


class MinimaxAgent:
    """Fixed-depth minimax without pruning.

    Every node inside the depth bound is visited, so the chosen move depends
    only on the board, the colour and ``depth``. Ties go to the move that
    :func:`legal_moves` lists first.
    """

    def __init__(self, depth: int = 3) -> None:
        if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
            raise SearchConfigError(f"search depth must be a positive integer, got {depth!r}")
        self.depth = depth
        self.nodes = 0

    def choose_move(self, board: Board, color: Color) -> Optional[Move]:
        moves = legal_moves(board, color)
        if not moves:
            return None
        if len(moves) == 1:
            return moves[0]

        self.nodes = 0
        best_score = -math.inf
        best_move: Optional[Move] = None

        for move in moves:
            score = self.minimax(apply_move(board, move), color.opponent(), color, 1)
            if best_move is None or score > best_score:
                best_score = score
                best_move = move

        LOG.debug("%s picked %s (score=%s, nodes=%d)", self.description, best_move, best_score, self.nodes)
        return best_move

    def minimax(self, board: Board, current: Color, root: Color, ply: int) -> Score:
        # Depth-limited minimax core
        self.nodes += 1
        if ply >= self.depth:
            return evaluate(board, root)

        moves = legal_moves(board, current)
        if not moves:
            return -math.inf if current is root else math.inf

        scores = [self.minimax(apply_move(board, move), current.opponent(), root, ply + 1) for move in moves]
        if current is root:
            return max(scores)
        return min(scores)

    @property
    def description(self) -> str:
        return f"Minimax(depth={self.depth})"


class GreedyAgent:
    """One-ply opponent: grab the biggest capture, else play safe."""

    def choose_move(self, board: Board, color: Color) -> Optional[Move]:
        moves = legal_moves(board, color)
        if not moves:
            return None
        if len(moves) == 1:
            return moves[0]

        captures = [move for move in moves if move.is_capture()]
        if captures:
            return max(captures, key=lambda move: len(move.path) - 1)

        safe = [move for move in moves if self._threats_after(board, move, color) == 0]
        if safe:
            return max(safe, key=lambda move: self._safety(move, color))

        return min(moves, key=lambda move: self._threats_after(board, move, color))

    @staticmethod
    def _threats_after(board: Board, move: Move, color: Color) -> int:
        replies: List[Move] = legal_moves(apply_move(board, move), color.opponent())
        return sum(1 for reply in replies if reply.is_capture())

    @staticmethod
    def _safety(move: Move, color: Color) -> float:
        # Prefer staying near home and in the centre columns
        row = move.destination.row
        score = (7 - row) * 0.1 if color is Color.BLACK else row * 0.1
        if 2 <= move.destination.col <= 5:
            score += 0.05
        return score

    @property
    def description(self) -> str:
        return "Greedy"


__all__ = ["GreedyAgent", "MinimaxAgent", "SearchConfigError", "evaluate"]
