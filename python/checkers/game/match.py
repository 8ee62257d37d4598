"""Per-game session state built on top of :mod:`checkers.game.rules`."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from ..ai import MinimaxAgent
from .board import Board, Color, Move, Square
from .rules import apply_move, legal_moves


class GameResult(Enum):
    ONGOING = "ongoing"
    RED_WIN = "red_win"
    BLACK_WIN = "black_win"

    @classmethod
    def win_for(cls, color: Color) -> "GameResult":
        return cls.RED_WIN if color is Color.RED else cls.BLACK_WIN

    @property
    def winner(self) -> Optional[Color]:
        if self is GameResult.RED_WIN:
            return Color.RED
        if self is GameResult.BLACK_WIN:
            return Color.BLACK
        return None


@dataclass
class MoveResult:
    legal: bool
    move: Optional[Move] = None
    captured: Tuple[Square, ...] = ()
    winner: Optional[Color] = None
    error: Optional[str] = None


class Game:
    """One checkers game between a human side and a minimax opponent."""

    def __init__(
        self,
        ai_depth: int = 3,
        ai_color: Color = Color.BLACK,
        game_id: Optional[str] = None,
    ) -> None:
        self.id = game_id or uuid.uuid4().hex
        self.agent = MinimaxAgent(depth=ai_depth)
        self.ai_color = ai_color
        self.board = Board.initial()
        self.turn = Color.RED  # Red always opens.
        self.result = GameResult.ONGOING

    @property
    def human_color(self) -> Color:
        return self.ai_color.opponent()

    def legal_moves(self) -> List[Move]:
        return legal_moves(self.board, self.turn)

    def apply_player_move(self, player: Color, move: Move) -> MoveResult:
        if self.result is not GameResult.ONGOING:
            return MoveResult(legal=False, error="game_over")
        if player is not self.turn:
            return MoveResult(legal=False, error="not_your_turn")

        if not any(option.path == move.path for option in self.legal_moves()):
            return MoveResult(legal=False, error="illegal_move")

        self._play(move)
        return MoveResult(
            legal=True,
            move=move,
            captured=tuple(move.captured_squares()),
            winner=self.result.winner,
        )

    def ai_move_if_turn(self) -> Optional[Move]:
        if self.result is not GameResult.ONGOING or self.turn is not self.ai_color:
            return None

        move = self.agent.choose_move(self.board, self.ai_color)
        if move is not None:
            self._play(move)
        return move

    def remaining(self, color: Color) -> int:
        return self.board.count(color)

    def ascii(self) -> str:
        return f"Turn: {self.turn.name}\n{self.board.ascii()}"

    def _play(self, move: Move) -> None:
        self.board = apply_move(self.board, move)
        self.turn = self.turn.opponent()
        # The side left without a move loses
        if not legal_moves(self.board, self.turn):
            self.result = GameResult.win_for(self.turn.opponent())


__all__ = ["Game", "GameResult", "MoveResult"]
