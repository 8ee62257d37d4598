from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple


BOARD_SIZE = 8


class Color(Enum):
    RED = "red"
    BLACK = "black"

    # Flip between players
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.RED else Color.RED

    @property
    def back_rank(self) -> int:
        """Row on which this colour's men are crowned."""

        return 0 if self is Color.RED else BOARD_SIZE - 1

    @property
    def forward(self) -> int:
        return -1 if self is Color.RED else 1


@dataclass(frozen=True)
class Square:
    row: int
    col: int

    @property
    def on_board(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE

    @property
    def playable(self) -> bool:
        return (self.row + self.col) % 2 == 1

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


@dataclass(frozen=True)
class Piece:
    color: Color
    king: bool = False

    def crowned(self) -> "Piece":
        if self.king:
            return self
        return Piece(self.color, True)

    def promote_if_needed(self, row: int) -> "Piece":
        if not self.king and row == self.color.back_rank:
            return self.crowned()
        return self

    @property
    def code(self) -> str:
        base = "r" if self.color is Color.RED else "b"
        return base + "k" if self.king else base

    @property
    def symbol(self) -> str:
        base = "r" if self.color is Color.RED else "b"
        return base.upper() if self.king else base


@dataclass(frozen=True)
class Move:
    """An ordered path of squares; steps of two rows are jumps."""

    path: Tuple[Square, ...]

    def __post_init__(self) -> None:
        if len(self.path) < 2:
            raise ValueError("Move path must have at least 2 squares")
        object.__setattr__(self, "path", tuple(self.path))

    @classmethod
    def of(cls, *squares: Square) -> "Move":
        return cls(tuple(squares))

    @classmethod
    def from_coords(cls, coords: Iterable[Sequence[int]]) -> "Move":
        return cls(tuple(Square(int(row), int(col)) for row, col in coords))

    @property
    def origin(self) -> Square:
        return self.path[0]

    @property
    def destination(self) -> Square:
        return self.path[-1]

    def steps(self) -> Iterator[Tuple[Square, Square]]:
        return zip(self.path, self.path[1:])

    def is_capture(self) -> bool:
        return any(abs(b.row - a.row) == 2 for a, b in self.steps())

    def captured_squares(self) -> List[Square]:
        return [
            Square((a.row + b.row) // 2, (a.col + b.col) // 2)
            for a, b in self.steps()
            if abs(b.row - a.row) == 2
        ]

    def __str__(self) -> str:
        parts = [str(self.path[0])]
        for a, b in self.steps():
            parts.append("x" if abs(b.row - a.row) == 2 else "-")
            parts.append(str(b))
        return " ".join(parts)


class Board:
    """8x8 grid of optional pieces.

    Engine code never mutates a board it was handed: every transition works
    on :meth:`copy`, so boards can be shared freely between searches.
    """

    def __init__(self, cells: Optional[List[Optional[Piece]]] = None) -> None:
        if cells is None:
            cells = [None] * (BOARD_SIZE * BOARD_SIZE)
        self._cells: List[Optional[Piece]] = list(cells)

    @classmethod
    def initial(cls) -> "Board":
        # BLACK on rows 0-2, RED on rows 5-7, dark squares only
        board = cls()
        for row in range(BOARD_SIZE):
            if row in (3, 4):
                continue
            color = Color.BLACK if row < 3 else Color.RED
            for col in range(BOARD_SIZE):
                if (row + col) % 2 == 1:
                    board.set(row, col, Piece(color))
        return board

    def get(self, row: int, col: int) -> Optional[Piece]:
        return self._cells[row * BOARD_SIZE + col]

    def set(self, row: int, col: int, piece: Optional[Piece]) -> None:
        self._cells[row * BOARD_SIZE + col] = piece

    def piece_at(self, square: Square) -> Optional[Piece]:
        return self.get(square.row, square.col)

    def copy(self) -> "Board":
        return Board(self._cells)

    def pieces(self, color: Optional[Color] = None) -> Iterator[Tuple[Square, Piece]]:
        # Row-major scan
        for index, piece in enumerate(self._cells):
            if piece is None:
                continue
            if color is not None and piece.color is not color:
                continue
            yield Square(*divmod(index, BOARD_SIZE)), piece

    def count(self, color: Color) -> int:
        return sum(1 for piece in self._cells if piece is not None and piece.color is color)

    def snapshot(self) -> List[List[Optional[str]]]:
        return [
            [None if piece is None else piece.code for piece in self._cells[row * BOARD_SIZE:(row + 1) * BOARD_SIZE]]
            for row in range(BOARD_SIZE)
        ]

    def ascii(self) -> str:
        separator = "  +" + "---+" * BOARD_SIZE
        lines = ["    " + "   ".join(str(col) for col in range(BOARD_SIZE)), separator]
        for row in range(BOARD_SIZE):
            cells = []
            for col in range(BOARD_SIZE):
                piece = self.get(row, col)
                if piece is not None:
                    cells.append(f" {piece.symbol} ")
                elif (row + col) % 2 == 0:
                    cells.append(" * ")
                else:
                    cells.append("   ")
            lines.append(f"{row} |" + "|".join(cells) + "|")
            lines.append(separator)
        return "\n".join(lines) + "\n"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __str__(self) -> str:
        return self.ascii()


__all__ = ["BOARD_SIZE", "Board", "Color", "Move", "Piece", "Square"]
