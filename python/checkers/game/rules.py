"""Move generation and move application for American checkers.

Both entry points are pure: boards handed in are never modified. Captures are
mandatory, so :func:`legal_moves` returns only jumps whenever one exists.
"""

from __future__ import annotations

from typing import List, Tuple

from .board import BOARD_SIZE, Board, Color, Move, Piece, Square


Direction = Tuple[int, int]

DIAGONALS: Tuple[Direction, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))


def directions(piece: Piece) -> Tuple[Direction, ...]:
    # Kings go all four ways, men only toward the opponent
    if piece.king:
        return DIAGONALS
    return tuple(d for d in DIAGONALS if d[0] == piece.color.forward)


def _in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def legal_moves(board: Board, player: Color) -> List[Move]:
    """Return every legal move for ``player``; an empty list means no move."""

    captures: List[Move] = []
    for square, piece in board.pieces(player):
        _collect_captures(board, square, piece, (), captures)

    if captures:
        return captures

    simple: List[Move] = []
    for square, piece in board.pieces(player):
        simple.extend(simple_moves(board, square, piece))
    return simple


def simple_moves(board: Board, square: Square, piece: Piece) -> List[Move]:
    # Non-capturing single steps
    moves: List[Move] = []
    for d_row, d_col in directions(piece):
        row, col = square.row + d_row, square.col + d_col
        if _in_bounds(row, col) and board.get(row, col) is None:
            moves.append(Move.of(square, Square(row, col)))
    return moves


def _collect_captures(
    board: Board,
    square: Square,
    piece: Piece,
    path: Tuple[Square, ...],
    found: List[Move],
) -> None:
    path = path + (square,)
    expanded = False

    for d_row, d_col in directions(piece):
        land_row, land_col = square.row + 2 * d_row, square.col + 2 * d_col
        if not _in_bounds(land_row, land_col):
            continue
        mid_row, mid_col = square.row + d_row, square.col + d_col
        middle = board.get(mid_row, mid_col)
        if middle is None or middle.color is piece.color:
            continue
        if board.get(land_row, land_col) is not None:
            continue

        # Hop on a scratch copy so sibling branches see the unmodified board
        scratch = board.copy()
        scratch.set(square.row, square.col, None)
        scratch.set(mid_row, mid_col, None)
        scratch.set(land_row, land_col, piece)
        _collect_captures(scratch, Square(land_row, land_col), piece, path, found)
        expanded = True

    # Only chains that cannot be extended are recorded
    if not expanded and len(path) > 1:
        found.append(Move(path))


def apply_move(board: Board, move: Move) -> Board:
    """Return the board after ``move``.

    No legality checking happens here: the path is trusted to be a sequence of
    diagonal steps of one or two rows. Validate against :func:`legal_moves`
    before calling.
    """

    result = board.copy()
    origin = move.origin
    mover = result.piece_at(origin)
    result.set(origin.row, origin.col, None)

    for captured in move.captured_squares():
        result.set(captured.row, captured.col, None)

    destination = move.destination
    if mover is not None:
        mover = mover.promote_if_needed(destination.row)
    result.set(destination.row, destination.col, mover)
    return result


def has_capture(board: Board, player: Color) -> bool:
    moves = legal_moves(board, player)
    return bool(moves) and moves[0].is_capture()


__all__ = ["DIAGONALS", "apply_move", "directions", "has_capture", "legal_moves", "simple_moves"]
