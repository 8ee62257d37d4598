"""JSON-based wire protocol helpers for the checkers server."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from .game.board import Board, Move


Message = Dict[str, Any]
ENCODING = "utf-8"


class ProtocolError(RuntimeError):
    pass


def encode(message: Message) -> bytes:
    """Serialize a message to bytes with a trailing newline."""

    return (json.dumps(message, separators=(",", ":")) + "\n").encode(ENCODING)


def decode(payload: bytes) -> Message:
    """Parse bytes into a Python dictionary."""

    try:
        message = json.loads(payload.decode(ENCODING))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ProtocolError("Malformed payload") from exc
    if not isinstance(message, dict):
        raise ProtocolError("Message must be a JSON object")
    return message


def board_payload(board: Board) -> List[List[Optional[str]]]:
    return board.snapshot()


def move_payload(move: Optional[Move]) -> Optional[List[List[int]]]:
    if move is None:
        return None
    return [[square.row, square.col] for square in move.path]


def parse_path(raw: Any) -> Move:
    """Turn ``[[row, col], ...]`` into a :class:`Move`."""

    if not isinstance(raw, list) or len(raw) < 2:
        raise ProtocolError("path must list at least 2 squares")
    for point in raw:
        if (
            not isinstance(point, list)
            or len(point) != 2
            or not all(isinstance(v, int) and not isinstance(v, bool) for v in point)
        ):
            raise ProtocolError("each square must be a [row, col] pair of integers")
    return Move.from_coords(raw)


async def read_message(reader) -> Message:
    """Read a newline-delimited JSON message from an asyncio StreamReader."""

    line = await reader.readline()
    if not line:
        raise ProtocolError("Connection closed by peer")
    return decode(line.rstrip(b"\r\n"))


async def write_message(writer, message: Message) -> None:
    """Write a JSON message to an asyncio StreamWriter."""

    writer.write(encode(message))
    await writer.drain()
