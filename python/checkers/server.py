"""Asyncio-powered server letting clients play checkers against the AI."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from typing import Optional, Set

from .ai import SearchConfigError
from .game.board import Color
from .game.match import Game
from .games import GameNotFound, GameRegistry
from .protocol import (
    Message,
    ProtocolError,
    board_payload,
    move_payload,
    parse_path,
    read_message,
    write_message,
)


LOG = logging.getLogger("checkers.server")

COLORS = {"red": Color.RED, "black": Color.BLACK}


def _game_state(game: Game) -> Message:
    return {
        "game_id": game.id,
        "turn": game.turn.name,
        "result": game.result.name,
    }


def _board_reply(game: Game, fmt: str) -> Message:
    reply: Message = {"type": "board", **_game_state(game)}
    if fmt == "ascii":
        reply["ascii"] = game.ascii()
    else:
        reply["board"] = board_payload(game.board)
    return reply


def _moves_reply(game: Game) -> Message:
    return {
        "type": "legal_moves",
        **_game_state(game),
        "moves": [move_payload(move) for move in game.legal_moves()],
    }


class CheckersServer:
    def __init__(self, host: str = "127.0.0.1", port: int = 11112, default_depth: int = 3) -> None:
        self.host = host
        self.port = port
        self.games = GameRegistry(default_depth=default_depth)
        self._server: Optional[asyncio.base_events.Server] = None

    async def start(self) -> None:
        self._server = await asyncio.start_server(self._handle_client, self.host, self.port)
        addr = ", ".join(str(sock.getsockname()) for sock in self._server.sockets)
        LOG.info("Server listening on %s", addr)

    @property
    def bound_port(self) -> int:
        assert self._server is not None
        return self._server.sockets[0].getsockname()[1]

    async def serve_forever(self) -> None:
        if self._server is None:
            await self.start()
        assert self._server is not None
        async with self._server:
            await self._server.serve_forever()

    async def close(self) -> None:
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()

    async def _handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        peer = writer.get_extra_info("peername")
        LOG.info("Connection from %s", peer)
        owned: Set[str] = set()

        try:
            await self._session_loop(reader, writer, owned)
        except ProtocolError as exc:
            LOG.warning("Protocol error with %s: %s", peer, exc)
        except (asyncio.IncompleteReadError, ConnectionResetError):
            LOG.info("Client %s closed connection", peer)
        except Exception:  # pragma: no cover - unexpected failure
            LOG.exception("Unexpected error handling client %s", peer)
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except ConnectionError:  # pragma: no cover
                pass
            # Games die with the connection that created them
            for game_id in owned:
                await self.games.discard(game_id)

    async def _session_loop(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        owned: Set[str],
    ) -> None:
        while True:
            message = await read_message(reader)
            msg_type = message.get("type")

            if msg_type in {"logout", "quit"}:
                await write_message(writer, {"type": "goodbye"})
                break

            try:
                reply = await self.dispatch(message)
            except GameNotFound:
                reply = {"type": "error", "code": "game_not_found", "game_id": message.get("game_id")}
            if reply["type"] == "game_created":
                owned.add(reply["game_id"])
            elif reply["type"] == "game_ended":
                owned.discard(reply["game_id"])
            await write_message(writer, reply)

    async def dispatch(self, message: Message) -> Message:
        msg_type = message.get("type")

        if msg_type == "new_game":
            return await self._new_game(message)
        if msg_type == "board":
            fmt = str(message.get("format", "json")).lower()
            return await self.games.view(str(message.get("game_id")), lambda game: _board_reply(game, fmt))
        if msg_type == "moves":
            return await self.games.view(str(message.get("game_id")), _moves_reply)
        if msg_type == "move":
            return await self._move(message)
        if msg_type == "end_game":
            game_id = str(message.get("game_id"))
            await self.games.remove(game_id)
            return {"type": "game_ended", "game_id": game_id}

        return {"type": "error", "code": "unknown_command", "received": msg_type}

    async def _new_game(self, message: Message) -> Message:
        you_color = COLORS.get(str(message.get("you_color", "red")).lower())
        if you_color is None:
            return {"type": "error", "code": "invalid_color"}

        try:
            game = await self.games.create_game(
                ai_depth=message.get("ai_depth"),
                ai_color=you_color.opponent(),
            )
        except SearchConfigError as exc:
            return {"type": "error", "code": "invalid_depth", "detail": str(exc)}

        opening = await self.games.ai_opening(game.id)
        return {
            "type": "game_created",
            **_game_state(game),
            "you_color": you_color.value,
            "ai_move": move_payload(opening),
            "board": board_payload(game.board),
            "ascii": game.ascii(),
        }

    async def _move(self, message: Message) -> Message:
        game_id = str(message.get("game_id"))
        # Unknown games win over malformed paths
        self.games.get(game_id)
        try:
            move = parse_path(message.get("path"))
        except ProtocolError as exc:
            return {"type": "error", "code": "invalid_path", "detail": str(exc)}

        def render(game: Game) -> Message:
            return {
                **_game_state(game),
                "board": board_payload(game.board),
                "ascii": game.ascii(),
            }

        result, reply, state = await self.games.play(game_id, move, render=render)
        if not result.legal:
            return {"type": "move_rejected", "game_id": game_id, "reason": result.error}

        return {
            "type": "move_accepted",
            **state,
            "move": move_payload(move),
            "captured": [[sq.row, sq.col] for sq in result.captured],
            "ai_move": move_payload(reply),
        }


async def amain(args: argparse.Namespace) -> None:
    server = CheckersServer(host=args.host, port=args.port, default_depth=args.default_depth)
    await server.start()
    await server.serve_forever()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Checkers game server")
    parser.add_argument("--host", default=os.getenv("CHECKERS_HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.getenv("CHECKERS_PORT", "11112")))
    parser.add_argument("--default-depth", type=int, default=int(os.getenv("CHECKERS_AI_DEPTH", "3")))
    parser.add_argument("--log-level", default="INFO")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    if args.default_depth < 1:
        raise SystemExit("--default-depth must be a positive integer")

    try:
        asyncio.run(amain(args))
    except KeyboardInterrupt:
        LOG.info("Server shutting down")


if __name__ == "__main__":
    main()
