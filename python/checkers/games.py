"""Game registry for the checkers asyncio server."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple, TypeVar

from .game.board import Color, Move
from .game.match import Game, MoveResult


LOG = logging.getLogger("checkers.games")

T = TypeVar("T")


class GameNotFound(KeyError):
    pass


@dataclass
class GameSlot:
    game: Game
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class GameRegistry:
    """Holds live games by id; each game accepts one mutation at a time.

    Anything that reads a game while another request may be playing on it
    should go through :meth:`view` or the ``render`` hook of :meth:`play`,
    which run under the game's lock.
    """

    def __init__(self, default_depth: int = 3) -> None:
        self.default_depth = default_depth
        self._slots: Dict[str, GameSlot] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, game_id: object) -> bool:
        return game_id in self._slots

    async def create_game(
        self,
        ai_depth: Optional[int] = None,
        ai_color: Color = Color.BLACK,
    ) -> Game:
        depth = self.default_depth if ai_depth is None else ai_depth
        game = Game(ai_depth=depth, ai_color=ai_color)
        async with self._lock:
            self._slots[game.id] = GameSlot(game)
        LOG.info("Created game %s (ai=%s, %s)", game.id, ai_color.name, game.agent.description)
        return game

    def get(self, game_id: str) -> Game:
        return self._slot(game_id).game

    async def view(self, game_id: str, render: Callable[[Game], T]) -> T:
        slot = self._slot(game_id)
        async with slot.lock:
            return render(slot.game)

    async def ai_opening(self, game_id: str) -> Optional[Move]:
        slot = self._slot(game_id)
        async with slot.lock:
            return await asyncio.to_thread(slot.game.ai_move_if_turn)

    async def play(
        self,
        game_id: str,
        move: Move,
        render: Optional[Callable[[Game], T]] = None,
    ) -> Tuple[MoveResult, Optional[Move], Optional[T]]:
        """Apply the human move and the AI reply as one step.

        ``render`` sees the game after the AI reply, before the lock is released.
        It is skipped for rejected moves.
        """
        slot = self._slot(game_id)
        async with slot.lock:
            game = slot.game
            result = game.apply_player_move(game.human_color, move)
            if not result.legal:
                LOG.debug("Game %s rejected %s: %s", game_id, move, result.error)
                return result, None, None

            reply = await asyncio.to_thread(game.ai_move_if_turn)
            if reply is not None:
                LOG.debug("Game %s AI replied %s", game_id, reply)
            if game.result.winner is not None:
                LOG.info("Game %s finished: %s", game_id, game.result.value)
            view = render(game) if render is not None else None
            return result, reply, view

    async def remove(self, game_id: str) -> None:
        if not await self.discard(game_id):
            raise GameNotFound(game_id)

    async def discard(self, game_id: str) -> bool:
        async with self._lock:
            slot = self._slots.pop(game_id, None)
        if slot is None:
            return False
        LOG.info("Removed game %s", game_id)
        return True

    def _slot(self, game_id: str) -> GameSlot:
        try:
            return self._slots[game_id]
        except KeyError as exc:
            raise GameNotFound(game_id) from exc


__all__ = ["GameNotFound", "GameRegistry", "GameSlot"]
