from __future__ import annotations
import asyncio
import logging
import random
from typing import Dict, Iterator, List, Optional

from ..dictionary import DictionaryService
from ..errors import GameError
from ..schemas import Placement
from .broadcaster import StateBroadcaster
from .session import GameSession

logger = logging.getLogger(__name__)


class GameManager:
    """Registry of running games keyed by game id, plus the action entry points.

    Every action touching a game runs under that game's lock, fan-out
    included, so a game's actions apply one at a time. Games never share a
    lock. Games live until ``shutdown``.
    """

    def __init__(self, sio, dictionary: DictionaryService, rng: Optional[random.Random] = None):
        self.sio = sio
        self.dictionary = dictionary
        self.broadcaster = StateBroadcaster(sio)
        self._rng = rng
        self.games: Dict[str, GameSession] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def get(self, game_id: str) -> Optional[GameSession]:
        return self.games.get(game_id)

    def get_or_create(self, game_id: str) -> GameSession:
        if game_id not in self.games:
            rng = random.Random(self._rng.getrandbits(64)) if self._rng else None
            self.games[game_id] = GameSession(game_id, self.dictionary, rng)
            self._locks[game_id] = asyncio.Lock()
            logger.info('Created game %s', game_id)
        return self.games[game_id]

    def sessions(self) -> Iterator[GameSession]:
        return iter(list(self.games.values()))

    def lock_for(self, game_id: str) -> asyncio.Lock:
        return self._locks[game_id]

    def shutdown(self):
        logger.info('Discarding %d game(s)', len(self.games))
        self.games.clear()
        self._locks.clear()

    async def join(self, sid: str, game_id: str, name: str, participant_id: str):
        game = self.get_or_create(game_id)
        async with self.lock_for(game_id):
            player, is_new = game.join(participant_id, sid, name)
            await self.sio.enter_room(sid, game_id)
            verb = 'joined' if is_new else 'reconnected'
            logger.info('%s %s game %s as %s', name, verb, game_id, participant_id)
            await self.broadcaster.system(game, f'{player.name} {verb}.')
            await self.broadcaster.push_state(game)

    async def place(self, sid: str, game_id: str, placements: List[Placement]):
        game = self.get(game_id)
        if not game:
            logger.debug('Ignoring move for unknown game %s', game_id)
            return
        async with self.lock_for(game_id):
            try:
                result = game.place(sid, placements)
            except GameError as exc:
                logger.debug('Rejected move in %s from %s: %s', game_id, sid, exc.reason.value)
                await self.broadcaster.error(sid, exc.detail, exc.reason.value)
                return
            if result is None:
                logger.debug('Ignoring move from unseated connection %s in %s', sid, game_id)
                return
            logger.info('%s scored %d in %s with %s', result.actorName, result.scoreDelta, game_id, result.words)
            await self.broadcaster.move_played(game, result)
            await self.broadcaster.push_state(game)

    async def chat(self, sid: str, game_id: str, message: str):
        game = self.get(game_id)
        if not game:
            return
        async with self.lock_for(game_id):
            entry = game.chat(sid, message)
            await self.broadcaster.chat_message(game, entry)

    async def request_state(self, sid: str, game_id: str):
        game = self.get(game_id)
        if not game:
            return
        async with self.lock_for(game_id):
            await self.broadcaster.send_state(game, sid)

    async def disconnect(self, sid: str):
        for game in self.sessions():
            lock = self._locks.get(game.id)
            if lock is None:
                continue
            async with lock:
                player = game.disconnect(sid)
                if player:
                    await self.broadcaster.system(game, f'{player.name} disconnected.')
