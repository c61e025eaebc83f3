from __future__ import annotations
from typing import Optional

from ..schemas import ChatEntry, ErrorNotice, MoveResult, Notice
from .session import GameSession


class StateBroadcaster:
    """Fans session state out over Socket.IO rooms (one room per game id)."""

    def __init__(self, sio):
        self.sio = sio

    async def push_state(self, session: GameSession):
        await self.sio.emit('game_state', session.snapshot().model_dump(by_alias=True), room=session.id)
        for sid, rack in session.rack_payloads().items():
            await self.sio.emit('your_rack', rack, to=sid)

    async def send_state(self, session: GameSession, sid: str):
        await self.sio.emit('game_state', session.snapshot().model_dump(by_alias=True), to=sid)
        player = session.player_by_connection(sid)
        if player:
            await self.sio.emit('your_rack', list(player.rack), to=sid)

    async def move_played(self, session: GameSession, result: MoveResult):
        await self.sio.emit('move_played', result.model_dump(by_alias=True), room=session.id)

    async def error(self, sid: str, message: str, reason: Optional[str] = None):
        await self.sio.emit('error_msg', ErrorNotice(message=message, reason=reason).model_dump(), to=sid)

    async def system(self, session: GameSession, message: str):
        await self.sio.emit('system', Notice(message=message).model_dump(), room=session.id)

    async def chat_message(self, session: GameSession, entry: ChatEntry):
        await self.sio.emit('chat_message', entry.model_dump(), room=session.id)
