"""
Shared fixtures for the word game server tests.

Sessions get a seeded random source so bag order is reproducible, and the
Socket.IO server is replaced by a recorder that keeps every emit.
"""

import random

import pytest

from tilegame.dictionary import DictionaryService
from tilegame.game_logic import Board
from tilegame.managers.game import GameManager
from tilegame.managers.session import GameSession
from tilegame.schemas import Placement


class FakeSio:
    """Stands in for socketio.AsyncServer and records what would be sent."""

    def __init__(self):
        self.emitted = []
        self.rooms = {}

    async def emit(self, event, data=None, room=None, to=None):
        self.emitted.append({'event': event, 'data': data, 'room': room, 'to': to})

    async def enter_room(self, sid, room):
        self.rooms.setdefault(room, set()).add(sid)

    def events(self, name):
        return [e for e in self.emitted if e['event'] == name]

    def clear(self):
        self.emitted.clear()


def tiles(*specs):
    """tiles((7, 6, 'C'), (7, 7, 'A')) -> list of Placement."""
    return [Placement(row=r, col=c, letter=letter) for r, c, letter in specs]


def word_at(board: Board, row: int, col: int, word: str, vertical: bool = False):
    for i, letter in enumerate(word):
        if vertical:
            board.place(row + i, col, letter)
        else:
            board.place(row, col + i, letter)


@pytest.fixture()
def words():
    return DictionaryService(['cat', 'cats', 'scat', 'ox', 'to', 'at', 'ta', 'taxi', 'ax'])


@pytest.fixture()
def permissive():
    return DictionaryService()


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def session(permissive, rng):
    return GameSession('game-1', permissive, rng)


@pytest.fixture()
def fake_sio():
    return FakeSio()


@pytest.fixture()
def manager(fake_sio, permissive, rng):
    return GameManager(fake_sio, permissive, rng)
