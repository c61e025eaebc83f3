from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import Optional, Type, TypeVar

import pydantic
import socketio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .dictionary import DictionaryService
from .managers.game import GameManager
from .schemas import ChatPayload, JoinPayload, PlacePayload, StateRequest

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

cors_origins = '*' if config.CORS_ORIGIN == '*' else [o.strip() for o in config.CORS_ORIGIN.split(',')]

dictionary = DictionaryService.from_file(config.DICTIONARY_PATH)

# Socket.IO server (ASGI)
sio = socketio.AsyncServer(async_mode='asgi', cors_allowed_origins=cors_origins)
games = GameManager(sio, dictionary)


@asynccontextmanager
async def lifespan(app):
    logger.info('Word game server starting')
    try:
        yield
    finally:
        games.shutdown()
        logger.info('Stop Server')


app = FastAPI(title="Word Tile Server", version="0.1.0", lifespan=lifespan)

# Mount Socket.IO ASGI application
asgi_app = socketio.ASGIApp(sio, other_asgi_app=app)

# CORS for REST
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins if isinstance(cors_origins, list) else ['*'],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

P = TypeVar('P', bound=pydantic.BaseModel)


def _parse(model: Type[P], payload, sid: str) -> Optional[P]:
    try:
        return model.model_validate(payload or {})
    except pydantic.ValidationError as exc:
        logger.warning('Dropping malformed %s from %s: %s', model.__name__, sid, exc.errors())
        return None


# REST Endpoints
@app.get('/')
async def health():
    return { 'status': 'ok', 'games': len(games.games) }

# Dictionary validation REST endpoint
@app.get('/dict/validate')
async def validate_word(word: str):
    return { 'word': word.upper(), 'valid': dictionary.is_valid(word) }

# Socket.IO Events
@sio.event
async def connect(sid, environ, auth=None):
    logger.info('Client connected %s', sid)
    await sio.emit('connected', { 'id': sid }, to=sid)

@sio.event
async def disconnect(sid, reason=None):
    await games.disconnect(sid)

@sio.on('join_game')
async def join_game(sid, payload):
    data = _parse(JoinPayload, payload, sid)
    if not data:
        return
    await games.join(sid, data.gameId, data.name or 'Player', data.playerId or sid)

@sio.on('place_tiles')
async def place_tiles(sid, payload):
    data = _parse(PlacePayload, payload, sid)
    if not data:
        return
    await games.place(sid, data.gameId, data.placements)

@sio.on('chat')
async def chat(sid, payload):
    data = _parse(ChatPayload, payload, sid)
    if not data:
        return
    await games.chat(sid, data.gameId, data.message)

@sio.on('request_state')
async def request_state(sid, payload):
    data = _parse(StateRequest, payload, sid)
    if not data:
        return
    await games.request_state(sid, data.gameId)

# Export ASGI app for uvicorn
application = asgi_app

# For local running: python -m tilegame
