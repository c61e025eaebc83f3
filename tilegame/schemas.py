from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional


class Placement(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    row: int = Field(..., alias='r')
    col: int = Field(..., alias='c')
    letter: str = Field(..., min_length=1, max_length=1)


class Cell(BaseModel):
    letter: Optional[str] = None
    bonus: str = 'NONE'


class PublicPlayer(BaseModel):
    participantId: str
    displayName: str
    rackCount: int


class ChatEntry(BaseModel):
    authorName: str
    message: str
    timestamp: int


class GameSnapshot(BaseModel):
    id: str
    board: List[List[Cell]]
    players: List[PublicPlayer]
    currentPlayerId: Optional[str] = None
    scores: Dict[str, int]
    bagCount: int
    chatLog: List[ChatEntry] = []
    started: bool = False


class MoveResult(BaseModel):
    actorName: str
    placements: List[Placement]
    scoreDelta: int
    words: List[str] = []


class Notice(BaseModel):
    message: str


class ErrorNotice(Notice):
    reason: Optional[str] = None


# Inbound payloads

class JoinPayload(BaseModel):
    gameId: str
    name: Optional[str] = None
    playerId: Optional[str] = None


class PlacePayload(BaseModel):
    gameId: str
    placements: List[Placement] = []


class ChatPayload(BaseModel):
    gameId: str
    message: str


class StateRequest(BaseModel):
    gameId: str
