from __future__ import annotations
from enum import Enum


class RejectReason(str, Enum):
    NO_TILES = 'NoTiles'
    OUT_OF_BOUNDS = 'OutOfBounds'
    CELL_OCCUPIED = 'CellOccupied'
    LETTER_NOT_IN_RACK = 'LetterNotInRack'
    NOT_COLINEAR = 'NotColinear'
    FIRST_MOVE_NOT_CENTER = 'FirstMoveNotCenter'
    NOT_ADJACENT = 'NotAdjacent'
    NON_CONTIGUOUS_MAIN_WORD = 'NonContiguousMainWord'
    WORD_TOO_SHORT = 'WordTooShort'
    WORD_NOT_IN_DICTIONARY = 'WordNotInDictionary'
    NO_WORDS_FORMED = 'NoWordsFormed'
    NOT_YOUR_TURN = 'NotYourTurn'


class GameError(Exception):
    """Non-fatal rejection of a player action. Sent to the acting connection only."""

    def __init__(self, reason: RejectReason, detail: str):
        super().__init__(detail)
        self.reason = reason
        self.detail = detail


class ValidationError(GameError):
    pass


class TurnError(GameError):
    def __init__(self, detail: str = 'Not your turn.'):
        super().__init__(RejectReason.NOT_YOUR_TURN, detail)
