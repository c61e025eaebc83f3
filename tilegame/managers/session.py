from __future__ import annotations
import logging
import random
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..dictionary import DictionaryService
from ..errors import TurnError
from ..game_logic import RACK_SIZE, Board, TileBag
from ..rules import MoveScore, validate_move
from ..schemas import ChatEntry, GameSnapshot, MoveResult, Placement, PublicPlayer

logger = logging.getLogger(__name__)


@dataclass
class Player:
    participant_id: str
    connection_id: str
    name: str
    rack: List[str] = field(default_factory=list)

    def to_public(self) -> PublicPlayer:
        return PublicPlayer(participantId=self.participant_id, displayName=self.name, rackCount=len(self.rack))


class GameSession:
    """One running game: board, bag, roster, turn pointer, scores and chat log.

    ``started`` flips to True on the first accepted move and never reverts.
    The turn pointer is a position in ``players``, which is kept in join order.
    """

    def __init__(self, game_id: str, dictionary: DictionaryService, rng: Optional[random.Random] = None):
        self.id = game_id
        self.dictionary = dictionary
        self.board = Board()
        self.bag = TileBag(rng)
        self.players: List[Player] = []
        self.turn_index: int = 0
        self.scores: Dict[str, int] = {}
        self.started: bool = False
        self.chat_log: List[ChatEntry] = []

    @property
    def current_player(self) -> Optional[Player]:
        if not self.players:
            return None
        return self.players[self.turn_index]

    def player_by_connection(self, connection_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.connection_id == connection_id), None)

    def player_by_participant(self, participant_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.participant_id == participant_id), None)

    def join(self, participant_id: str, connection_id: str, name: str) -> Tuple[Player, bool]:
        """Add a new player or rebind a known one. Returns ``(player, is_new)``."""
        player = self.player_by_participant(participant_id)
        if player:
            player.connection_id = connection_id
            player.name = name
            return player, False
        player = Player(
            participant_id=participant_id,
            connection_id=connection_id,
            name=name,
            rack=self.bag.draw(RACK_SIZE),
        )
        self.players.append(player)
        self.scores.setdefault(participant_id, 0)
        return player, True

    def place(self, connection_id: str, placements: Sequence[Placement]) -> Optional[MoveResult]:
        """Validate and apply a move.

        Returns None when the connection is not seated in this game. Raises
        TurnError or ValidationError without touching any state.
        """
        player = self.player_by_connection(connection_id)
        if not player:
            return None
        if self.current_player is not player:
            raise TurnError()

        result: MoveScore = validate_move(
            self.board, placements, player.rack, self.dictionary, board_empty=self.board.is_empty(),
        )

        for p in placements:
            letter = p.letter.upper()
            self.board.place(p.row, p.col, letter)
            player.rack.remove(letter)
        player.rack.extend(self.bag.draw(RACK_SIZE - len(player.rack)))
        self.scores[player.participant_id] = self.scores.get(player.participant_id, 0) + result.score
        self.started = True
        self.turn_index = (self.turn_index + 1) % len(self.players)

        return MoveResult(
            actorName=player.name,
            placements=list(placements),
            scoreDelta=result.score,
            words=result.words,
        )

    def chat(self, connection_id: str, message: str) -> ChatEntry:
        player = self.player_by_connection(connection_id)
        entry = ChatEntry(
            authorName=player.name if player else 'Anon',
            message=message,
            timestamp=int(time.time() * 1000),
        )
        self.chat_log.append(entry)
        return entry

    def disconnect(self, connection_id: str) -> Optional[Player]:
        # Seat, rack and score are kept so the participant can reconnect.
        return self.player_by_connection(connection_id)

    def rack_payloads(self) -> Dict[str, List[str]]:
        return {p.connection_id: list(p.rack) for p in self.players}

    def tile_total(self) -> int:
        return self.board.letter_count() + sum(len(p.rack) for p in self.players) + len(self.bag)

    def snapshot(self) -> GameSnapshot:
        current = self.current_player
        return GameSnapshot(
            id=self.id,
            board=self.board.to_payload(),
            players=[p.to_public() for p in self.players],
            currentPlayerId=current.participant_id if current else None,
            scores=dict(self.scores),
            bagCount=len(self.bag),
            chatLog=list(self.chat_log),
            started=self.started,
        )
