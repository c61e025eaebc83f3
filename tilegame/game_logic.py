from __future__ import annotations
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

BOARD_SIZE = 15
CENTER = (7, 7)
RACK_SIZE = 7

LETTER_COUNTS: Dict[str, int] = {
    'E': 12, 'A': 9, 'I': 9, 'O': 8, 'N': 6, 'R': 6, 'T': 6, 'L': 4, 'S': 4, 'U': 4,
    'D': 4, 'G': 3, 'B': 2, 'C': 2, 'M': 2, 'P': 2, 'F': 2, 'H': 2, 'V': 2, 'W': 2, 'Y': 2,
    'K': 1, 'J': 1, 'X': 1, 'Q': 1, 'Z': 1,
}

TOTAL_TILES = sum(LETTER_COUNTS.values())

LETTER_SCORES: Dict[str, int] = {
    'A': 1, 'B': 3, 'C': 3, 'D': 2, 'E': 1, 'F': 4, 'G': 2, 'H': 4, 'I': 1, 'J': 8,
    'K': 5, 'L': 1, 'M': 3, 'N': 1, 'O': 1, 'P': 3, 'Q': 10, 'R': 1, 'S': 1, 'T': 1,
    'U': 1, 'V': 4, 'W': 4, 'X': 8, 'Y': 4, 'Z': 10,
}


class BonusKind(str, Enum):
    TW = 'TW'
    DW = 'DW'
    TL = 'TL'
    DL = 'DL'
    NONE = 'NONE'


Coord = Tuple[int, int]

BONUS_LAYOUT: Dict[BonusKind, FrozenSet[Coord]] = {
    BonusKind.TW: frozenset({
        (0, 0), (0, 7), (0, 14), (7, 0), (7, 14), (14, 0), (14, 7), (14, 14),
    }),
    BonusKind.DW: frozenset({
        (1, 1), (2, 2), (3, 3), (4, 4), (10, 10), (11, 11), (12, 12), (13, 13),
        (1, 13), (2, 12), (3, 11), (4, 10), (10, 4), (11, 3), (12, 2), (13, 1), (7, 7),
    }),
    BonusKind.TL: frozenset({
        (1, 5), (1, 9), (5, 1), (5, 5), (5, 9), (5, 13),
        (9, 1), (9, 5), (9, 9), (9, 13), (13, 5), (13, 9),
    }),
    BonusKind.DL: frozenset({
        (0, 3), (0, 11), (2, 6), (2, 8), (3, 0), (3, 7), (3, 14),
        (6, 2), (6, 6), (6, 8), (6, 12), (7, 3), (7, 11),
        (8, 2), (8, 6), (8, 8), (8, 12), (11, 0), (11, 7), (11, 14), (12, 6), (12, 8), (14, 3), (14, 11),
    }),
}


def bonus_for(row: int, col: int) -> BonusKind:
    for bonus, coords in BONUS_LAYOUT.items():
        if (row, col) in coords:
            return bonus
    return BonusKind.NONE


@dataclass
class Cell:
    bonus: BonusKind
    letter: Optional[str] = None

    def to_payload(self) -> dict:
        return {'letter': self.letter, 'bonus': self.bonus.value}


class Board:
    """Fixed 15x15 grid. Bonuses are assigned once; letters are set at most once."""

    def __init__(self):
        self.cells: List[List[Cell]] = [
            [Cell(bonus=bonus_for(r, c)) for c in range(BOARD_SIZE)]
            for r in range(BOARD_SIZE)
        ]

    @staticmethod
    def in_bounds(row: int, col: int) -> bool:
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    def letter_at(self, row: int, col: int) -> Optional[str]:
        return self.cells[row][col].letter

    def bonus_at(self, row: int, col: int) -> BonusKind:
        return self.cells[row][col].bonus

    def is_occupied(self, row: int, col: int) -> bool:
        return self.in_bounds(row, col) and self.cells[row][col].letter is not None

    def is_empty(self) -> bool:
        return all(cell.letter is None for row in self.cells for cell in row)

    def letter_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell.letter is not None)

    def place(self, row: int, col: int, letter: str):
        cell = self.cells[row][col]
        if cell.letter is not None:
            raise ValueError(f'cell ({row},{col}) is already occupied')
        cell.letter = letter.upper()

    def copy(self) -> 'Board':
        clone = Board.__new__(Board)
        clone.cells = [[Cell(bonus=cell.bonus, letter=cell.letter) for cell in row] for row in self.cells]
        return clone

    def to_payload(self) -> List[List[dict]]:
        return [[cell.to_payload() for cell in row] for row in self.cells]


class TileBag:
    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self.tiles: List[str] = self.generate_tiles()
        self.shuffle()

    @staticmethod
    def generate_tiles() -> List[str]:
        tiles: List[str] = []
        for letter, count in LETTER_COUNTS.items():
            tiles.extend([letter] * count)
        return tiles

    def shuffle(self):
        # random.shuffle is Fisher-Yates
        self._rng.shuffle(self.tiles)

    def draw(self, n: int) -> List[str]:
        drawn: List[str] = []
        while len(drawn) < n and self.tiles:
            drawn.append(self.tiles.pop())
        return drawn

    def __len__(self) -> int:
        return len(self.tiles)
