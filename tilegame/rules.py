"""Move validation and scoring.

``validate_move`` is a pure function of the board, the proposed placements,
the acting player's rack and the dictionary. It either returns a
:class:`MoveScore` or raises :class:`~tilegame.errors.ValidationError`; it never
mutates any of its inputs.
"""
from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .dictionary import DictionaryService
from .errors import RejectReason, ValidationError
from .game_logic import CENTER, LETTER_SCORES, Board, BonusKind, Coord
from .schemas import Placement

LETTER_MULTIPLIERS = {BonusKind.DL: 2, BonusKind.TL: 3}
WORD_MULTIPLIERS = {BonusKind.DW: 2, BonusKind.TW: 3}

# (row, col, letter)
WordCells = List[Tuple[int, int, str]]


@dataclass
class MoveScore:
    score: int
    words: List[str] = field(default_factory=list)


def _check_bounds(placements: Sequence[Placement]):
    for p in placements:
        if not Board.in_bounds(p.row, p.col):
            raise ValidationError(RejectReason.OUT_OF_BOUNDS, 'Placement out of bounds.')


def _check_vacant(board: Board, placements: Sequence[Placement]):
    seen: Set[Coord] = set()
    for p in placements:
        if board.letter_at(p.row, p.col) is not None or (p.row, p.col) in seen:
            raise ValidationError(RejectReason.CELL_OCCUPIED, 'Cannot place on occupied cell.')
        seen.add((p.row, p.col))


def _check_rack(placements: Sequence[Placement], rack: Iterable[str]):
    available = Counter(rack)
    for p in placements:
        letter = p.letter.upper()
        if available[letter] <= 0:
            raise ValidationError(RejectReason.LETTER_NOT_IN_RACK, f'You do not have letter {letter}.')
        available[letter] -= 1


def _touches_existing(board: Board, placements: Sequence[Placement]) -> bool:
    for p in placements:
        for dr, dc in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            if board.is_occupied(p.row + dr, p.col + dc):
                return True
    return False


def _run(board: Board, row: int, col: int, dr: int, dc: int) -> WordCells:
    """Maximal run of occupied cells through (row, col) along (dr, dc)."""
    while board.is_occupied(row - dr, col - dc):
        row, col = row - dr, col - dc
    cells: WordCells = []
    while board.is_occupied(row, col):
        cells.append((row, col, board.letter_at(row, col)))
        row, col = row + dr, col + dc
    return cells


def score_word(board: Board, cells: WordCells, placed: Set[Coord]) -> int:
    """Bonus squares count only under letters placed in the current move."""
    total = 0
    word_mult = 1
    for r, c, letter in cells:
        letter_mult = 1
        if (r, c) in placed:
            bonus = board.bonus_at(r, c)
            letter_mult = LETTER_MULTIPLIERS.get(bonus, 1)
            word_mult *= WORD_MULTIPLIERS.get(bonus, 1)
        total += LETTER_SCORES.get(letter, 0) * letter_mult
    return total * word_mult


def validate_move(
    board: Board,
    placements: Sequence[Placement],
    rack: Iterable[str],
    dictionary: DictionaryService,
    board_empty: Optional[bool] = None,
) -> MoveScore:
    if not placements:
        raise ValidationError(RejectReason.NO_TILES, 'No tiles placed.')

    _check_bounds(placements)
    _check_vacant(board, placements)
    _check_rack(placements, rack)

    rows = {p.row for p in placements}
    cols = {p.col for p in placements}
    same_row = len(rows) == 1
    same_col = len(cols) == 1
    if not same_row and not same_col:
        raise ValidationError(RejectReason.NOT_COLINEAR, 'Tiles must be in a straight line.')

    if board_empty is None:
        board_empty = board.is_empty()
    if board_empty:
        if not any((p.row, p.col) == CENTER for p in placements):
            raise ValidationError(RejectReason.FIRST_MOVE_NOT_CENTER, 'First move must cover the center square.')
    elif not _touches_existing(board, placements):
        raise ValidationError(RejectReason.NOT_ADJACENT, 'Move must connect to existing tiles.')

    hypothetical = board.copy()
    for p in placements:
        hypothetical.place(p.row, p.col, p.letter)
    placed = {(p.row, p.col) for p in placements}

    anchor = placements[0]
    if same_row:
        span = [(anchor.row, c) for c in range(min(cols), max(cols) + 1)]
    else:
        span = [(r, anchor.col) for r in range(min(rows), max(rows) + 1)]
    if not all(hypothetical.is_occupied(r, c) for r, c in span):
        raise ValidationError(RejectReason.NON_CONTIGUOUS_MAIN_WORD, 'Main word must be contiguous.')

    # a lone tile reads along its row
    dr, dc = (0, 1) if same_row else (1, 0)
    main_cells = _run(hypothetical, anchor.row, anchor.col, dr, dc)
    main_word = ''.join(letter for _, _, letter in main_cells)
    has_main = len(main_word) >= 2
    if not has_main and not board_empty:
        raise ValidationError(RejectReason.WORD_TOO_SHORT, 'Main word too short.')

    formed: List[Tuple[str, WordCells]] = []
    if has_main:
        formed.append((main_word, main_cells))
    for p in placements:
        cross_cells = _run(hypothetical, p.row, p.col, dc, dr)
        if len(cross_cells) >= 2:
            formed.append((''.join(letter for _, _, letter in cross_cells), cross_cells))

    for index, (word, _) in enumerate(formed):
        if not dictionary.is_valid(word):
            kind = 'Main' if index == 0 and has_main else 'Cross'
            raise ValidationError(RejectReason.WORD_NOT_IN_DICTIONARY, f'{kind} word "{word}" not in dictionary.')

    # only an empty board gets here with no words; the length check above covers the rest
    if not formed and not board_empty:
        raise ValidationError(RejectReason.NO_WORDS_FORMED, 'Move must create at least one valid word.')

    score = sum(score_word(hypothetical, cells, placed) for _, cells in formed)
    return MoveScore(score=score, words=[word for word, _ in formed])
