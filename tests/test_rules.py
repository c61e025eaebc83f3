"""
Tests for move validation and scoring.
"""

import pytest

from conftest import tiles, word_at
from tilegame.dictionary import DictionaryService
from tilegame.errors import RejectReason, ValidationError
from tilegame.game_logic import Board
from tilegame.rules import score_word, validate_move


def rejects(reason, board, placements, rack, dictionary, board_empty=None):
    with pytest.raises(ValidationError) as info:
        validate_move(board, placements, rack, dictionary, board_empty=board_empty)
    assert info.value.reason == reason
    return info.value


@pytest.fixture()
def cat_board():
    board = Board()
    word_at(board, 7, 6, 'CAT')
    return board


def test_first_move_cat_scores_double_word(words):
    """C(3) + A(1) + T(1), doubled by the centre square."""
    result = validate_move(Board(), tiles((7, 6, 'C'), (7, 7, 'A'), (7, 8, 'T')), list('CATXYZQ'), words)
    assert result.score == 10
    assert result.words == ['CAT']


def test_lowercase_letters_are_accepted(words):
    result = validate_move(Board(), tiles((7, 6, 'c'), (7, 7, 'a'), (7, 8, 't')), list('CAT'), words)
    assert result.words == ['CAT']


def test_no_tiles(words):
    rejects(RejectReason.NO_TILES, Board(), [], list('CAT'), words)


def test_out_of_bounds(words):
    rejects(RejectReason.OUT_OF_BOUNDS, Board(), tiles((15, 0, 'C')), list('CAT'), words)
    rejects(RejectReason.OUT_OF_BOUNDS, Board(), tiles((7, 7, 'C'), (7, -1, 'A')), list('CAT'), words)


def test_bounds_checked_before_occupancy(cat_board, words):
    rejects(RejectReason.OUT_OF_BOUNDS, cat_board, tiles((7, 7, 'C'), (7, 15, 'A')), list('CAT'), words)


def test_cell_occupied(cat_board, words):
    rejects(RejectReason.CELL_OCCUPIED, cat_board, tiles((7, 8, 'S')), list('S'), words)


def test_duplicate_coordinates_rejected(words):
    rejects(RejectReason.CELL_OCCUPIED, Board(), tiles((7, 7, 'A'), (7, 7, 'T')), list('AT'), words)


def test_letter_not_in_rack(words):
    err = rejects(RejectReason.LETTER_NOT_IN_RACK, Board(), tiles((7, 7, 'Q')), list('CAT'), words)
    assert 'Q' in err.detail


def test_rack_duplicates_are_counted(words):
    rejects(RejectReason.LETTER_NOT_IN_RACK, Board(), tiles((7, 7, 'T'), (7, 8, 'T')), list('TA'), words)


def test_not_colinear(words):
    rejects(RejectReason.NOT_COLINEAR, Board(), tiles((7, 7, 'A'), (8, 8, 'T')), list('AT'), words)


def test_first_move_must_cover_center(words):
    board = Board()
    rejects(
        RejectReason.FIRST_MOVE_NOT_CENTER, board,
        tiles((7, 8, 'C'), (7, 9, 'A'), (7, 10, 'T')), list('CAT'), words,
    )
    assert board.is_empty()


def test_not_adjacent(cat_board, words):
    rejects(RejectReason.NOT_ADJACENT, cat_board, tiles((0, 0, 'T'), (0, 1, 'O')), list('TO'), words)


def test_non_contiguous(words):
    rejects(RejectReason.NON_CONTIGUOUS_MAIN_WORD, Board(), tiles((7, 7, 'A'), (7, 9, 'T')), list('AT'), words)


def test_existing_letters_fill_the_gap(cat_board, permissive):
    result = validate_move(cat_board, tiles((7, 5, 'S'), (7, 9, 'S')), list('SS'), permissive)
    assert result.words == ['SCATS']


def test_word_not_in_dictionary(cat_board, words):
    err = rejects(RejectReason.WORD_NOT_IN_DICTIONARY, cat_board, tiles((7, 9, 'Z')), list('Z'), words)
    assert '"CATZ"' in err.detail


def test_cross_word_not_in_dictionary(cat_board):
    no_to = DictionaryService(['cat', 'ox'])
    err = rejects(RejectReason.WORD_NOT_IN_DICTIONARY, cat_board, tiles((8, 8, 'O'), (8, 9, 'X')), list('OX'), no_to)
    assert '"TO"' in err.detail
    assert err.detail.startswith('Cross')


def test_permissive_dictionary_accepts_anything(cat_board, permissive):
    result = validate_move(cat_board, tiles((7, 9, 'Z'), (7, 10, 'Q')), list('ZQ'), permissive)
    assert result.words == ['CATZQ']


def test_extending_does_not_reuse_bonus(cat_board, words):
    """The centre square was used by CAT; CATS is worth face value only."""
    result = validate_move(cat_board, tiles((7, 9, 'S')), list('S'), words)
    assert result.words == ['CATS']
    assert result.score == 6


def test_cross_word_scoring(cat_board, words):
    """OX on row 8 forms TO downward. The DL at (8,8) only doubles the new O."""
    result = validate_move(cat_board, tiles((8, 8, 'O'), (8, 9, 'X')), list('OXA'), words)
    assert result.words == ['OX', 'TO']
    # OX: O*2 + X = 10; TO: T + O*2 = 3
    assert result.score == 13


def test_single_tile_reads_along_its_row(words):
    """A lone tile extending a column word only has a one-letter row word."""
    board = Board()
    word_at(board, 6, 7, 'AT', vertical=True)
    rejects(RejectReason.WORD_TOO_SHORT, board, tiles((5, 7, 'C')), list('C'), words)
    assert board.letter_at(5, 7) is None


def test_too_short_is_reported_before_no_words(permissive):
    """With an occupied board, a move without a row word stops at the length check."""
    board = Board()
    word_at(board, 7, 7, 'A')
    err = rejects(RejectReason.WORD_TOO_SHORT, board, tiles((8, 7, 'T')), list('T'), permissive)
    assert err.reason != RejectReason.NO_WORDS_FORMED


def test_single_tile_forms_row_and_column_words(permissive):
    board = Board()
    word_at(board, 7, 7, 'A')
    word_at(board, 8, 8, 'X')
    result = validate_move(board, tiles((8, 7, 'A')), list('A'), permissive)
    assert result.words == ['AX', 'AA']
    assert result.score == 9 + 2


def test_single_tile_on_empty_board(words):
    result = validate_move(Board(), tiles((7, 7, 'A')), list('A'), words)
    assert result.score == 0
    assert result.words == []


def test_validation_does_not_mutate(cat_board, words):
    rack = list('OXA')
    before = cat_board.to_payload()
    validate_move(cat_board, tiles((8, 8, 'O'), (8, 9, 'X')), rack, words)
    assert cat_board.to_payload() == before
    assert rack == list('OXA')


def test_word_multipliers_stack():
    board = Board()
    for col, letter in enumerate('ABCDEFGH'):
        board.place(0, col, letter)
    cells = [(0, col, board.letter_at(0, col)) for col in range(8)]
    placed = {(0, col) for col in range(8)}
    # 1+3+3+(2*2)+1+4+2+4 = 22, two triple-word squares
    assert score_word(board, cells, placed) == 22 * 9
    # nothing new: face value
    assert score_word(board, cells, set()) == 1 + 3 + 3 + 2 + 1 + 4 + 2 + 4
