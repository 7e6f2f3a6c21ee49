import string

import pytest

from mipsudoku.codec import (
    decode,
    DISPLAY_SYMBOLS,
    format_grid_text,
    parse_board,
    parse_grid_text,
    SYMBOLS,
    to_digit,
    to_symbol,
)
from mipsudoku.common import ConfigError
from mipsudoku.model import build_model
from mipsudoku.sudoku import DEMO_ESCARGOT, DEMO_SUDOKU_1

from .helper_functions import flags_from_fixed


def test_to_digit_digits():
    for i, ch in enumerate("123456789"):
        assert to_digit(ch) == i
    assert to_digit("0") == 9


def test_to_digit_letters():
    for i, ch in enumerate(string.ascii_uppercase):
        assert to_digit(ch) == 10 + i
    assert to_digit("A") == 10
    assert to_digit("Z") == 35


def test_to_digit_whole_alphabet():
    assert len(SYMBOLS) == 36
    assert [to_digit(ch) for ch in SYMBOLS] == list(range(36))


def test_to_digit_everything_else_is_unconstrained():
    others = set(string.printable) - set(SYMBOLS)
    assert " " in others and "." in others and "a" in others
    for ch in others:
        assert to_digit(ch) is None, repr(ch)
    assert to_digit("") is None
    assert to_digit("12") is None


def test_to_symbol():
    assert DISPLAY_SYMBOLS[0] == "_"
    assert to_symbol(None) == "_"
    for value in range(36):
        assert to_symbol(value) == SYMBOLS[value]
        assert to_digit(to_symbol(value)) == value


def test_decode_empty():
    model = build_model(rank=2)
    board = decode(model, [False] * model.n_moves)
    assert board == "\n".join(["_|_|_|_"] * 4)


def test_decode_solution(escargot_solution, escargot_board):
    model = build_model(rank=3)
    flags = flags_from_fixed(model, escargot_solution)
    assert decode(model, flags) == escargot_board


def test_decode_tie_break_lowest_value():
    model = build_model(rank=2)
    flags = [False] * model.n_moves
    flags[1] = True  # cell 0, value 1
    flags[3] = True  # cell 0, value 3
    assert decode(model, flags).splitlines()[0] == "2|_|_|_"


def test_decode_wrong_length():
    model = build_model(rank=2)
    with pytest.raises(ValueError):
        decode(model, [False] * (model.n_moves - 1))


def test_decode_rank_4_symbols():
    model = build_model(rank=4)
    fixed = "1234567890ABCDEF" + " " * 240
    board = decode(model, flags_from_fixed(model, fixed))
    assert board.splitlines()[0] == "1|2|3|4|5|6|7|8|9|0|A|B|C|D|E|F"
    assert board.splitlines()[1] == "|".join("_" * 16)


def test_parse_board(escargot_solution, escargot_board):
    assert parse_board(escargot_board, rank=3) == escargot_solution
    assert parse_board("_|2|_|_\n" + "_|_|_|_\n" * 3, rank=2) == \
        " 2" + " " * 14


def test_parse_board_bad_shape():
    with pytest.raises(ConfigError):
        parse_board("1|2|3|4\n3|4|1|2", rank=2)
    with pytest.raises(ConfigError):
        parse_board("1|2|3\n" * 4, rank=2)


def test_parse_board_bad_cell():
    with pytest.raises(ConfigError):
        parse_board("1|2|3|45\n_|_|_|_\n_|_|_|_\n_|_|_|_", rank=2)
    with pytest.raises(ConfigError):
        parse_board("1||3|4\n_|_|_|_\n_|_|_|_\n_|_|_|_", rank=2)


def test_parse_grid_text_demo():
    fixed = parse_grid_text(DEMO_SUDOKU_1, rank=3)
    assert len(fixed) == 81
    assert fixed[:9] == " " * 9
    assert fixed[9:18] == "  23 145 "


def test_parse_grid_text_escargot(escargot):
    assert parse_grid_text(DEMO_ESCARGOT, rank=3) == \
        escargot.replace(".", " ")


def test_parse_grid_text_bad_shape():
    with pytest.raises(ConfigError):
        parse_grid_text("", rank=3)
    with pytest.raises(ConfigError):
        parse_grid_text("12\n34\n", rank=2)
    with pytest.raises(ConfigError):
        parse_grid_text("12 34\n34 12\n21 4\n43 21", rank=2)


def test_parse_grid_text_comments_and_whitespace():
    text = """
    # a comment
    12 34

    34 12
      # indented comment
    21 43
    4 3 2 1
    """
    assert parse_grid_text(text, rank=2) == "1234341221434321"


def test_format_grid_text(escargot):
    text = format_grid_text(escargot, rank=3)
    lines = text.splitlines()
    assert lines[0] == "1.. ..7 .9."
    assert lines[3] == ""
    assert len(lines) == 11
    assert parse_grid_text(text, rank=3) == escargot.replace(".", " ")
