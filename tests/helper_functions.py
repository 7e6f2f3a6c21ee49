from typing import List, Sequence

from mipsudoku.codec import to_digit
from mipsudoku.model import SudokuModel


ESCARGOT_ROWS = [
    "1....7.9.",
    ".3..2...8",
    "..96..5..",
    "..53..9..",
    ".1..8...2",
    "6....4...",
    "3......1.",
    ".4......7",
    "..7...3..",
]

ESCARGOT_SOLUTION_ROWS = [
    "162857493",
    "534129678",
    "789643521",
    "475312986",
    "913586742",
    "628794135",
    "356478219",
    "241935867",
    "897261354",
]


def board_from_rows(rows: Sequence[str]) -> str:
    return "\n".join("|".join(row) for row in rows)


def flags_from_fixed(model: SudokuModel, fixed: str) -> List[bool]:
    """
    Sets the move for each symbol in ``fixed`` true, and all others false.
    """
    flags = [False] * model.n_moves
    for cell, char in enumerate(fixed):
        value = to_digit(char)
        if value is not None:
            flags[cell * model.n + value] = True
    return flags
