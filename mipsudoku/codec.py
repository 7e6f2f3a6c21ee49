#!/usr/bin/env python

"""
mipsudoku/codec.py

===============================================================================

    Copyright (C) 2019-2019 Rudolf Cardinal (rudolf@pobox.com).

    This is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This software is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
    GNU General Public License for more details.

    You should have received a copy of the GNU General Public License
    along with this software. If not, see <http://www.gnu.org/licenses/>.

===============================================================================

**Converts between puzzle text and moves.**

Three text formats are understood:

- The *fixed string*: a flat string of ``n * n`` characters, read row by row.
  Each character is a symbol from :data:`SYMBOLS` (a given) or anything else
  (conventionally a space; no constraint).

- The *board*: what :func:`decode` produces. ``n`` lines of ``n`` symbols
  separated by ``|``; empty cells are ``_``. For example (rank 2):

  .. code-block:: none

    1|2|3|4
    3|4|1|2
    2|1|4|3
    4|3|2|_

- *Grid text*, for humans: one line per row, ``.`` for an unknown cell,
  whitespace ignored, lines starting with ``#`` are comments.

Values are zero-based throughout: symbol ``1`` is value 0, symbol ``0`` is
value 9, ``A`` is value 10, and so on.

"""

import logging
from typing import List, Optional, Sequence, TYPE_CHECKING

from mipsudoku.common import (
    check_rank,
    ConfigError,
    HASH,
    NEWLINE,
    PIPE,
    SPACE,
    UNKNOWN,
)

if TYPE_CHECKING:
    from mipsudoku.model import SudokuModel

log = logging.getLogger(__name__)


# =============================================================================
# Symbol table
# =============================================================================

SYMBOLS = "1234567890ABCDEFGHIJKLMNOPQRSTUVWXYZ"
EMPTY_SYMBOL = "_"
DISPLAY_SYMBOLS = EMPTY_SYMBOL + SYMBOLS

_SYMBOL_TO_DIGIT = {s: i for i, s in enumerate(SYMBOLS)}


def to_digit(char: str) -> Optional[int]:
    """
    Maps a puzzle character to a zero-based value, or ``None`` if the
    character is not a symbol (meaning "no constraint").
    """
    return _SYMBOL_TO_DIGIT.get(char)


def to_symbol(value: Optional[int]) -> str:
    """
    Maps a zero-based value back to its display symbol; ``None`` gives
    :data:`EMPTY_SYMBOL`.
    """
    return DISPLAY_SYMBOLS[0 if value is None else value + 1]


# =============================================================================
# Board
# =============================================================================

def cell_values(model: "SudokuModel",
                flags: Sequence[bool]) -> List[Optional[int]]:
    """
    For each cell in row-major order, the value of its true move, or ``None``
    if it has none.

    If a cell has more than one true move (which the constraints forbid), the
    lowest value wins.
    """
    if len(flags) != model.n_moves:
        raise ValueError(f"Expected {model.n_moves} flags, got {len(flags)}")
    n = model.n
    values = []  # type: List[Optional[int]]
    for cell in range(model.n_cells):
        base = cell * n
        values.append(next(
            (d for d in range(n) if flags[base + d]),
            None
        ))
    return values


def format_board(values: Sequence[Optional[int]], n: int) -> str:
    """
    Renders per-cell values as rows of ``|``-separated symbols.
    """
    return NEWLINE.join(
        PIPE.join(to_symbol(values[r * n + c]) for c in range(n))
        for r in range(n)
    )


def decode(model: "SudokuModel", flags: Sequence[bool]) -> str:
    """
    Renders a flag assignment (one boolean per move, indexed by move id) as a
    board.
    """
    return format_board(cell_values(model, flags), model.n)


def parse_board(board: str, rank: int) -> str:
    """
    Turns a board, as produced by :func:`decode`, back into a fixed string,
    so that it can be imposed on a new puzzle. ``_`` becomes a space.
    """
    n = check_rank(rank) ** 2
    rows = [line for line in board.strip().splitlines() if line.strip()]
    if len(rows) != n:
        raise ConfigError(f"Board must have {n} rows; found {len(rows)}")
    fixed = ""
    for row_zb, line in enumerate(rows):
        symbols = line.strip().split(PIPE)
        if len(symbols) != n:
            raise ConfigError(
                f"Board row {row_zb + 1} has {len(symbols)} cells; "
                f"should be {n} ({line!r})")
        for col_zb, s in enumerate(symbols):
            if len(s) != 1:
                raise ConfigError(
                    f"Board cell (row={row_zb + 1}, col={col_zb + 1}) is "
                    f"{s!r}; should be a single symbol")
            fixed += SPACE if s == EMPTY_SYMBOL else s
    return fixed


# =============================================================================
# Grid text
# =============================================================================

def parse_grid_text(text: str, rank: int) -> str:
    """
    Reads grid text into a fixed string. Rules:

    - Lines starting with ``#`` are comments.
    - Blank lines, and all whitespace within lines, are ignored.
    - There must then be ``n`` lines of ``n`` cells.
    - ``.`` represents an unknown cell; it becomes a space.

    Other characters are passed through unchanged; whether they mean anything
    is up to the model builder.
    """
    n = check_rank(rank) ** 2
    lines = text.splitlines()
    if not lines:
        raise ConfigError("No data")

    # Remove comments
    lines = [line for line in lines if not line.lstrip().startswith(HASH)]

    lines = ["".join(line.split())
             for line in lines if line.strip()]  # remove blank lines/columns
    if len(lines) != n:
        raise ConfigError(f"Must have {n} active lines; "
                          f"found {len(lines)}, which are:\n"
                          f"{lines}")

    fixed = ""
    for row_zb, line in enumerate(lines):
        if len(line) != n:
            raise ConfigError(
                f"Data line {row_zb + 1} has wrong non-blank length: should "
                f"be {n}, but is {len(line)} ({line!r})")
        fixed += line.replace(UNKNOWN, SPACE)
    return fixed


def format_grid_text(fixed: str, rank: int) -> str:
    """
    Renders a fixed string as grid text, with a gap between boxes. Anything
    that is not a symbol is shown as ``.``.
    """
    n = check_rank(rank) ** 2
    x = ""
    for row_zb in range(n):
        for col_zb in range(n):
            i = row_zb * n + col_zb
            ch = fixed[i] if i < len(fixed) else SPACE
            x += ch if to_digit(ch) is not None else UNKNOWN
            if col_zb % rank == rank - 1 and col_zb < n - 1:
                x += SPACE
        if row_zb < n - 1:
            x += NEWLINE
            if row_zb % rank == rank - 1:
                x += NEWLINE
    return x
