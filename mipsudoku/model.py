#!/usr/bin/env python

"""
mipsudoku/model.py

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

**Builds the exact-cover model of a Sudoku.**

A *move* is "put value ``d`` in cell ``(r, c)``". For a puzzle of rank ``t``
there are ``n = t ** 2`` values, ``n ** 2`` cells and ``n ** 3`` moves, and a
move's id is ``cell * n + value``, where ``cell = row * n + col``.

The moves are partitioned four ways. In a valid board, exactly one move of
each group is chosen:

- ``cells``: per cell, its ``n`` possible values;
- ``row_values``: per (value, row), the ``n`` columns that value could go in;
- ``col_values``: per (value, column), likewise for rows;
- ``box_values``: per (value, box), likewise for the cells of a box.

"""

import logging
from types import MappingProxyType
from typing import Dict, Generator, List, Mapping, Sequence, Tuple

from mipsudoku.codec import to_digit
from mipsudoku.common import check_rank, DEFAULT_RANK

log = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

FAMILY_CELLS = "cells"
FAMILY_ROW_VALUES = "row_values"
FAMILY_COL_VALUES = "col_values"
FAMILY_BOX_VALUES = "box_values"
FAMILY_IMPOSED = "imposed"

GROUP_FAMILIES = (
    FAMILY_CELLS,
    FAMILY_ROW_VALUES,
    FAMILY_COL_VALUES,
    FAMILY_BOX_VALUES,
)


# =============================================================================
# Box
# =============================================================================

class Box(object):
    """
    Represents a ``rank x rank`` box within the Sudoku grid.
    """
    def __init__(self, box_zb: int, rank: int = DEFAULT_RANK) -> None:
        """
        Boxes are numbered 0 to N - 1. For a standard 9x9 (rank 3) Sudoku, with
        3x3 boxes, they are numbered 0-8, left to right then top to bottom.

        Args:
            box_zb: box number, as above; zero-based
        """
        assert 0 <= box_zb < rank ** 2, (
            f"box_zb was {box_zb}; must be in range 0 to {rank ** 2 - 1} "
            f"inclusive"
        )
        self.rank = rank
        self.box_zb = box_zb

    def __str__(self) -> str:
        """
        Coordinate-based description for a box.
        """
        return f"{{{self.boxrow + 1},{self.boxcol + 1}}}"

    def __repr__(self) -> str:
        return self.__str__()

    def __eq__(self, other: "Box") -> bool:
        return (
            self.rank == other.rank and
            self.box_zb == other.box_zb
        )

    @property
    def boxrow(self) -> int:
        """
        Zero-based row number of the box (not its cells).
        """
        return self.box_zb // self.rank

    @property
    def boxcol(self) -> int:
        """
        Zero-based column number of the box (not its cells).
        """
        return self.box_zb % self.rank

    def top_left_cell(self) -> Tuple[int, int]:
        """
        Returns ``row_zb, col_zb`` for the top-left cell in the box.
        """
        return self.boxrow * self.rank, self.boxcol * self.rank

    @classmethod
    def containing(cls, row_zb: int, col_zb: int,
                   rank: int = DEFAULT_RANK) -> "Box":
        """
        Returns the box containing this cell.

        Args:
            row_zb: zero-based row number
            col_zb: zero-based column number
            rank: rank
        """
        n = rank ** 2
        assert 0 <= row_zb < n
        assert 0 <= col_zb < n
        return cls(box_zb=(row_zb // rank) * rank + col_zb // rank,
                   rank=rank)

    def gen_cells(self) -> Generator[Tuple[int, int], None, None]:
        """
        Generates ``(row_zb, col_zb)`` tuples for all the cells in this box.
        """
        row_min, col_min = self.top_left_cell()
        for r in range(row_min, row_min + self.rank):
            for c in range(col_min, col_min + self.rank):
                yield r, c


# =============================================================================
# Move
# =============================================================================

class Move(object):
    """
    One candidate assignment: value :attr:`value` in cell
    (:attr:`row`, :attr:`col`). Read-only.
    """
    __slots__ = ("_id", "_rank")

    def __init__(self, move_id: int, rank: int = DEFAULT_RANK) -> None:
        self._id = move_id
        self._rank = rank

    def __repr__(self) -> str:
        return (
            f"Move(id={self.id}, row={self.row}, col={self.col}, "
            f"box={self.box}, value={self.value})"
        )

    def __eq__(self, other: "Move") -> bool:
        return self.id == other.id and self._rank == other._rank

    def __hash__(self) -> int:
        return hash((self._id, self._rank))

    @property
    def id(self) -> int:
        return self._id

    @property
    def n(self) -> int:
        return self._rank ** 2

    @property
    def cell(self) -> int:
        return self._id // self.n

    @property
    def row(self) -> int:
        return self.cell // self.n

    @property
    def col(self) -> int:
        return self.cell % self.n

    @property
    def box(self) -> int:
        return Box.containing(self.row, self.col, rank=self._rank).box_zb

    @property
    def value(self) -> int:
        return self._id % self.n

    @property
    def name(self) -> str:
        """
        Human-readable (one-based) name, used for solver variables.
        """
        return f"x(row={self.row + 1}, col={self.col + 1}, " \
               f"digit={self.value + 1})"


# =============================================================================
# SudokuModel
# =============================================================================

class SudokuModel(object):
    """
    Moves, groupings and imposed moves for one puzzle. Build it with
    :func:`build_model`; don't change it afterwards.

    Attributes:
        rank: box size, e.g. 3
        n: number of symbols, and the grid dimension
        n_cells: ``n ** 2``
        n_moves: ``n ** 3``
        moves: tuple of :class:`Move`, indexed by move id
        groupings: mapping of family name (see :data:`GROUP_FAMILIES`) to a
            tuple of groups, each a tuple of move ids
        imposed: read-only mapping of cell index to required value
        imposed_moves: the move ids forced true by :attr:`imposed`, in cell
            order
    """
    def __init__(self,
                 rank: int,
                 groupings: Dict[str, Tuple[Tuple[int, ...], ...]],
                 imposed: Dict[int, int]) -> None:
        self.rank = rank
        self.n = rank ** 2
        self.n_cells = self.n ** 2
        self.n_moves = self.n_cells * self.n
        self.moves = tuple(Move(i, rank=rank) for i in range(self.n_moves))
        self.groupings = MappingProxyType(dict(groupings))  # type: Mapping[str, Tuple[Tuple[int, ...], ...]]  # noqa
        self.imposed = MappingProxyType(dict(sorted(imposed.items())))  # type: Mapping[int, int]  # noqa
        self.imposed_moves = tuple(
            self.move_id(cell // self.n, cell % self.n, value)
            for cell, value in self.imposed.items()
        )

    def __repr__(self) -> str:
        return (
            f"SudokuModel(rank={self.rank}, n_moves={self.n_moves}, "
            f"n_imposed={len(self.imposed)})"
        )

    def move_id(self, row_zb: int, col_zb: int, value_zb: int) -> int:
        return (row_zb * self.n + col_zb) * self.n + value_zb

    def gen_groups(self) -> Generator[Tuple[str, int, Tuple[int, ...]],
                                      None, None]:
        """
        Generates ``family, index, move_ids`` for every group of every
        family.
        """
        for family in GROUP_FAMILIES:
            for index, group in enumerate(self.groupings[family]):
                yield family, index, group


# =============================================================================
# Building
# =============================================================================

def parse_fixed(fixed: str, rank: int) -> Dict[int, int]:
    """
    Reads a fixed string into a mapping of cell index to zero-based value.

    Characters that aren't symbols, and symbols too large for this rank (e.g.
    ``G`` in a 9x9 puzzle), are treated as unconstrained. Missing trailing
    characters are unconstrained too; characters beyond the last cell (such
    as a trailing newline) are ignored.
    """
    n = rank ** 2
    n_cells = n ** 2
    if len(fixed) > n_cells:
        log.debug(f"Ignoring {len(fixed) - n_cells} characters beyond cell "
                  f"{n_cells - 1}: {fixed[n_cells:]!r}")
    imposed = {}  # type: Dict[int, int]
    for cell, char in enumerate(fixed[:n_cells]):
        value = to_digit(char)
        if value is None:
            continue
        if value >= n:
            log.debug(f"Ignoring out-of-range symbol {char!r} at cell {cell}")
            continue
        imposed[cell] = value
    return imposed


def _make_groupings(rank: int) -> Dict[str, Tuple[Tuple[int, ...], ...]]:
    n = rank ** 2

    def move(r: int, c: int, d: int) -> int:
        return (r * n + c) * n + d

    cells = []  # type: List[Tuple[int, ...]]
    for r in range(n):
        for c in range(n):
            cells.append(tuple(move(r, c, d) for d in range(n)))
    row_values = []  # type: List[Tuple[int, ...]]
    col_values = []  # type: List[Tuple[int, ...]]
    box_values = []  # type: List[Tuple[int, ...]]
    for d in range(n):
        for r in range(n):
            row_values.append(tuple(move(r, c, d) for c in range(n)))
        for c in range(n):
            col_values.append(tuple(move(r, c, d) for r in range(n)))
        for b in range(n):
            box_values.append(tuple(
                move(r, c, d) for r, c in Box(b, rank=rank).gen_cells()
            ))
    return {
        FAMILY_CELLS: tuple(cells),
        FAMILY_ROW_VALUES: tuple(row_values),
        FAMILY_COL_VALUES: tuple(col_values),
        FAMILY_BOX_VALUES: tuple(box_values),
    }


def build_model(rank: int = DEFAULT_RANK, fixed: str = "") -> SudokuModel:
    """
    Builds the exact-cover model for a puzzle.

    Args:
        rank: box size (3 for normal 9x9 Sudoku); 1 to 6
        fixed: fixed string of givens; see :mod:`mipsudoku.codec`

    Raises:
        :exc:`mipsudoku.common.ConfigError` for a bad rank
    """
    check_rank(rank)
    imposed = parse_fixed(fixed, rank)
    model = SudokuModel(rank=rank,
                        groupings=_make_groupings(rank),
                        imposed=imposed)
    log.debug(f"Built {model!r}")
    return model


# =============================================================================
# Checking
# =============================================================================

def exact_cover_violations(model: SudokuModel,
                           flags: Sequence[bool]) -> List[str]:
    """
    Checks a flag assignment against every group and imposed move.

    Returns:
        a list of descriptions of broken constraints; empty if the assignment
        is a complete, valid board honouring the givens
    """
    if len(flags) != model.n_moves:
        return [f"expected {model.n_moves} flags, got {len(flags)}"]
    problems = []  # type: List[str]
    for family, index, group in model.gen_groups():
        count = sum(1 for i in group if flags[i])
        if count != 1:
            problems.append(f"{family}[{index}] has {count} true moves")
    for move_id in model.imposed_moves:
        if not flags[move_id]:
            problems.append(
                f"{FAMILY_IMPOSED}: {model.moves[move_id]!r} is not true")
    return problems
