#!/usr/bin/env python

"""
mipsudoku/sudoku.py

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

**Solves Sudoku puzzles, of rank 1 to 6, by integer programming.**

The pipeline is:

.. code-block:: none

    puzzle text -> build_model() -> SolverBackend.maximize() -> decode()

A puzzle is set up once and not changed; to try different givens, make a new
:class:`Sudoku`. Each solve is independent, so the same puzzle can be given
to several backends.

"""

import argparse
import logging
import sys
from typing import Optional, Sequence, Union

from cardinal_pythonlib.argparse_func import RawDescriptionArgumentDefaultsHelpFormatter  # noqa
from cardinal_pythonlib.logs import main_only_quicksetup_rootlogger

from mipsudoku.backends import (
    BACKENDS,
    DEFAULT_BACKEND,
    get_backend,
    SolverBackend,
)
from mipsudoku.codec import (
    cell_values,
    decode,
    format_board,
    format_grid_text,
    parse_board,
    parse_grid_text,
)
from mipsudoku.common import (
    ConfigError,
    DEFAULT_RANK,
    EXIT_FAILURE,
    EXIT_SUCCESS,
    run_guard,
    SolveError,
)
from mipsudoku.model import build_model, SudokuModel

log = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

DEMO_SUDOKU_1 = """
# Coton 54, Coton Community News Dec 2019-Jan 2020

... ... ...
..2 3.1 45.
.1. ... .6.

.47 .5. 38.
... 7.3 ...
.36 ... 14.

.7. ... .9.
.91 4.5 6..
... ..9 ...
"""

DEMO_ESCARGOT = """
# "AI Escargot", Arto Inkala, 2006

1.. ..7 .9.
.3. .2. ..8
..9 6.. 5..

..5 3.. 9..
.1. .8. ..2
6.. ..4 ...

3.. ... .1.
.4. ... ..7
..7 ... 3..
"""


# =============================================================================
# SudokuSolution
# =============================================================================

class SudokuSolution(object):
    """
    The answer from one backend for one puzzle.
    """
    def __init__(self, model: SudokuModel, flags: Sequence[bool],
                 backend_name: str) -> None:
        self.model = model
        self.flags = tuple(flags)
        self.backend_name = backend_name

    def __str__(self) -> str:
        return self.board

    @property
    def board(self) -> str:
        """
        The board: rows of ``|``-separated symbols.
        """
        return decode(self.model, self.flags)

    def as_fixed(self) -> str:
        """
        The answer as a fixed string, e.g. to impose on another puzzle.
        """
        return parse_board(self.board, self.model.rank)

    def grid_text(self) -> str:
        return format_grid_text(self.as_fixed(), self.model.rank)


# =============================================================================
# Sudoku
# =============================================================================

class Sudoku(object):
    """
    Represents and solves Sudoku puzzles.
    """

    def __init__(self, fixed: str, rank: int = DEFAULT_RANK) -> None:
        """
        Args:
            fixed:
                Fixed string: one character per cell, row by row. Symbols
                (``1-9``, ``0``, ``A-Z``) are givens; anything else, such as
                a space, is unknown.
            rank:
                rank of the puzzle (3 for normal 9x9 Sudoku)
        """
        self.model = build_model(rank=rank, fixed=fixed)
        self.rank = rank
        self.n = self.model.n

        n_distinct = len(set(self.model.imposed.values()))
        if n_distinct < self.n - 1:
            log.warning(
                f"Not a well-formed Sudoku: {n_distinct} distinct initial "
                f"values given, but need {self.n - 1} to be well-formed.")
            # http://pi.math.cornell.edu/~mec/Summer2009/Mahmood/More.html
            # Need (rank ^ 2 - 1) distinct values, i.e. (n - 1) values.

    @classmethod
    def from_grid_text(cls, text: str, rank: int = DEFAULT_RANK) -> "Sudoku":
        """
        Creates a puzzle from grid text; see
        :func:`mipsudoku.codec.parse_grid_text`.
        """
        return cls(parse_grid_text(text, rank), rank=rank)

    # -------------------------------------------------------------------------
    # String representations
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return self.problem_str()

    def problem_str(self) -> str:
        """
        The givens, as a board (unknown cells are ``_``).
        """
        values = [self.model.imposed.get(cell)
                  for cell in range(self.model.n_cells)]
        return format_board(values, self.n)

    # -------------------------------------------------------------------------
    # Solve via integer programming
    # -------------------------------------------------------------------------

    def solve(self,
              backend: Union[str, SolverBackend] = DEFAULT_BACKEND,
              max_seconds: Optional[float] = None) -> SudokuSolution:
        """
        Solves the puzzle.

        Args:
            backend: a backend name (see
                :data:`mipsudoku.backends.BACKENDS`) or instance
            max_seconds: time limit; only with a backend name, since an
                instance carries its own :attr:`SolverBackend.max_seconds`

        Raises:
            :exc:`mipsudoku.common.ConfigError`: ``max_seconds`` was given
                with a backend instance
            :exc:`mipsudoku.common.Infeasible`: the puzzle has no solution
            :exc:`mipsudoku.common.BackendFailure`: the solver failed
        """
        if isinstance(backend, str):
            backend = get_backend(backend, max_seconds=max_seconds)
        elif max_seconds is not None:
            raise ConfigError(
                f"max_seconds can't be given with backend instance "
                f"{backend!r}; set it on the backend instead")
        flags = backend.maximize(self.model)
        solution = SudokuSolution(self.model, flags, backend.name)
        log.debug(f"Cell values: {cell_values(self.model, flags)}")
        return solution


def solve_puzzle(fixed: str, rank: int = DEFAULT_RANK,
                 backend: Union[str, SolverBackend] = DEFAULT_BACKEND) -> str:
    """
    Solves a fixed string and returns the board.
    """
    return Sudoku(fixed, rank=rank).solve(backend).board


# =============================================================================
# main
# =============================================================================

def main(argv: Sequence[str] = None) -> None:
    """
    Command-line entry point.
    """
    cmd_backends = "backends"
    cmd_demo = "demo"
    cmd_solve = "solve"
    cmd_solve_string = "solve-string"

    parser = argparse.ArgumentParser(
        formatter_class=RawDescriptionArgumentDefaultsHelpFormatter,
        description=(
            f"Solve Sudoku puzzles by integer programming. File format is:\n"
            f"{DEMO_SUDOKU_1}"
        )
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Be verbose")
    parser.add_argument(
        "--rank", type=int, default=DEFAULT_RANK,
        help="Puzzle rank (box size); 3 for a 9x9 Sudoku")
    parser.add_argument(
        "--backend", type=str, default=DEFAULT_BACKEND,
        choices=sorted(BACKENDS),
        help="Solver backend")
    parser.add_argument(
        "--max-seconds", type=float, default=None,
        help="Time limit for the solver")
    subparsers = parser.add_subparsers(
        dest="command",
        help="Append --help for more help")

    parser_solve = subparsers.add_parser(cmd_solve, help="Solve from a file")
    parser_solve.add_argument(
        "filename", type=str,
        help="Puzzle filename to read. Must contain text in format as above.")

    parser_solve_string = subparsers.add_parser(
        cmd_solve_string,
        help="Solve a fixed string: one character per cell, row by row, "
             "with anything other than 1-9, 0 or A-Z meaning 'unknown'")
    parser_solve_string.add_argument(
        "fixed", type=str, help="Fixed string")

    parser_demo = subparsers.add_parser(cmd_demo, help="Run demo")
    parser_demo.add_argument(
        "--escargot", action="store_true",
        help="Solve 'AI Escargot' instead")

    subparsers.add_parser(cmd_backends, help="List backend names")

    args = parser.parse_args(argv)
    main_only_quicksetup_rootlogger(level=logging.DEBUG if args.verbose
                                    else logging.INFO)

    if not args.command:
        print("Must specify command")
        sys.exit(EXIT_FAILURE)
    if args.command == cmd_backends:
        for name in sorted(BACKENDS):
            print(name)
        sys.exit(EXIT_SUCCESS)

    if args.command == cmd_demo:
        if args.rank != DEFAULT_RANK:
            log.error(f"The demo puzzles are rank {DEFAULT_RANK}; "
                      f"--rank {args.rank} can't be used with {cmd_demo!r}")
            sys.exit(EXIT_FAILURE)
        problem = Sudoku.from_grid_text(
            DEMO_ESCARGOT if args.escargot else DEMO_SUDOKU_1)
    elif args.command == cmd_solve:
        log.info(f"Reading {args.filename}")
        with open(args.filename, "rt") as f:
            string_version = f.read()
        problem = Sudoku.from_grid_text(string_version, rank=args.rank)
    else:
        problem = Sudoku(args.fixed, rank=args.rank)

    log.info(f"Solving:\n{problem}")
    try:
        solution = problem.solve(args.backend, max_seconds=args.max_seconds)
    except SolveError as e:
        log.error(f"Unable to solve: {e}")
        sys.exit(EXIT_FAILURE)
    log.info(f"Answer:\n{solution}")
    sys.exit(EXIT_SUCCESS)


# =============================================================================
# Command-line entry point
# =============================================================================

def cli() -> None:
    run_guard(main)


if __name__ == "__main__":
    cli()
