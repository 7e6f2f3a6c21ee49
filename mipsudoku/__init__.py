#!/usr/bin/env python

"""
mipsudoku/__init__.py

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

Sudoku as an exact-cover integer program.

"""

from mipsudoku.backends import get_backend, SolverBackend  # noqa
from mipsudoku.codec import decode, to_digit  # noqa
from mipsudoku.common import (  # noqa
    BackendFailure,
    ConfigError,
    Infeasible,
    SolveError,
)
from mipsudoku.model import build_model, SudokuModel  # noqa
from mipsudoku.sudoku import solve_puzzle, Sudoku, SudokuSolution  # noqa
