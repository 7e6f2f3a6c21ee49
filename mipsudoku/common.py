#!/usr/bin/env python

"""
mipsudoku/common.py

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

Common constants, exceptions and functions for the Sudoku MIP solver.

"""

import logging
import sys
import traceback
from typing import Callable

from mip import Constr, Model, Var

log = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

UNKNOWN = "."
NEWLINE = "\n"
SPACE = " "
HASH = "#"
PIPE = "|"
ALMOST_ONE = 0.99

DEFAULT_RANK = 3
MAX_SYMBOLS = 36  # len(SYMBOLS); see codec.py

EXIT_FAILURE = 1
EXIT_SUCCESS = 0


# =============================================================================
# Exceptions
# =============================================================================

class ConfigError(ValueError):
    """
    Bad configuration, e.g. a rank too large for the symbol alphabet, or grid
    text of the wrong shape. Raised before any model is built.
    """
    pass


class SolveError(Exception):
    """
    Base class for anything that stops a backend producing a board.
    """
    pass


class Infeasible(SolveError):
    """
    The equality system (every group sums to one, every imposed move is true)
    has no solution.
    """
    pass


class BackendFailure(SolveError):
    """
    The external solver crashed, timed out, is not installed/licensed, or
    handed back an assignment that breaks the exact-cover rules.
    """
    pass


# =============================================================================
# Validation
# =============================================================================

def check_rank(rank: int) -> int:
    """
    Checks that ``rank`` is usable, i.e. a positive integer whose square does
    not exceed the size of the symbol alphabet.

    Returns: the rank
    Raises: :exc:`ConfigError`
    """
    if isinstance(rank, bool) or not isinstance(rank, int):
        raise ConfigError(f"Rank must be an integer; was {rank!r}")
    if rank < 1:
        raise ConfigError(f"Rank must be positive; was {rank}")
    if rank ** 2 > MAX_SYMBOLS:
        raise ConfigError(
            f"Rank {rank} needs {rank ** 2} symbols, but only {MAX_SYMBOLS} "
            f"are available (maximum rank is 6)")
    return rank


# =============================================================================
# Functions for mip models
# =============================================================================

def debug_model_constraints(m: Model) -> None:
    """
    Shows constraints for a model.
    """
    if not log.isEnabledFor(logging.DEBUG):
        return
    lines = [f"Constraints in model {m.name!r}:"]
    for c in m.constrs:  # type: Constr
        lines.append(f"{c.name}: {c.expr}")
    log.debug("\n".join(lines))


def debug_model_vars(m: Model) -> None:
    """
    Show the names/values of model variables after fitting.
    """
    if not log.isEnabledFor(logging.DEBUG):
        return
    lines = [f"Variables in model {m.name!r}:"]
    for v in m.vars:  # type: Var
        lines.append(f"{v.name} == {v.x}")
    log.debug("\n".join(lines))


# =============================================================================
# Generic helper functions
# =============================================================================

def run_guard(function: Callable[[], None]) -> None:
    try:
        function()
    except Exception as e:
        log.critical(str(e))
        traceback.print_exc()
        sys.exit(EXIT_FAILURE)
