#!/usr/bin/env python

"""
mipsudoku/backends.py

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

**Hands a Sudoku model to an integer programming solver.**

Integer programming is close to magic: you say "here are my constraints; go"
and a few milliseconds later you have a valid answer. This module does the
saying, not the magic.

Every move becomes a binary variable. Every group (cell, row/value,
column/value, box/value) must sum to *exactly* one, and so must every imposed
move. Equality, rather than "at most one", means the solver either fills the
whole board or reports that it can't; it never hands back a partial board.
The objective is to maximize the number of true moves, which for a feasible
board is always ``n ** 2``.

Backends, by name:

=============== ============ ==============================================
Name            Library      Solver
=============== ============ ==============================================
``cbc``         python-mip   COIN-OR CBC (bundled)
``gurobi``      python-mip   Gurobi (needs a licence)
``highs``       python-mip   HiGHS (needs ``highspy``)
``pulp-cbc``    PuLP         COIN-OR CBC (bundled command-line binary)
``glpk``        PuLP         GLPK (needs ``glpsol``)
``pulp-highs``  PuLP         HiGHS (needs the ``highs`` binary)
=============== ============ ==============================================

"""

from functools import partial
import logging
from typing import Callable, Dict, List, Optional, Tuple

from mip import BINARY, Model, OptimizationStatus, Var, maximize, xsum
import pulp

from mipsudoku.common import (
    ALMOST_ONE,
    BackendFailure,
    ConfigError,
    debug_model_constraints,
    debug_model_vars,
    Infeasible,
)
from mipsudoku.model import exact_cover_violations, SudokuModel

log = logging.getLogger(__name__)

Flags = Tuple[bool, ...]


# =============================================================================
# SolverBackend
# =============================================================================

class SolverBackend(object):
    """
    Base class for solver backends.

    Subclasses implement :meth:`_maximize`; callers use :meth:`maximize`,
    which also refuses any answer that isn't a complete, valid board.
    """
    def __init__(self, name: str, max_seconds: Optional[float] = None) -> None:
        """
        Args:
            name: name of this backend, for messages
            max_seconds: time limit passed on to the solver, if any
        """
        self.name = name
        self.max_seconds = max_seconds

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"

    def maximize(self, model: SudokuModel) -> Flags:
        """
        Solves the model.

        Returns:
            one boolean per move, indexed by move id

        Raises:
            :exc:`Infeasible` if no board satisfies the constraints
            :exc:`BackendFailure` if the solver fails, or gives a bad answer
        """
        log.info(f"Solving {model!r} with backend {self.name!r}")
        flags = self._maximize(model)
        problems = exact_cover_violations(model, flags)
        if problems:
            raise BackendFailure(
                f"Backend {self.name!r} returned an invalid assignment: "
                + "; ".join(problems[:10])
                + (f" (and {len(problems) - 10} more)"
                   if len(problems) > 10 else ""))
        return flags

    def _maximize(self, model: SudokuModel) -> Flags:
        raise NotImplementedError


# =============================================================================
# python-mip
# =============================================================================

class MipBackend(SolverBackend):
    """
    Solves via python-mip, which talks to CBC, Gurobi or HiGHS.
    """
    def __init__(self, name: str, solver_name: str,
                 max_seconds: Optional[float] = None) -> None:
        """
        Args:
            solver_name: python-mip solver name, e.g. ``"CBC"``, ``"GRB"``
        """
        super().__init__(name=name, max_seconds=max_seconds)
        self.solver_name = solver_name

    def _maximize(self, model: SudokuModel) -> Flags:
        try:
            m = Model("Sudoku solver", solver_name=self.solver_name)
            m.verbose = 0

            # -----------------------------------------------------------------
            # Variables
            # -----------------------------------------------------------------
            x = [
                m.add_var(move.name, var_type=BINARY)
                for move in model.moves
            ]  # type: List[Var]  # index as: x[move_id]

            # -----------------------------------------------------------------
            # Constraints
            # -----------------------------------------------------------------
            for family, index, group in model.gen_groups():
                m.add_constr(xsum(x[i] for i in group) == 1,
                             name=f"{family}_{index}")
            # Starting values
            for move_id in model.imposed_moves:
                m.add_constr(x[move_id] == 1, name=f"imposed_{move_id}")

            m.objective = maximize(xsum(x))

            # -----------------------------------------------------------------
            # Solve
            # -----------------------------------------------------------------
            debug_model_constraints(m)
            if self.max_seconds is not None:
                status = m.optimize(max_seconds=self.max_seconds)
            else:
                status = m.optimize()
        except Exception as e:
            raise BackendFailure(
                f"Backend {self.name!r} ({self.solver_name}) failed: {e}"
            ) from e

        # ---------------------------------------------------------------------
        # Read out answers
        # ---------------------------------------------------------------------
        log.debug(f"Backend {self.name!r} status: {status.name}")
        if status in (OptimizationStatus.INFEASIBLE,
                      OptimizationStatus.INT_INFEASIBLE):
            raise Infeasible(f"No valid board exists (backend {self.name!r})")
        if (status not in (OptimizationStatus.OPTIMAL,
                           OptimizationStatus.FEASIBLE) or
                not m.num_solutions):
            raise BackendFailure(
                f"Backend {self.name!r} found no solution "
                f"(status {status.name})")
        debug_model_vars(m)
        return tuple(v.x is not None and v.x > ALMOST_ONE for v in x)


# =============================================================================
# PuLP
# =============================================================================

class PulpBackend(SolverBackend):
    """
    Solves via PuLP, which drives CBC, GLPK, HiGHS and others.
    """
    def __init__(self, name: str, solver_name: str,
                 max_seconds: Optional[float] = None) -> None:
        """
        Args:
            solver_name: PuLP solver name, as for :func:`pulp.getSolver`,
                e.g. ``"PULP_CBC_CMD"``, ``"GLPK_CMD"``
        """
        super().__init__(name=name, max_seconds=max_seconds)
        self.solver_name = solver_name

    def _get_solver(self) -> pulp.LpSolver:
        options = {"msg": False}
        if self.max_seconds is not None:
            options["timeLimit"] = self.max_seconds
        solver = pulp.getSolver(self.solver_name, **options)
        if not solver.available():
            raise BackendFailure(
                f"Backend {self.name!r}: PuLP solver {self.solver_name} is "
                f"not available")
        return solver

    def _maximize(self, model: SudokuModel) -> Flags:
        try:
            solver = self._get_solver()
            prob = pulp.LpProblem("Sudoku_solver", pulp.LpMaximize)
            x = [
                pulp.LpVariable(f"x_{move.id}", cat=pulp.LpBinary)
                for move in model.moves
            ]
            prob += pulp.lpSum(x)
            for family, index, group in model.gen_groups():
                prob += pulp.lpSum(x[i] for i in group) == 1, \
                    f"{family}_{index}"
            for move_id in model.imposed_moves:
                prob += x[move_id] == 1, f"imposed_{move_id}"
            status = prob.solve(solver)
        except BackendFailure:
            raise
        except Exception as e:
            raise BackendFailure(
                f"Backend {self.name!r} ({self.solver_name}) failed: {e}"
            ) from e

        log.debug(f"Backend {self.name!r} status: {pulp.LpStatus[status]}")
        if status == pulp.LpStatusInfeasible:
            raise Infeasible(f"No valid board exists (backend {self.name!r})")
        if status != pulp.LpStatusOptimal:
            raise BackendFailure(
                f"Backend {self.name!r} found no solution "
                f"(status {pulp.LpStatus[status]})")
        return tuple(
            v.varValue is not None and v.varValue > ALMOST_ONE for v in x
        )


# =============================================================================
# Choosing a backend
# =============================================================================

DEFAULT_BACKEND = "cbc"

BACKENDS = {
    "cbc": partial(MipBackend, solver_name="CBC"),
    "gurobi": partial(MipBackend, solver_name="GRB"),
    "highs": partial(MipBackend, solver_name="HiGHS"),
    "pulp-cbc": partial(PulpBackend, solver_name="PULP_CBC_CMD"),
    "glpk": partial(PulpBackend, solver_name="GLPK_CMD"),
    "pulp-highs": partial(PulpBackend, solver_name="HiGHS_CMD"),
}  # type: Dict[str, Callable[..., SolverBackend]]


def get_backend(name: str = DEFAULT_BACKEND,
                max_seconds: Optional[float] = None) -> SolverBackend:
    """
    Returns a backend by name; see :data:`BACKENDS`.

    Raises:
        :exc:`ConfigError` if the name is unknown
    """
    try:
        factory = BACKENDS[name]
    except KeyError:
        raise ConfigError(
            f"Unknown backend {name!r}; choose from {sorted(BACKENDS)}")
    return factory(name=name, max_seconds=max_seconds)
