import pytest

from .helper_functions import (
    board_from_rows,
    ESCARGOT_ROWS,
    ESCARGOT_SOLUTION_ROWS,
)


@pytest.fixture
def escargot():
    return "".join(ESCARGOT_ROWS)


@pytest.fixture
def escargot_solution():
    return "".join(ESCARGOT_SOLUTION_ROWS)


@pytest.fixture
def escargot_board():
    return board_from_rows(ESCARGOT_SOLUTION_ROWS)


@pytest.fixture
def escargot_conflict():
    # Row 2 already has a 2 in column 5; put another in column 1.
    rows = list(ESCARGOT_ROWS)
    rows[1] = "2" + rows[1][1:]
    return "".join(rows)


@pytest.fixture
def first_row_only(escargot_solution):
    return escargot_solution[:9] + " " * 72
