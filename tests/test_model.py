import pytest

from mipsudoku.common import ConfigError
from mipsudoku.model import (
    Box,
    build_model,
    exact_cover_violations,
    GROUP_FAMILIES,
    Move,
)

from .helper_functions import flags_from_fixed


@pytest.mark.parametrize("rank", [3, 4])
def test_sizes(rank):
    n = rank ** 2
    model = build_model(rank=rank)
    assert model.n == n
    assert model.n_cells == (rank ** 2) ** 2
    assert model.n_moves == model.n_cells * rank ** 2
    assert len(model.moves) == model.n_moves
    assert [m.id for m in model.moves] == list(range(model.n_moves))


@pytest.mark.parametrize("rank", [1, 2, 5, 6])
def test_other_ranks(rank):
    model = build_model(rank=rank)
    assert model.n_moves == rank ** 6


@pytest.mark.parametrize("rank", [0, -1, 7, 10, "3", 3.0, True, None])
def test_bad_rank(rank):
    with pytest.raises(ConfigError):
        build_model(rank=rank)


def test_move_attributes():
    move = Move(0, rank=3)
    assert (move.row, move.col, move.box, move.value) == (0, 0, 0, 0)

    move = Move(80, rank=3)  # cell 8, value 8
    assert (move.cell, move.row, move.col, move.box, move.value) == \
        (8, 0, 8, 2, 8)

    model = build_model(rank=3)
    move = model.moves[model.move_id(4, 5, 2)]
    assert move.id == (4 * 9 + 5) * 9 + 2
    assert (move.row, move.col, move.box, move.value) == (4, 5, 4, 2)

    move = model.moves[model.n_moves - 1]
    assert (move.row, move.col, move.box, move.value) == (8, 8, 8, 8)


def test_move_is_read_only():
    move = Move(5, rank=3)
    with pytest.raises(AttributeError):
        move.value = 3
    assert move == Move(5, rank=3)
    assert move != Move(6, rank=3)


def test_box():
    box = Box.containing(4, 7, rank=3)
    assert box.box_zb == 5
    assert (box.boxrow, box.boxcol) == (1, 2)
    assert box.top_left_cell() == (3, 6)
    assert list(box.gen_cells()) == [
        (r, c) for r in range(3, 6) for c in range(6, 9)
    ]
    assert Box.containing(15, 0, rank=4) == Box(12, rank=4)


@pytest.mark.parametrize("rank", [2, 3, 4])
def test_groupings_partition_moves(rank):
    model = build_model(rank=rank)
    n = model.n
    assert set(model.groupings) == set(GROUP_FAMILIES)
    for family in GROUP_FAMILIES:
        groups = model.groupings[family]
        assert len(groups) == n * n
        assert all(len(g) == n for g in groups)
        assert sorted(i for g in groups for i in g) == \
            list(range(model.n_moves))


def test_group_contents():
    model = build_model(rank=3)
    moves = model.moves
    for group in model.groupings["cells"]:
        assert len({moves[i].cell for i in group}) == 1
        assert sorted(moves[i].value for i in group) == list(range(9))
    for family, attr in (("row_values", "row"),
                         ("col_values", "col"),
                         ("box_values", "box")):
        for group in model.groupings[family]:
            assert len({moves[i].value for i in group}) == 1
            assert len({getattr(moves[i], attr) for i in group}) == 1
            assert len({moves[i].cell for i in group}) == 9
    box_4_value_0 = model.groupings["box_values"][4]
    assert {(moves[i].row, moves[i].col) for i in box_4_value_0} == {
        (r, c) for r in range(3, 6) for c in range(3, 6)
    }


def test_imposed(escargot):
    model = build_model(rank=3, fixed=escargot)
    assert len(model.imposed) == sum(1 for ch in escargot if ch != ".")
    assert model.imposed[0] == 0  # "1"
    assert model.imposed[5] == 6  # "7"
    assert model.imposed_moves[0] == 0
    assert model.imposed_moves[1] == 5 * 9 + 6
    for move_id in model.imposed_moves:
        move = model.moves[move_id]
        assert model.imposed[move.cell] == move.value


def test_imposed_is_read_only(escargot):
    model = build_model(rank=3, fixed=escargot)
    with pytest.raises(TypeError):
        model.imposed[1] = 1


def test_fixed_leniency():
    # "G" and "0" are out of range for rank 3; lowercase is not a symbol.
    model = build_model(rank=3, fixed="G0a .x?9")
    assert dict(model.imposed) == {7: 8}


def test_fixed_rank_4():
    model = build_model(rank=4, fixed="0FG")
    assert dict(model.imposed) == {0: 9, 1: 15}


def test_fixed_short_and_long():
    assert dict(build_model(rank=2, fixed="1").imposed) == {0: 0}
    assert dict(build_model(rank=2, fixed="").imposed) == {}
    # Only the first n * n characters are cells.
    model = build_model(rank=2, fixed=" " * 15 + "1" + "2")
    assert dict(model.imposed) == {15: 0}


def test_fixed_trailing_newline(escargot):
    model = build_model(rank=3, fixed=escargot + "\n")
    assert len(model.imposed) == sum(1 for ch in escargot if ch != ".")
    assert dict(model.imposed) == dict(build_model(3, escargot).imposed)


def test_exact_cover_violations_valid(escargot, escargot_solution):
    model = build_model(rank=3, fixed=escargot)
    flags = flags_from_fixed(model, escargot_solution)
    assert exact_cover_violations(model, flags) == []


def test_exact_cover_violations_broken(escargot, escargot_solution):
    model = build_model(rank=3, fixed=escargot)
    flags = flags_from_fixed(model, escargot_solution)
    flags[0] = False  # cell 0 was "1"
    problems = exact_cover_violations(model, flags)
    assert "cells[0] has 0 true moves" in problems
    assert "row_values[0] has 0 true moves" in problems
    assert any(p.startswith("imposed") for p in problems)

    assert exact_cover_violations(model, [True] * 3) == [
        f"expected {model.n_moves} flags, got 3"
    ]


def test_exact_cover_violations_ignores_unimposed(escargot_solution):
    model = build_model(rank=3)
    flags = flags_from_fixed(model, escargot_solution)
    assert exact_cover_violations(model, flags) == []
