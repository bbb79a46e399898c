from __future__ import annotations

import pytest

from tetris_brain.piece import (
    SKIRT_EMPTY,
    PieceType,
    build,
    build_rotation_family,
    catalog_piece,
    parse_points,
    rotate_90,
    standard_catalog,
)


def test_build_normalises_to_origin_and_computes_skirt() -> None:
    piece = build([(3, 5), (4, 5), (4, 6), (4, 7)])
    assert piece.body == ((0, 0), (1, 0), (1, 1), (1, 2))
    assert piece.width == 2
    assert piece.height == 3
    assert piece.skirt == (0, 0)


def test_skirt_uses_lowest_cell_per_column() -> None:
    # Upside-down T: the middle column reaches row 0, the sides only row 1.
    piece = build([(0, 1), (1, 1), (2, 1), (1, 0)])
    assert piece.skirt == (1, 0, 1)


def test_skirt_marks_empty_columns() -> None:
    piece = build([(0, 0), (2, 0)])
    assert piece.width == 3
    assert piece.skirt == (0, SKIRT_EMPTY, 0)


def test_build_rejects_empty_cells() -> None:
    with pytest.raises(ValueError):
        build([])


def test_parse_points() -> None:
    assert parse_points("0 0 1 0  1 1") == [(0, 0), (1, 0), (1, 1)]
    with pytest.raises(ValueError):
        parse_points("0 0 1")
    with pytest.raises(ValueError):
        parse_points("0 x")


def test_rotate_90_turns_counter_clockwise() -> None:
    # L: vertical bar with a foot to the right.
    piece = build([(0, 0), (0, 1), (0, 2), (1, 0)])
    rotated = rotate_90(piece)
    assert rotated.cells == {(0, 0), (1, 0), (2, 0), (2, 1)}
    assert rotated.width == 3
    assert rotated.height == 2


def test_equality_ignores_cell_order() -> None:
    a = build([(0, 0), (1, 0), (1, 1)])
    b = build([(1, 1), (0, 0), (1, 0)])
    assert a == b
    assert hash(a) == hash(b)
    assert a != build([(0, 0), (1, 0), (0, 1)])


def test_standalone_piece_has_no_next_rotation() -> None:
    with pytest.raises(ValueError):
        build([(0, 0)]).next_rotation()


@pytest.mark.parametrize(
    "kind, expected",
    [
        (PieceType.I, 2),
        (PieceType.L, 4),
        (PieceType.J, 4),
        (PieceType.S, 2),
        (PieceType.Z, 2),
        (PieceType.O, 1),
        (PieceType.T, 4),
    ],
)
def test_catalog_rotation_counts(kind: PieceType, expected: int) -> None:
    piece = catalog_piece(kind)
    assert piece.rotation_count == expected
    assert len(list(piece.rotations())) == expected


def test_rotation_cycle_closes_on_every_member() -> None:
    for entry in standard_catalog():
        for start in entry.rotations():
            current = start
            for _ in range(start.rotation_count):
                current = current.next_rotation()
            assert current is start
            assert current.cells == start.cells


def test_rotations_in_a_family_are_distinct() -> None:
    for entry in standard_catalog():
        shapes = [r.cells for r in entry.rotations()]
        assert len(set(shapes)) == len(shapes)


def test_family_members_match_repeated_rotation() -> None:
    entry = catalog_piece(PieceType.T)
    expected = entry
    for member in entry.rotations():
        assert member == expected
        expected = rotate_90(expected)


def test_catalog_is_built_once() -> None:
    assert standard_catalog() is standard_catalog()
    assert len(standard_catalog()) == 7
    for piece in standard_catalog():
        assert len(piece.body) == 4
        assert piece.rotation == 0


def test_single_cell_family() -> None:
    piece = build_rotation_family([(0, 0)])
    assert piece.rotation_count == 1
    assert piece.next_rotation() is piece


def test_str_draws_piece_top_row_first() -> None:
    piece = catalog_piece(PieceType.L)
    assert str(piece) == "#.\n#.\n##"
