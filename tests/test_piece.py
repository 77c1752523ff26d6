import pytest

from catalog import LARGE_GAME_PIECES, SMALL_GAME_PIECES, SQUARE_PIECES
from coordinate import Coordinate
from piece import Piece
from shape import Shape

ALL_PIECES = SMALL_GAME_PIECES + LARGE_GAME_PIECES + SQUARE_PIECES
SMALL = {p.identifier: p for p in SMALL_GAME_PIECES}
LARGE = {p.identifier: p for p in LARGE_GAME_PIECES}


def test_size_counts_occupied_cells():
    assert SMALL["X"].size == 5
    assert LARGE["F"].size == 8
    assert SQUARE_PIECES[0].size == 4


def test_all_coordinates_offsets_from_anchor():
    p = SMALL["P"]  # [[1,1,1],[1,1,0],[0,0,0]]
    coords = p.all_coordinates(Coordinate.at(row=1, col=2))
    assert sorted(coords) == sorted(
        [
            Coordinate.at(1, 2), Coordinate.at(1, 3), Coordinate.at(1, 4),
            Coordinate.at(2, 2), Coordinate.at(2, 3),
        ]
    )


def test_has_content_at_origin():
    assert SMALL["P"].has_content_at_origin
    assert not SMALL["X"].has_content_at_origin
    assert SMALL["X"].has_content_at(Coordinate.at(0, 1))


@pytest.mark.parametrize(
    "piece, expected",
    [
        (SMALL["X"], 1),
        (SMALL["I"], 2),
        (LARGE["T"], 4),
        (SMALL["W"], 4),
        (SMALL["V"], 4),
        (SMALL["U"], 4),
        (LARGE["L"], 8),
        (SMALL["N"], 8),
        (SMALL["F"], 8),
        (SMALL["P"], 8),
        (SQUARE_PIECES[0], 1),
    ],
    ids=lambda v: getattr(v, "identifier", str(v)),
)
def test_variation_counts_follow_symmetry(piece, expected):
    assert len(piece.variations()) == expected


@pytest.mark.parametrize("piece", ALL_PIECES, ids=lambda p: p.identifier)
def test_variations_are_closed_under_rotate_and_flip(piece):
    variants = piece.variations()
    assert 1 <= len(variants) <= 8
    for v in variants:
        assert v.rotated() in variants
        assert v.flipped() in variants
        assert v.size == piece.size
        assert v.identifier == piece.identifier


@pytest.mark.parametrize("piece", ALL_PIECES, ids=lambda p: p.identifier)
def test_variations_are_normalized(piece):
    for v in piece.variations():
        assert v.shape.shifted() == v.shape


def test_variations_normalize_an_offset_authoring():
    offset = Piece.from_rows("o", [[0, 0, 0], [0, 1, 1], [0, 1, 1]])
    assert offset.variations() == {Piece.from_rows("o", [[1, 1, 0], [1, 1, 0], [0, 0, 0]])}


def test_piece_is_a_value():
    rows = [[1, 1], [1, 0]]
    shape = Shape(rows)
    p = Piece("a", shape)
    shape.set(1, 1, 1)
    assert p.size == 3
    assert p == Piece.from_rows("a", rows)
    assert hash(p) == hash(Piece.from_rows("a", rows))


def test_mutating_the_exposed_shape_leaves_the_piece_alone():
    p = Piece.from_rows("q", [[1, 1], [1, 0]])
    before = hash(p)
    bag = {p}
    s = p.shape
    s.rotate()
    s.set(1, 1, 1)
    assert hash(p) == before
    assert p in bag
    assert p.contents == (1, 1, 1, 0)
    assert p.shape == Shape([[1, 1], [1, 0]])


def test_rejects_bad_pieces():
    with pytest.raises(ValueError):
        Piece("", Shape([[1]]))
    with pytest.raises(ValueError):
        Piece("z", Shape.empty(2))
    with pytest.raises(TypeError):
        Piece("z", [[1]])


def test_description_uses_identifier():
    assert SMALL["V"].description() == "..V\n..V\nVVV\n"
