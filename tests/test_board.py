import pytest

from board import EMPTY, Board
from catalog import SMALL_GAME_PIECES, SQUARE_PIECES
from coordinate import Coordinate
from piece import Piece

SQUARE = SQUARE_PIECES[0]
CROSS = SMALL_GAME_PIECES[0]


def test_new_board_is_empty():
    b = Board(3, 2)
    assert b.empty_count == 6
    assert len(b.all_coordinates) == 6
    assert b.empty_coordinates == b.all_coordinates
    assert not b.is_full
    assert b.element_at(Coordinate(2, 1)) is EMPTY


@pytest.mark.parametrize("w, h", [(0, 3), (3, 0), (-1, 2), (2.5, 2), (True, 2)])
def test_rejects_bad_dimensions(w, h):
    with pytest.raises(ValueError):
        Board(w, h)


def test_is_valid_bounds():
    b = Board(4, 2)
    assert b.is_valid(Coordinate(3, 1))
    assert not b.is_valid(Coordinate(4, 0))
    assert not b.is_valid(Coordinate(0, 2))
    assert not b.is_valid(Coordinate(-1, 0))
    with pytest.raises(IndexError):
        b.element_at(Coordinate(4, 0))


def test_place_returns_new_board_and_keeps_original():
    b = Board(4, 4)
    placed = b.place(SQUARE, Coordinate(1, 1))
    assert b.empty_count == 16
    assert placed.empty_count == 12
    for c in SQUARE.all_coordinates(Coordinate(1, 1)):
        assert placed.element_at(c) == "A"
    assert placed != b


def test_place_off_board_raises():
    with pytest.raises(IndexError):
        Board(2, 2).place(SQUARE, Coordinate(1, 1))


def test_possible_coordinates_for_origin_piece_on_empty_board():
    anchors = Board(3, 3).possible_coordinates(SQUARE)
    assert anchors == [Coordinate(0, 0), Coordinate(1, 0), Coordinate(0, 1), Coordinate(1, 1)]


def test_possible_coordinates_skip_occupied_cells():
    b = Board(3, 3).place(Piece.from_rows("z", [[1]]), Coordinate(1, 1))
    assert b.possible_coordinates(SQUARE) == []


def test_possible_coordinates_when_origin_cell_is_hollow():
    # cross at anchor (0,0) covers (1,0) (0,1) (1,1) (2,1) (1,2); the anchor cell stays empty
    blocked = Board.from_rows(["#..", "...", "..."])
    assert blocked.possible_coordinates(CROSS) == [Coordinate(0, 0)]
    assert Board(3, 3).possible_coordinates(CROSS) == [Coordinate(0, 0)]


def test_island_square_detection():
    assert not Board(3, 3).has_island_square
    walled = Board.from_rows([".#.", "##.", "..."])
    assert walled.has_island_square
    corner_pair = Board.from_rows(["..#", "###", "..."])
    assert not corner_pair.has_island_square


def test_full_board_has_no_island():
    assert not Board.from_rows(["ab", "cd"]).has_island_square


def test_render_and_parse_round_trip():
    b = Board(3, 2).place(Piece.from_rows("q", [[1, 1], [0, 0]]), Coordinate(1, 0))
    assert b.render() == ".qq\n...\n"
    assert str(b) == b.render()
    assert b.render(empty="_") == "_qq\n___\n"
    assert Board.from_rows(b.render().splitlines()) == b


def test_from_rows_rejects_ragged_input():
    with pytest.raises(ValueError):
        Board.from_rows(["...", ".."])


def test_boards_hash_by_cells():
    a = Board(2, 2).place(SQUARE, Coordinate(0, 0))
    b = Board(2, 2).place(SQUARE, Coordinate(0, 0))
    assert a == b and hash(a) == hash(b)
    assert a.is_full
    assert len({a, b, Board(2, 2)}) == 2


def test_footprints_group_cells_by_identifier():
    b = Board.from_rows(["aab", "a.b"])
    fp = b.footprints()
    assert fp["a"] == {Coordinate(0, 0), Coordinate(1, 0), Coordinate(0, 1)}
    assert fp["b"] == {Coordinate(2, 0), Coordinate(2, 1)}
