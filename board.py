# board.py — immutable grid of empty / occupied cells
from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from coordinate import CARDINAL, Coordinate
from piece import Piece

# A cell is either EMPTY or the identifier of the piece covering it.
Element = Optional[str]
EMPTY: Element = None


def _all_coordinates(width: int, height: int) -> FrozenSet[Coordinate]:
    return frozenset(Coordinate(x, y) for y in range(height) for x in range(width))


class Board:
    """Rectangular board value.

    Boards never change after construction: :meth:`place` hands back a new
    board and leaves the receiver alone, so states already sitting on the
    search stack or in the visited set stay valid.
    """

    __slots__ = ("width", "height", "_cells", "_all", "_hash")

    def __init__(self, width: int, height: int, cells: Optional[Iterable[Element]] = None):
        if isinstance(width, bool) or isinstance(height, bool) or not isinstance(width, int) or not isinstance(height, int):
            raise ValueError(f"Board dimensions must be integers, got {width!r} × {height!r}")
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width} × {height}")
        self.width = width
        self.height = height
        if cells is None:
            self._cells: Tuple[Element, ...] = (EMPTY,) * (width * height)
        else:
            self._cells = tuple(cells)
            if len(self._cells) != width * height:
                raise ValueError(f"Expected {width * height} cells, got {len(self._cells)}")
        self._all = _all_coordinates(width, height)
        self._hash: Optional[int] = None

    @classmethod
    def _derive(cls, parent: "Board", cells: Tuple[Element, ...]) -> "Board":
        out = cls.__new__(cls)
        out.width = parent.width
        out.height = parent.height
        out._cells = cells
        out._all = parent._all
        out._hash = None
        return out

    @classmethod
    def from_rows(cls, lines: Iterable[str], empty: str = ".") -> "Board":
        """Parse a :meth:`render` projection; any other character is a piece identifier."""

        rows = [ln for ln in (l.rstrip("\n") for l in lines) if ln]
        if not rows:
            raise ValueError("Board needs at least one row")
        width = len(rows[0])
        for ln in rows:
            if len(ln) != width:
                raise ValueError(f"Ragged board rows: expected {width} cells, got {len(ln)}")
        cells = [EMPTY if ch == empty else ch for ln in rows for ch in ln]
        return cls(width, len(rows), cells)

    # ---- lookup ----

    @property
    def all_coordinates(self) -> FrozenSet[Coordinate]:
        return self._all

    @property
    def cells(self) -> Tuple[Element, ...]:
        return self._cells

    def is_valid(self, coordinate: Coordinate) -> bool:
        return 0 <= coordinate.y < self.height and 0 <= coordinate.x < self.width

    def _index(self, coordinate: Coordinate) -> int:
        if not self.is_valid(coordinate):
            raise IndexError(f"{coordinate} outside {self.width} × {self.height} board")
        return coordinate.y * self.width + coordinate.x

    def element_at(self, coordinate: Coordinate) -> Element:
        return self._cells[self._index(coordinate)]

    def _is_open(self, coordinate: Coordinate) -> bool:
        return self.is_valid(coordinate) and self._cells[coordinate.y * self.width + coordinate.x] is EMPTY

    @property
    def empty_coordinates(self) -> FrozenSet[Coordinate]:
        w = self.width
        return frozenset(Coordinate(i % w, i // w) for i, v in enumerate(self._cells) if v is EMPTY)

    @property
    def empty_count(self) -> int:
        return sum(1 for v in self._cells if v is EMPTY)

    @property
    def is_full(self) -> bool:
        return all(v is not EMPTY for v in self._cells)

    # ---- placement ----

    def possible_coordinates(self, piece: Piece) -> List[Coordinate]:
        """Anchors where every footprint cell of ``piece`` is on the board and empty.

        When the piece occupies its own origin the anchor must itself be empty,
        so only empty cells are tried; otherwise every coordinate is a
        candidate.  Row-major order.
        """

        if piece.has_content_at_origin:
            candidates: Iterable[Coordinate] = self.empty_coordinates
        else:
            candidates = self._all
        offsets = list(piece.occupied())
        out = []
        for anchor in candidates:
            r0, c0 = anchor.y, anchor.x
            if all(self._is_open(Coordinate(c0 + c, r0 + r)) for r, c in offsets):
                out.append(anchor)
        out.sort(key=lambda a: (a.y, a.x))
        return out

    def place(self, piece: Piece, at: Coordinate) -> "Board":
        # Overlap is the caller's contract; only bounds are enforced here.
        cells = list(self._cells)
        for coord in piece.all_coordinates(at):
            cells[self._index(coord)] = piece.identifier
        return Board._derive(self, tuple(cells))

    # ---- pruning ----

    @property
    def has_island_square(self) -> bool:
        """True when some empty cell has no empty cardinal neighbour."""
        w = self.width
        for i, v in enumerate(self._cells):
            if v is not EMPTY:
                continue
            here = Coordinate(i % w, i // w)
            if not any(self._is_open(n) for n in here.neighbors(CARDINAL)):
                return True
        return False

    # ---- inspection ----

    def footprints(self) -> Dict[str, Set[Coordinate]]:
        out: Dict[str, Set[Coordinate]] = {}
        w = self.width
        for i, v in enumerate(self._cells):
            if v is not EMPTY:
                out.setdefault(v, set()).add(Coordinate(i % w, i // w))
        return out

    def render(self, empty: str = ".") -> str:
        w = self.width
        lines = []
        for y in range(self.height):
            row = self._cells[y * w:(y + 1) * w]
            lines.append("".join(empty if v is EMPTY else v for v in row) + "\n")
        return "".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height}, empty={self.empty_count})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.width, self.height, self._cells) == (other.width, other.height, other._cells)

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash((self.width, self.height, self._cells))
        return self._hash


__all__ = ["Board", "Element", "EMPTY"]
