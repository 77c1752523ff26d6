# piece.py — named shape plus its rotation / reflection closure
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, List, Sequence, Tuple

from coordinate import Coordinate
from shape import Shape


@dataclass(frozen=True)
class Piece:
    identifier: str
    _shape: Shape = field(repr=False)

    def __post_init__(self):
        if not isinstance(self.identifier, str) or not self.identifier:
            raise ValueError(f"Piece identifier must be a non-empty string, got {self.identifier!r}")
        if not isinstance(self._shape, Shape):
            raise TypeError(f"Piece shape must be a Shape, got {type(self._shape).__name__}")
        if self._shape.count() == 0:
            raise ValueError(f"Piece {self.identifier!r} has no occupied cells")
        # private copy; the Shape handed in stays with the caller
        object.__setattr__(self, "_shape", self._shape.copy())

    @classmethod
    def from_rows(cls, identifier: str, rows: Sequence[Sequence[int]]) -> "Piece":
        return cls(identifier, Shape(rows))

    @property
    def shape(self) -> Shape:
        """A fresh copy; mutating it never touches the piece."""
        return self._shape.copy()

    @property
    def contents(self) -> Tuple[int, ...]:
        return self._shape.contents

    def occupied(self) -> Iterator[Tuple[int, int]]:
        return self._shape.occupied()

    @property
    def rows(self) -> int:
        return self._shape.rows

    @property
    def columns(self) -> int:
        return self._shape.columns

    @property
    def size(self) -> int:
        return self._shape.count()

    @property
    def has_content_at_origin(self) -> bool:
        return self._shape.get(0, 0) == 1

    def has_content_at(self, coordinate: Coordinate) -> bool:
        return self._shape.get(coordinate.row, coordinate.col) == 1

    def all_coordinates(self, from_top_left: Coordinate) -> List[Coordinate]:
        """Absolute footprint when the shape's ``(0, 0)`` sits on ``from_top_left``."""
        r0, c0 = from_top_left.row, from_top_left.col
        return [Coordinate(c0 + c, r0 + r) for r, c in self._shape.occupied()]

    def rotated(self, shift: bool = True) -> "Piece":
        s = self._shape.rotated()
        if shift:
            s.shift_toward_origin()
        return Piece(self.identifier, s)

    def flipped(self, shift: bool = True) -> "Piece":
        s = self._shape.flipped()
        if shift:
            s.shift_toward_origin()
        return Piece(self.identifier, s)

    def normalized(self) -> "Piece":
        return Piece(self.identifier, self._shape.shifted())

    def variations(self) -> FrozenSet["Piece"]:
        """Every distinct rotation/reflection, each shifted toward the origin.

        Symmetric shapes collapse: a cross yields one variant, a straight line
        two, a chiral pentomino eight.
        """

        out = set()
        for start in (self.normalized(), self.flipped()):
            p = start
            for _ in range(4):
                out.add(p)
                p = p.rotated()
        return frozenset(out)

    def description(self, empty: str = ".") -> str:
        return self._shape.description(content=self.identifier, empty=empty)

    def __str__(self) -> str:
        return self.description()


__all__ = ["Piece"]
