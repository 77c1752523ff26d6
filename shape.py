# shape.py — square binary matrix with in-place rotate / flip / normalize
from __future__ import annotations

from typing import Iterator, List, Sequence, Tuple


class Shape:
    """Fixed-size binary grid describing which cells a piece occupies.

    Cells live in a flat row-major list.  The rotation below is the classic
    layer-by-layer 4-cycle, which is only correct for square grids, so the
    constructor rejects anything that is not ``n × n``.  Use
    :meth:`Shape.padded` to author a rectangular shape; it pads the grid out
    to its square bounding box.
    """

    __slots__ = ("rows", "columns", "_contents")

    def __init__(self, contents: Sequence[Sequence[int]]):
        grid = [list(r) for r in contents]
        if not grid or not grid[0]:
            raise ValueError("Shape needs at least one row and one column")
        columns = len(grid[0])
        for r in grid:
            if len(r) != columns:
                raise ValueError(f"Ragged shape rows: expected {columns} cells, got {len(r)}")
            for v in r:
                if v not in (0, 1):
                    raise ValueError(f"Shape cells must be 0 or 1, got {v!r}")
        if len(grid) != columns:
            raise ValueError(
                f"Shape must be square ({len(grid)}×{columns} given); use Shape.padded() for rectangles"
            )
        self.rows = len(grid)
        self.columns = columns
        self._contents: List[int] = [int(v) for r in grid for v in r]

    @classmethod
    def empty(cls, size: int) -> "Shape":
        return cls([[0] * size for _ in range(size)])

    @classmethod
    def padded(cls, contents: Sequence[Sequence[int]]) -> "Shape":
        """Pad a rectangular grid with zero rows/columns to a square."""

        grid = [list(r) for r in contents]
        if not grid:
            raise ValueError("Shape needs at least one row and one column")
        width = max(len(r) for r in grid)
        side = max(width, len(grid))
        out = [r + [0] * (side - len(r)) for r in grid]
        out.extend([0] * side for _ in range(side - len(grid)))
        return cls(out)

    # ---- raw access ----

    def _index(self, row: int, col: int) -> int:
        if not (0 <= row < self.rows and 0 <= col < self.columns):
            raise IndexError(f"({row}, {col}) outside {self.rows}×{self.columns} shape")
        return row * self.columns + col

    def get(self, row: int, col: int) -> int:
        return self._contents[self._index(row, col)]

    def set(self, row: int, col: int, value: int) -> None:
        if value not in (0, 1):
            raise ValueError(f"Shape cells must be 0 or 1, got {value!r}")
        self._contents[self._index(row, col)] = int(value)

    @property
    def contents(self) -> Tuple[int, ...]:
        return tuple(self._contents)

    def to_rows(self) -> List[List[int]]:
        c = self.columns
        return [self._contents[i:i + c] for i in range(0, len(self._contents), c)]

    def occupied(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(row, col)`` for every occupied cell in row-major order."""
        for idx, v in enumerate(self._contents):
            if v:
                yield divmod(idx, self.columns)

    def count(self) -> int:
        return sum(self._contents)

    def copy(self) -> "Shape":
        return Shape(self.to_rows())

    # ---- in-place transforms ----

    def rotate(self) -> None:
        """Rotate 90° clockwise in place."""
        n = self.rows
        cells = self._contents
        for layer in range(n // 2):
            first = layer
            last = n - layer - 1
            for i in range(first, last):
                offset = i - first
                top = first * n + i
                left = (last - offset) * n + first
                bottom = last * n + (last - offset)
                right = i * n + last

                temp = cells[top]
                cells[top] = cells[left]
                cells[left] = cells[bottom]
                cells[bottom] = cells[right]
                cells[right] = temp

    def flip(self) -> None:
        """Mirror horizontally in place (reverse every row)."""
        self._contents = [v for r in self.to_rows() for v in reversed(r)]

    def shift_toward_origin(self) -> None:
        """Slide the occupied region up and left until it touches ``(0, 0)``.

        Leading empty rows and leading empty columns move to the trailing edge;
        the dimensions never change.
        """

        grid = self.to_rows()
        lead_rows = 0
        for r in grid:
            if any(r):
                break
            lead_rows += 1
        if lead_rows == self.rows:
            return
        grid = grid[lead_rows:] + [[0] * self.columns for _ in range(lead_rows)]

        lead_cols = 0
        for c in range(self.columns):
            if any(r[c] for r in grid):
                break
            lead_cols += 1
        grid = [r[lead_cols:] + [0] * lead_cols for r in grid]

        self._contents = [v for r in grid for v in r]

    # ---- copying transforms ----

    def rotated(self) -> "Shape":
        out = self.copy()
        out.rotate()
        return out

    def flipped(self) -> "Shape":
        out = self.copy()
        out.flip()
        return out

    def shifted(self) -> "Shape":
        out = self.copy()
        out.shift_toward_origin()
        return out

    # ---- value semantics ----

    def key(self) -> Tuple[int, int, Tuple[int, ...]]:
        return (self.rows, self.columns, tuple(self._contents))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Shape):
            return NotImplemented
        return self.key() == other.key()

    def __hash__(self) -> int:
        return hash(self.key())

    def description(self, content: str = "1", empty: str = "0") -> str:
        return "".join(
            "".join(content if v else empty for v in r) + "\n" for r in self.to_rows()
        )

    def __str__(self) -> str:
        return self.description()

    def __repr__(self) -> str:
        return f"Shape({self.to_rows()!r})"


__all__ = ["Shape"]
