# catalog.py — fixed piece tables for the supported puzzle sets
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from piece import Piece


@dataclass(frozen=True)
class Catalog:
    name: str
    width: int
    height: int
    pieces: Tuple[Piece, ...]

    @property
    def area(self) -> int:
        return sum(p.size for p in self.pieces)


def _p(identifier: str, *rows) -> Piece:
    return Piece.from_rows(identifier, rows)


# ======= Small game: eight pentominoes on an 8 × 5 board =======
SMALL_GAME_PIECES: Tuple[Piece, ...] = (
    _p("X", [0, 1, 0],
            [1, 1, 1],
            [0, 1, 0]),
    _p("U", [1, 1, 0],
            [1, 0, 0],
            [1, 1, 0]),
    _p("I", [1, 1, 1, 1, 1],
            [0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0]),
    _p("W", [0, 1, 1],
            [1, 1, 0],
            [1, 0, 0]),
    _p("F", [0, 1, 1],
            [1, 1, 0],
            [0, 1, 0]),
    _p("P", [1, 1, 1],
            [1, 1, 0],
            [0, 0, 0]),
    _p("V", [0, 0, 1],
            [0, 0, 1],
            [1, 1, 1]),
    _p("N", [0, 0, 1, 1],
            [1, 1, 1, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0]),
)

# ======= Large game: eleven pieces (64 cells) on an 8 × 8 board =======
LARGE_GAME_PIECES: Tuple[Piece, ...] = (
    _p("L", [1, 1, 0, 0],
            [1, 0, 0, 0],
            [1, 0, 0, 0],
            [1, 0, 0, 0]),
    _p("V", [1, 1, 1],
            [1, 0, 0],
            [1, 0, 0]),
    _p("T", [1, 1, 1],
            [0, 1, 0],
            [0, 1, 0]),
    _p("W", [1, 0, 0],
            [1, 1, 0],
            [0, 1, 1]),
    _p("U", [1, 0, 0, 1],
            [1, 1, 1, 1],
            [0, 0, 0, 0],
            [0, 0, 0, 0]),
    _p("X", [0, 1, 0],
            [1, 1, 1],
            [0, 1, 0]),
    _p("H", [1, 0, 0],
            [1, 1, 1],
            [1, 0, 1]),
    _p("E", [1, 1, 0],
            [1, 1, 1],
            [0, 1, 1]),
    _p("P", [1, 0, 0],
            [1, 1, 0],
            [1, 1, 0]),
    _p("A", [1, 0, 0],
            [1, 1, 1],
            [1, 1, 1]),
    _p("F", [1, 0, 0, 0],
            [1, 0, 1, 1],
            [1, 1, 1, 1],
            [0, 0, 0, 0]),
)

# ======= Sanity check: four 2 × 2 squares on a 4 × 4 board =======
SQUARE_PIECES: Tuple[Piece, ...] = tuple(
    _p(ident, [1, 1], [1, 1]) for ident in ("A", "B", "C", "D")
)

CATALOGS: Dict[str, Catalog] = {
    "small": Catalog("small", 8, 5, SMALL_GAME_PIECES),
    "large": Catalog("large", 8, 8, LARGE_GAME_PIECES),
    "squares": Catalog("squares", 4, 4, SQUARE_PIECES),
}


def get_catalog(name: str) -> Catalog:
    key = (name or "").strip().lower()
    try:
        return CATALOGS[key]
    except KeyError:
        raise KeyError(f"Unknown catalog {name!r}; choose one of {', '.join(sorted(CATALOGS))}") from None


__all__ = ["Catalog", "CATALOGS", "get_catalog", "SMALL_GAME_PIECES", "LARGE_GAME_PIECES", "SQUARE_PIECES"]
