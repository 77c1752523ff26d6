# solver/search.py — depth-first exact tiling with state memoisation
from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, List, Optional, Sequence, Set, Tuple

from board import Board
from config import CFG
from piece import Piece
from solver.ordering import AnchorOrdering, fixed_order

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchState:
    board: Board
    remaining: range  # half-open cursor into the ordered piece list


@dataclass(frozen=True)
class CloseAttempt:
    """A state reached with exactly one piece left to place."""

    count: int
    board: Board
    final_piece: Piece


@dataclass
class SearchStats:
    expanded: int = 0
    pushed: int = 0
    island_prunes: int = 0
    duplicate_prunes: int = 0
    close_attempts: int = 0
    elapsed_sec: float = 0.0

    def as_fields(self) -> Dict[str, object]:
        return {
            "expanded": self.expanded,
            "pushed": self.pushed,
            "islands": self.island_prunes,
            "duplicates": self.duplicate_prunes,
            "close_attempts": self.close_attempts,
            "elapsed": f"{self.elapsed_sec:.2f}s",
        }


@dataclass
class SearchResult:
    board: Optional[Board]
    stats: SearchStats = field(default_factory=SearchStats)
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.board is not None


CloseAttemptSink = Callable[[CloseAttempt], None]


def _fields(**kw) -> str:
    return " ".join(f"{k}={v}" for k, v in kw.items() if v is not None and v != "")


def _canonical_variants(piece: Piece) -> Tuple[Piece, ...]:
    # frozenset iteration order follows string hashing; sort so pushes are stable
    return tuple(sorted(piece.variations(), key=lambda p: p.contents))


def run_search(
    board: Board,
    pieces: Sequence[Piece],
    *,
    ordering: Optional[AnchorOrdering] = None,
    on_close_attempt: Optional[CloseAttemptSink] = None,
    log_every: Optional[int] = None,
) -> SearchResult:
    """Place every piece, strictly in list order, until the board is full.

    The frontier is a deque used as a stack, so depth is bounded by memory
    rather than the interpreter's recursion limit.  States already expanded
    are skipped; symmetric variants often produce the same board by
    different routes.  ``on_close_attempt`` is called synchronously on this
    thread, in search order, whenever a state with one piece left is
    expanded.  No solution is reported as ``board=None``, never raised.
    """

    pieces = tuple(pieces)
    for p in pieces:
        if not isinstance(p, Piece):
            raise TypeError(f"Expected Piece, got {type(p).__name__}")
        if p.size < 2:
            # single cells break the island rule: a walled-in cell could still take one
            raise ValueError(f"Piece {p.identifier!r} has size {p.size}; every piece needs at least two cells")
    order = ordering or fixed_order
    every = CFG.LOG_EVERY if log_every is None else int(log_every)
    stats = SearchStats()
    t0 = time.time()

    def _finish(found: Optional[Board], reason: Optional[str]) -> SearchResult:
        stats.elapsed_sec = time.time() - t0
        logger.info(
            "Search finished | %s",
            _fields(ok=found is not None, reason=reason, **stats.as_fields()),
        )
        return SearchResult(found, stats, reason)

    piece_area = sum(p.size for p in pieces)
    open_cells = board.empty_count
    logger.info(
        "Search started | %s",
        _fields(board=f"{board.width}x{board.height}", pieces=len(pieces), piece_cells=piece_area, empty_cells=open_cells),
    )
    if piece_area != open_cells:
        logger.warning(
            "Area mismatch | %s", _fields(piece_cells=piece_area, empty_cells=open_cells)
        )
        return _finish(None, "piece area does not match empty cells")

    variants: Dict[int, Tuple[Piece, ...]] = {}
    stack: Deque[SearchState] = deque([SearchState(board, range(len(pieces)))])
    visited: Set[SearchState] = set()

    while stack:
        state = stack.pop()

        if not state.remaining:
            if state.board.is_full:
                return _finish(state.board, None)
            continue

        if state.board.has_island_square:
            stats.island_prunes += 1
            continue

        if state in visited:
            stats.duplicate_prunes += 1
            continue
        visited.add(state)
        stats.expanded += 1
        if every > 0 and stats.expanded % every == 0:
            logger.debug("Search heartbeat | %s", _fields(stack=len(stack), **stats.as_fields()))

        index = state.remaining[0]
        if len(state.remaining) == 1:
            stats.close_attempts += 1
            logger.debug("Close attempt | %s", _fields(count=stats.close_attempts, final_piece=pieces[index].identifier))
            if on_close_attempt is not None:
                on_close_attempt(CloseAttempt(stats.close_attempts, state.board, pieces[index]))

        rest = state.remaining[1:]
        if index not in variants:
            variants[index] = _canonical_variants(pieces[index])
        for variant in variants[index]:
            anchors: List = state.board.possible_coordinates(variant)
            for anchor in order(anchors):
                stack.append(SearchState(state.board.place(variant, anchor), rest))
                stats.pushed += 1

    return _finish(None, "search space exhausted")


def solve(
    board: Board,
    pieces: Sequence[Piece],
    *,
    ordering: Optional[AnchorOrdering] = None,
    on_close_attempt: Optional[CloseAttemptSink] = None,
) -> Optional[Board]:
    """Return a fully tiled board, or ``None`` when the search finds none."""
    return run_search(board, pieces, ordering=ordering, on_close_attempt=on_close_attempt).board


__all__ = ["SearchState", "CloseAttempt", "SearchStats", "SearchResult", "run_search", "solve"]
