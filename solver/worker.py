# solver/worker.py — run a search off the caller's thread
from __future__ import annotations

import logging
import queue
import threading
import traceback
from typing import List, Optional, Sequence

from board import Board
from piece import Piece
from solver.ordering import AnchorOrdering
from solver.search import CloseAttempt, SearchResult, SearchStats, run_search

logger = logging.getLogger(__name__)


class SolveJob:
    """A single search running on a daemon thread.

    Close attempts flow one way: the search thread ``put``s them on
    :attr:`events` and whoever owns presentation calls :meth:`drain`.  There is
    no cooperative cancellation; :meth:`abandon` only marks the result as
    unwanted and stops queuing close attempts; the thread runs to completion
    in the background.
    """

    def __init__(
        self,
        board: Board,
        pieces: Sequence[Piece],
        *,
        ordering: Optional[AnchorOrdering] = None,
        name: str = "solve-job",
    ):
        self.board = board
        self.pieces = tuple(pieces)
        self.ordering = ordering
        self.events: "queue.Queue[CloseAttempt]" = queue.Queue()
        self._done = threading.Event()
        self._abandoned = False
        self._result: Optional[SearchResult] = None
        self._error: Optional[BaseException] = None
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    def _run(self) -> None:
        try:
            self._result = run_search(
                self.board,
                self.pieces,
                ordering=self.ordering,
                on_close_attempt=self._forward,
            )
        except Exception as e:
            logger.error("Solve job crashed | error=%s\n%s", e, traceback.format_exc())
            self._error = e
        finally:
            self._done.set()

    def _forward(self, attempt: CloseAttempt) -> None:
        # nobody drains an abandoned job
        if not self._abandoned:
            self.events.put(attempt)

    def start(self) -> "SolveJob":
        self._thread.start()
        return self

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._done.wait(timeout)

    @property
    def done(self) -> bool:
        return self._done.is_set()

    @property
    def abandoned(self) -> bool:
        return self._abandoned

    def abandon(self) -> None:
        self._abandoned = True
        self.drain()
        logger.info("Solve job abandoned | thread=%s", self._thread.name)

    def drain(self) -> List[CloseAttempt]:
        out: List[CloseAttempt] = []
        while True:
            try:
                out.append(self.events.get_nowait())
            except queue.Empty:
                return out

    @property
    def result(self) -> Optional[Board]:
        """Solved board, ``None`` for no solution / unfinished / abandoned."""
        if self._error is not None:
            raise self._error
        if self._abandoned or self._result is None:
            return None
        return self._result.board

    @property
    def stats(self) -> Optional[SearchStats]:
        return self._result.stats if self._result is not None else None

    @property
    def reason(self) -> Optional[str]:
        if self._error is not None:
            return f"{type(self._error).__name__}: {self._error}"
        return self._result.reason if self._result is not None else None


__all__ = ["SolveJob"]
