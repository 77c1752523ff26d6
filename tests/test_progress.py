import importlib
import json
import os
import time

from board import Board
from coordinate import Coordinate
from catalog import SQUARE_PIECES
from progress import (
    reset, set_status, set_done, set_result_url, set_puzzle, set_message, snapshot,
    record_close_attempts, format_elapsed,
)
from solver.search import CloseAttempt


def _attempt(count):
    board = Board(4, 4).place(SQUARE_PIECES[0], Coordinate(0, 0))
    return CloseAttempt(count, board, SQUARE_PIECES[1])


def test_set_done_no_args_defaults_to_solved():
    reset()
    set_done()
    snap = snapshot()
    assert snap["status"] == "Solved"
    assert snap["done"] is True
    assert snap["ok"] is True
    assert snap["result_url"] == ""


def test_set_done_false_reports_no_solution():
    reset()
    set_status("Solving")
    set_done(False, message="search space exhausted")
    snap = snapshot()
    assert snap["status"] == "No solution"
    assert snap["message"] == "search space exhausted"
    assert snap["done"] is True
    assert snap["ok"] is False


def test_set_result_url_tracks_navigation_target():
    reset()
    set_result_url("/foo")
    snap = snapshot()
    assert snap["result_url"] == "/foo"
    assert snap["done"] is False


def test_reset_increments_run_identifier():
    reset()
    first = snapshot()["run_id"]
    reset()
    second = snapshot()["run_id"]
    assert isinstance(first, int)
    assert second == first + 1


def test_close_attempts_keep_latest_boards(monkeypatch):
    import progress as progress_module

    monkeypatch.setattr(progress_module.CFG, "PROGRESS_KEEP", 2, raising=False)
    reset()
    set_puzzle("squares 4 × 4")
    record_close_attempts([_attempt(1), _attempt(2)])
    record_close_attempts([_attempt(3)])
    record_close_attempts([])
    snap = snapshot()
    assert snap["puzzle"] == "squares 4 × 4"
    assert snap["attempts"] == 3
    assert snap["final_piece"] == "B"
    assert snap["last_board"].startswith("AA..")
    assert [r["count"] for r in snap["recent"]] == [2, 3]


def test_snapshot_reads_state_written_by_other_process(tmp_path, monkeypatch):
    import progress as progress_module

    state_path = tmp_path / "state.json"
    monkeypatch.setenv("PROGRESS_STATE_FILE", str(state_path))
    progress = importlib.reload(progress_module)

    progress.reset()
    progress.set_puzzle("small 8 × 5")
    first = progress.snapshot()
    assert first["puzzle"] == "small 8 × 5"

    data = dict(first)
    data["puzzle"] = "large 8 × 8"
    data["attempts"] = 9
    state_path.write_text(json.dumps(data))
    os.utime(state_path, None)

    with progress.PROGRESS_LOCK:
        progress.PROGRESS["puzzle"] = ""
        progress.PROGRESS["attempts"] = 0
        progress._LAST_STATE_MTIME = 0.0

    time.sleep(0.01)
    updated = progress.snapshot()
    assert updated["puzzle"] == "large 8 × 8"
    assert updated["attempts"] == 9

    monkeypatch.undo()
    importlib.reload(progress_module)


def test_set_message_is_visible_until_the_run_finishes():
    reset()
    set_message("Searching with fixed_order")
    assert snapshot()["message"] == "Searching with fixed_order"
    set_done(True, message="Solved")
    assert snapshot()["message"] == "Solved"


def test_format_elapsed_buckets():
    assert format_elapsed(0.4) == "0s"
    assert format_elapsed(65) == "1m 5s"
    assert format_elapsed(3 * 3600 + 125) == "3h 2m"
