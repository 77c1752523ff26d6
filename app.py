# app.py — puzzle form, background solve, pollable progress
from __future__ import annotations
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from flask import Flask, request, render_template, send_from_directory, jsonify, url_for

from board import Board
from catalog import CATALOGS, Catalog, get_catalog
from config import CFG
from io_files import write_solution, write_layout_view_html
from render import render_board_svg
from solver.ordering import ordering_from_config
from solver.worker import SolveJob

from progress import (
    reset as progress_reset,
    as_json as progress_json,
    start_timer as progress_start,
    set_status, set_puzzle, set_elapsed, set_done, set_result_url,
    set_message, record_close_attempts, log_attempt_detail, format_elapsed,
)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
POLL_SECONDS = 0.25


def _resolve_output_paths(configured: str, fallback: str) -> Tuple[str, str, str]:
    name = (configured or "").strip() or fallback
    if os.path.isabs(name):
        full_path = name
    else:
        full_path = os.path.abspath(os.path.join(BASE_DIR, name))
    directory = os.path.dirname(full_path) or BASE_DIR
    filename = os.path.basename(full_path) or fallback
    return full_path, directory, filename


_SOLUTION_FULL_PATH, SOLUTION_DIR, SOLUTION_FILENAME = _resolve_output_paths(
    CFG.SOLUTION_OUT, "solution.txt"
)
_LAYOUT_FULL_PATH, LAYOUT_DIR, LAYOUT_FILENAME = _resolve_output_paths(
    CFG.LAYOUT_HTML, "layout_view.html"
)

LAST_RESULT: Dict[str, Any] = {
    "ok": False,
    "reason": "",
    "puzzle": "",
    "board_text": "",
    "svg": "",
    "legend": "",
    "attempts": 0,
    "elapsed_str": "0s",
    "solution_filename": SOLUTION_FILENAME,
    "layout_filename": LAYOUT_FILENAME,
}

app = Flask(__name__, template_folder="templates")


@dataclass
class PuzzleRequest:
    catalog: Catalog
    width: int
    height: int
    shuffle: bool
    seed: Optional[int]

    @property
    def label(self) -> str:
        return f"{self.catalog.name} {self.width} × {self.height} ({len(self.catalog.pieces)} pieces)"


@app.after_request
def _no_cache_progress(resp):
    if request.path == "/progress":
        resp.headers["Cache-Control"] = "no-store, max-age=0"
        resp.headers["Pragma"] = "no-cache"
        resp.headers["Expires"] = "0"
    return resp


@app.route("/")
def index():
    return render_template("index.html", catalogs=sorted(CATALOGS.values(), key=lambda c: c.name), default=CFG.CATALOG)


@app.route("/result/latest")
def result_latest():
    return render_template("result.html", **LAST_RESULT)


def _first(v: Any) -> Any:
    if isinstance(v, (list, tuple)):
        return v[0] if v else None
    return v


def _opt_int(v: Any, field: str) -> Optional[int]:
    v = _first(v)
    if v is None or str(v).strip() == "":
        return None
    try:
        return int(str(v).strip())
    except ValueError:
        raise ValueError(f"{field} must be an integer, got {v!r}") from None


def _truthy(v: Any) -> bool:
    v = _first(v)
    return str(v).strip().lower() in ("1", "true", "yes", "on") if v is not None else False


def _parse_solve_request(like: Dict[str, Any]) -> Tuple[Optional[PuzzleRequest], Optional[str]]:
    """Turn posted form/JSON fields into a puzzle request, or an error message."""

    try:
        catalog = get_catalog(str(_first(like.get("catalog")) or CFG.CATALOG))
    except KeyError as e:
        return None, str(e.args[0])
    try:
        width = _opt_int(like.get("width"), "width") or CFG.BOARD_W or catalog.width
        height = _opt_int(like.get("height"), "height") or CFG.BOARD_H or catalog.height
        seed = _opt_int(like.get("seed"), "seed")
    except ValueError as e:
        return None, str(e)
    if width <= 0 or height <= 0:
        return None, f"board dimensions must be positive, got {width} × {height}"
    return PuzzleRequest(catalog, width, height, _truthy(like.get("shuffle")), seed), None


def _merge_like_mapping() -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        merged.update(payload)
    for k, v in request.form.to_dict(flat=False).items():
        merged.setdefault(k, v)
    return merged


def _pump(job: SolveJob) -> int:
    batch = job.drain()
    record_close_attempts(batch)
    return len(batch)


def _run_job(job: SolveJob, poll: float = POLL_SECONDS) -> None:
    """Start ``job`` and forward its close attempts to progress until it ends."""

    job.start()
    while not job.wait(poll):
        _pump(job)
    _pump(job)


@app.route("/solve", methods=["POST"])
def solve():
    progress_reset()
    progress_start()
    set_status("Solving")
    t0 = time.time()

    like = _merge_like_mapping()
    puzzle, err = _parse_solve_request(like)
    if err or puzzle is None:
        reason = f"Bad request: {err}"
        set_done(False, message=reason)
        set_status("Error")
        LAST_RESULT.update({
            "ok": False,
            "reason": reason,
            "puzzle": "",
            "board_text": "",
            "svg": "",
            "legend": "",
            "attempts": 0,
            "elapsed_str": format_elapsed(time.time() - t0),
        })
        set_result_url(url_for("result_latest"))
        return render_template("result.html", **LAST_RESULT), 400

    set_puzzle(puzzle.label)
    ordering = ordering_from_config(CFG, randomize=puzzle.shuffle or None, seed=puzzle.seed)
    order_name = getattr(ordering, "__name__", repr(ordering))
    set_message(f"Searching with {order_name}")
    log_attempt_detail("Solve requested", puzzle=puzzle.label, ordering=order_name)

    job = SolveJob(Board(puzzle.width, puzzle.height), puzzle.catalog.pieces, ordering=ordering)
    try:
        _run_job(job)
        solved = job.result
    except Exception as e:
        reason = f"solver exception: {type(e).__name__}: {e}"
        set_done(False, message=reason)
        set_status("Error")
        LAST_RESULT.update({
            "ok": False,
            "reason": reason,
            "puzzle": puzzle.label,
            "board_text": "",
            "svg": "",
            "legend": "",
            "attempts": 0,
            "elapsed_str": format_elapsed(time.time() - t0),
        })
        set_result_url(url_for("result_latest"))
        return render_template("result.html", **LAST_RESULT), 500

    ok = solved is not None
    stats = job.stats
    reason = "" if ok else (job.reason or "No solution found")
    set_elapsed(time.time() - t0)
    set_done(ok, message=reason or "Solved", stats=stats.as_fields() if stats else None)

    svg = legend = ""
    layout_name = LAYOUT_FILENAME
    solution_name = os.path.basename(write_solution(solved, BASE_DIR)) or SOLUTION_FILENAME
    if solved is not None:
        svg, legend = render_board_svg(solved)
        layout_path = write_layout_view_html(svg, legend, BASE_DIR, grid_label=puzzle.label)
        layout_name = os.path.basename(layout_path) or LAYOUT_FILENAME

    LAST_RESULT.update({
        "ok": ok,
        "reason": reason,
        "puzzle": puzzle.label,
        "board_text": solved.render() if solved is not None else "",
        "svg": svg,
        "legend": legend,
        "attempts": stats.close_attempts if stats else 0,
        "elapsed_str": format_elapsed(time.time() - t0),
        "solution_filename": solution_name,
        "layout_filename": layout_name,
    })
    set_result_url(url_for("result_latest"))
    return render_template("result.html", **LAST_RESULT)


@app.route("/download/solution")
def download_solution():
    return send_from_directory(SOLUTION_DIR, SOLUTION_FILENAME, as_attachment=True)


@app.route("/download/html")
def download_html():
    return send_from_directory(LAYOUT_DIR, LAYOUT_FILENAME, as_attachment=True)


@app.route("/progress")
def progress():
    return jsonify(progress_json())


if __name__ == "__main__":
    app.run(debug=False)
