from __future__ import annotations

import json
import logging
import os
import time
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from config import CFG

# ------------------------------
# Thread-safe global progress state
# ------------------------------

PROGRESS_LOCK = threading.Lock()


def _state_file_path() -> Path:
    configured = os.environ.get("PROGRESS_STATE_FILE")
    if configured:
        return Path(configured)
    return Path(__file__).resolve().parent / "logs" / "progress_state.json"


STATE_FILE = _state_file_path()
STATE_FILE_TMP = STATE_FILE.with_name(STATE_FILE.name + ".tmp")
_LAST_STATE_MTIME: float = 0.0


def _init_logger() -> logging.Logger:
    logger = logging.getLogger("solver.attempt_log")
    if logger.handlers:
        return logger

    log_path = Path(__file__).resolve().parent / "logs" / "solver_attempts.log"
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    except OSError:
        # No writable log directory; progress tracking carries on without it.
        logger.handlers.clear()
    return logger


ATTEMPT_LOGGER = _init_logger()


def _log_enabled() -> bool:
    return bool(ATTEMPT_LOGGER.handlers)


def _fmt_seconds(seconds: Optional[float]) -> Optional[str]:
    if seconds is None:
        return None
    try:
        return f"{float(seconds):.2f}s"
    except (TypeError, ValueError):
        return None


def _emit_log(event: str, **fields: Any) -> None:
    if not _log_enabled():
        return
    extras = [
        f"{key}={value}"
        for key, value in fields.items()
        if value is not None and value != ""
    ]
    if extras:
        ATTEMPT_LOGGER.info("%s | %s", event, " ".join(extras))
    else:
        ATTEMPT_LOGGER.info("%s", event)


def log_attempt_detail(event: str, **fields: Any) -> None:
    with PROGRESS_LOCK:
        _emit_log(event, **fields)


# Single source of truth for the progress panel
PROGRESS: Dict[str, Any] = {
    "status": "Idle",          # Idle | Solving | Solved | No solution | Error
    "puzzle": "",              # e.g. "large 8 × 8 (11 pieces)"
    "attempts": 0,             # close attempts seen so far
    "last_board": "",          # render of the latest close attempt
    "final_piece": "",         # identifier of the piece that was still missing
    "recent": [],              # last few close attempts, newest last
    "elapsed_start": None,     # t0 (float) when solving started
    "elapsed": 0.0,            # seconds snapshot
    "message": "",             # optional note
    "done": False,             # run completed
    "ok": None,                # success flag if known
    "result_url": "",          # optional navigation target
    "run_id": 0,               # monotonically increasing identifier
}


def _persist_locked() -> None:
    global _LAST_STATE_MTIME
    try:
        STATE_FILE.parent.mkdir(parents=True, exist_ok=True)
        with STATE_FILE_TMP.open("w", encoding="utf-8") as fh:
            json.dump(PROGRESS, fh, ensure_ascii=False, separators=(",", ":"))
        STATE_FILE_TMP.replace(STATE_FILE)
        try:
            _LAST_STATE_MTIME = STATE_FILE.stat().st_mtime
        except OSError:
            _LAST_STATE_MTIME = time.time()
    except OSError:
        # Persistence must never break solver progress updates.
        pass


def _load_persisted_locked(force: bool = False) -> None:
    global _LAST_STATE_MTIME
    try:
        stat = STATE_FILE.stat()
    except OSError:
        return
    if not force and stat.st_mtime <= _LAST_STATE_MTIME:
        return
    try:
        with STATE_FILE.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError):
        return
    if not isinstance(data, dict):
        return
    for key in PROGRESS.keys():
        if key in data:
            PROGRESS[key] = data[key]
    _LAST_STATE_MTIME = stat.st_mtime


# ------------------------------
# Helpers
# ------------------------------

def _now() -> float:
    return time.time()


def format_elapsed(seconds: float) -> str:
    seconds = max(0.0, float(seconds))
    if seconds < 60:
        return f"{int(seconds)}s"
    m, s = divmod(int(seconds), 60)
    if m < 60:
        return f"{m}m {s}s"
    h, m = divmod(m, 60)
    return f"{h}h {m}m"


def _touch_elapsed_locked() -> None:
    t0 = PROGRESS.get("elapsed_start")
    if t0 is not None:
        PROGRESS["elapsed"] = _now() - float(t0)


def reset() -> None:
    with PROGRESS_LOCK:
        try:
            current_run_id = int(PROGRESS.get("run_id", 0))
        except (TypeError, ValueError):
            current_run_id = 0
        PROGRESS.update({
            "status": "Idle",
            "puzzle": "",
            "attempts": 0,
            "last_board": "",
            "final_piece": "",
            "recent": [],
            "elapsed_start": None,
            "elapsed": 0.0,
            "message": "",
            "done": False,
            "ok": None,
            "result_url": "",
            "run_id": current_run_id + 1,
        })
        _emit_log("Progress reset", run_id=PROGRESS["run_id"])
        _persist_locked()


def start_timer() -> None:
    with PROGRESS_LOCK:
        PROGRESS["elapsed_start"] = _now()
        PROGRESS["elapsed"] = 0.0
        _emit_log("Run timer started")
        _persist_locked()


# ------------------------------
# Setters
# ------------------------------

def set_status(v: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["status"] = str(v)
        _persist_locked()


def set_puzzle(label: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["puzzle"] = "" if label is None else str(label)
        _emit_log("Puzzle selected", puzzle=PROGRESS["puzzle"])
        _persist_locked()


def set_message(msg: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["message"] = "" if msg is None else str(msg)
        _persist_locked()


def set_result_url(url: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["result_url"] = "" if url is None else str(url)
        _persist_locked()


def set_elapsed(seconds: Any) -> None:
    try:
        f = float(seconds)
    except (TypeError, ValueError):
        f = 0.0
    with PROGRESS_LOCK:
        PROGRESS["elapsed"] = max(0.0, f)
        _persist_locked()


def record_close_attempts(attempts: List[Any]) -> None:
    """Fold a drained batch of close attempts into the progress state.

    Accepts :class:`solver.search.CloseAttempt` values; only the newest
    ``CFG.PROGRESS_KEEP`` boards are retained.
    """

    if not attempts:
        return
    keep = max(1, int(CFG.PROGRESS_KEEP))
    with PROGRESS_LOCK:
        recent: List[Dict[str, Any]] = list(PROGRESS.get("recent") or [])
        for attempt in attempts:
            entry = {
                "count": int(attempt.count),
                "board": attempt.board.render(),
                "final_piece": attempt.final_piece.identifier,
            }
            recent.append(entry)
        recent = recent[-keep:]
        last = recent[-1]
        PROGRESS["recent"] = recent
        PROGRESS["attempts"] = last["count"]
        PROGRESS["last_board"] = last["board"]
        PROGRESS["final_piece"] = last["final_piece"]
        _touch_elapsed_locked()
        _emit_log(
            "Close attempts",
            batch=len(attempts),
            total=last["count"],
            final_piece=last["final_piece"],
        )
        _persist_locked()


def set_done(ok: Any = None, *, message: Any = None, stats: Optional[Dict[str, Any]] = None) -> None:
    """Mark the run complete.

    ``ok`` chooses the final status (``Solved`` / ``No solution``); when it
    is omitted an idle status is promoted to ``Solved``.
    """

    with PROGRESS_LOCK:
        _touch_elapsed_locked()
        if ok is not None:
            PROGRESS["ok"] = bool(ok)
            PROGRESS["status"] = "Solved" if ok else "No solution"
        elif PROGRESS.get("status") in ("", "Idle", None):
            PROGRESS["status"] = "Solved"
            PROGRESS["ok"] = True
        if message is not None:
            PROGRESS["message"] = str(message)
        PROGRESS["done"] = True
        _emit_log(
            "Run finished",
            status=PROGRESS.get("status"),
            ok=PROGRESS.get("ok"),
            duration=_fmt_seconds(PROGRESS.get("elapsed")),
            attempts=PROGRESS.get("attempts"),
            message=PROGRESS.get("message"),
            **(stats or {}),
        )
        _persist_locked()


# ------------------------------
# Snapshots for the UI
# ------------------------------

def snapshot() -> Dict[str, Any]:
    with PROGRESS_LOCK:
        _load_persisted_locked()
        _touch_elapsed_locked()
        return {
            "status": PROGRESS["status"],
            "puzzle": PROGRESS["puzzle"],
            "attempts": PROGRESS["attempts"],
            "last_board": PROGRESS["last_board"],
            "final_piece": PROGRESS["final_piece"],
            "recent": list(PROGRESS["recent"]),
            "elapsed": PROGRESS["elapsed"],
            "elapsed_str": format_elapsed(PROGRESS["elapsed"]),
            "message": PROGRESS["message"],
            "done": PROGRESS["done"],
            "ok": PROGRESS["ok"],
            "result_url": PROGRESS["result_url"],
            "run_id": PROGRESS["run_id"],
        }


def as_json() -> Dict[str, Any]:
    return snapshot()


with PROGRESS_LOCK:
    _load_persisted_locked(force=True)
