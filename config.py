# config.py
import os

# ======= Default puzzle =======
CATALOG = os.getenv("PZ_CATALOG", "large")
# 0 means "use the catalog's own board size"
BOARD_W = int(os.getenv("PZ_BOARD_W", "0"))
BOARD_H = int(os.getenv("PZ_BOARD_H", "0"))

# ======= Search ordering =======
# Anchor order is fixed unless randomisation is switched on.  A seed makes
# shuffled runs reproducible; leave it blank for system randomness.
RANDOMIZE_ANCHORS = int(os.getenv("PZ_RANDOMIZE_ANCHORS", "0")) != 0
_seed_raw = os.getenv("PZ_RANDOM_SEED", "").strip()
RANDOM_SEED = int(_seed_raw) if _seed_raw else None

# ======= Logging / progress =======
LOG_EVERY = int(os.getenv("PZ_LOG_EVERY", "50000"))       # expanded states per debug heartbeat
PROGRESS_KEEP = int(os.getenv("PZ_PROGRESS_KEEP", "5"))   # close-attempt boards kept for the UI

# ======= Output names =======
SOLUTION_OUT = os.getenv("PZ_SOLUTION_OUT", "solution.txt")
LAYOUT_HTML = os.getenv("PZ_LAYOUT_HTML", "layout_view.html")


class CFG:
    CATALOG = CATALOG
    BOARD_W = BOARD_W
    BOARD_H = BOARD_H

    RANDOMIZE_ANCHORS = RANDOMIZE_ANCHORS
    RANDOM_SEED = RANDOM_SEED

    LOG_EVERY = LOG_EVERY
    PROGRESS_KEEP = PROGRESS_KEEP

    SOLUTION_OUT = SOLUTION_OUT
    LAYOUT_HTML = LAYOUT_HTML


__all__ = ["CFG"]
