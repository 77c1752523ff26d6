"""Helpers for writing solver outputs to disk."""

from __future__ import annotations

import html
import os
from typing import Optional

from board import Board
from config import CFG


def _resolve_output_path(base_dir: str, configured_name: str, fallback: str) -> str:
    """Return the absolute path where an output artifact should be written."""

    name = (configured_name or "").strip() or fallback
    if os.path.isabs(name):
        return name
    return os.path.join(base_dir, name)


def write_solution(board: Optional[Board], base_dir: str) -> str:
    """Write the solved board render (or a no-solution marker) to the configured text file."""

    path = _resolve_output_path(base_dir, CFG.SOLUTION_OUT, "solution.txt")
    os.makedirs(os.path.dirname(path), exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        if board is None:
            f.write("No solution\n")
        else:
            f.write(f"{board.width} x {board.height}\n")
            f.write(board.render())
    return path


def write_layout_view_html(svg: str, legend_html: str, base_dir: str, grid_label: Optional[str] = None) -> str:
    """Write the rendered SVG/legend preview to the configured HTML file."""

    path = _resolve_output_path(base_dir, CFG.LAYOUT_HTML, "layout_view.html")
    os.makedirs(os.path.dirname(path), exist_ok=True)

    caption = f"<p class='grid-label'>{html.escape(grid_label)}</p>" if grid_label else ""
    with open(path, "w", encoding="utf-8") as vf:
        vf.write(
            f"""<!doctype html>
<html><head><meta charset='utf-8'><title>Layout View</title></head>
<body class='container'>
<h1>Layout View</h1>{caption}
<section class='card'><div class='gridwrap'>{svg}</div></section>
<section class='card'><h3>Legend</h3><ul>{legend_html}</ul></section>
</body></html>"""
        )
    return path


__all__ = ["write_solution", "write_layout_view_html"]
