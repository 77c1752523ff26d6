import html
import random
from typing import Dict, Tuple

from board import Board, EMPTY


def _color(identifier: str) -> str:
    rng = random.Random(identifier)
    r = rng.randint(40, 200)
    g = rng.randint(40, 200)
    b = rng.randint(40, 200)
    return f"rgb({r},{g},{b})"


def render_board_svg(board: Board, scale: int = 48) -> Tuple[str, str]:
    """Return ``(svg_markup, legend_html)`` for a board, one square per cell."""

    palette: Dict[str, str] = {}
    for v in board.cells:
        if v is not EMPTY:
            palette.setdefault(v, _color(v))

    svg_w = board.width * scale + 2
    svg_h = board.height * scale + 2

    cells = []
    for y in range(board.height):
        for x in range(board.width):
            v = board.cells[y * board.width + x]
            fill = "#eeeeee" if v is EMPTY else palette[v]
            px = x * scale + 1
            py = y * scale + 1
            cells.append(
                f'<rect x="{px}" y="{py}" width="{scale}" height="{scale}" fill="{fill}" stroke="black" stroke-width="1"/>'
            )
            if v is not EMPTY:
                cells.append(
                    f'<text x="{px + scale // 2}" y="{py + scale // 2 + 5}" font-size="14" '
                    f'text-anchor="middle" fill="black">{html.escape(v)}</text>'
                )
    frame = f'<rect x="1" y="1" width="{svg_w-2}" height="{svg_h-2}" fill="none" stroke="black" stroke-width="2"/>'
    svg = (
        f'<svg class="layout-svg" xmlns="http://www.w3.org/2000/svg" '
        f'width="{svg_w}" height="{svg_h}" '
        f'viewBox="0 0 {svg_w} {svg_h}" preserveAspectRatio="xMinYMin meet">'
        f'{"".join(cells)}{frame}</svg>'
    )

    legend = "".join(f"<li><span class='swatch' style='background:{c}'></span>{html.escape(n)}</li>" for n, c in palette.items())
    return svg, legend
