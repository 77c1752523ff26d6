#!/usr/bin/env python3
"""
solve_cli.py - solve one of the built-in puzzles from the command line

Usage:
    python solve_cli.py [--catalog small|large|squares] [--width 8 --height 5]
                        [--shuffle] [--seed 42] [--close-attempts] [--output DIR]
"""
import argparse
import logging
import sys
import time
from typing import List, Optional, Sequence

from board import Board
from catalog import CATALOGS, get_catalog
from config import CFG
from io_files import write_solution
from piece import Piece
from solver.ordering import ordering_from_config
from solver.search import CloseAttempt, run_search


def _print_close_attempt(attempt: CloseAttempt) -> None:
    print(f"Close attempt #{attempt.count}")
    print(attempt.board.render(), end="")
    print("Final piece:")
    print(attempt.final_piece.description(), end="")
    print()


def solve_puzzle(
    board: Board,
    pieces: Sequence[Piece],
    *,
    shuffle: bool = False,
    seed: Optional[int] = None,
    show_close_attempts: bool = False,
) -> Optional[Board]:
    print(f"Solving {board.width}x{board.height} board with {len(pieces)} pieces.")
    print()

    ordering = ordering_from_config(CFG, randomize=shuffle or None, seed=seed)
    sink = _print_close_attempt if show_close_attempts else None

    start = time.time()
    result = run_search(board, pieces, ordering=ordering, on_close_attempt=sink)
    elapsed = time.time() - start

    if result.board is None:
        print(f"No solution found ({result.reason}, {elapsed:.2f}s)")
        return None

    print(f"Solved (after {elapsed:.2f}s, {result.stats.expanded} states):")
    print(result.board.render(), end="")
    print()
    return result.board


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Exact polyomino tiling solver")
    parser.add_argument(
        "--catalog",
        choices=sorted(CATALOGS),
        default=CFG.CATALOG if CFG.CATALOG in CATALOGS else "large",
        help="Built-in piece set",
    )
    parser.add_argument("--width", type=int, default=CFG.BOARD_W or None, help="Board width (default: catalog's)")
    parser.add_argument("--height", type=int, default=CFG.BOARD_H or None, help="Board height (default: catalog's)")
    parser.add_argument("--shuffle", action="store_true", help="Shuffle candidate anchors at every step")
    parser.add_argument("--seed", type=int, default=None, help="Seed for shuffled anchors (implies --shuffle)")
    parser.add_argument("--close-attempts", action="store_true", help="Print every state with one piece left")
    parser.add_argument("--output", default=None, help="Directory to write the solution file into")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    catalog = get_catalog(args.catalog)
    width = args.width or catalog.width
    height = args.height or catalog.height
    try:
        board = Board(width, height)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    solved = solve_puzzle(
        board,
        catalog.pieces,
        shuffle=args.shuffle,
        seed=args.seed,
        show_close_attempts=args.close_attempts,
    )
    if args.output:
        path = write_solution(solved, args.output)
        print(f"Output: {path}")
    return 0 if solved is not None else 1


if __name__ == "__main__":
    sys.exit(main())
