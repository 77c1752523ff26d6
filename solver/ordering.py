# solver/ordering.py — how candidate anchors are ordered before they are pushed
from __future__ import annotations

import random
from typing import Callable, Iterable, List, Optional

from config import CFG
from coordinate import Coordinate

AnchorOrdering = Callable[[List[Coordinate]], Iterable[Coordinate]]


def fixed_order(anchors: List[Coordinate]) -> List[Coordinate]:
    """Keep the board's row-major order; repeated runs explore identically."""
    return anchors


def _system_rng() -> random.Random:
    try:
        return random.SystemRandom()
    except NotImplementedError:
        return random.Random()


class ShuffledOrder:
    """Shuffle anchors at every expansion step.

    With a ``seed`` the sequence of shuffles, and therefore the returned
    tiling, is reproducible.  Without one, system randomness is used and
    repeated runs may land on different valid solutions.  Each instance owns
    its generator; give every concurrent solve its own instance.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        if rng is not None:
            self._rng = rng
        elif seed is not None:
            self._rng = random.Random(seed)
        else:
            self._rng = _system_rng()
        self.seed = seed

    def __call__(self, anchors: List[Coordinate]) -> List[Coordinate]:
        out = list(anchors)
        if len(out) > 1:
            self._rng.shuffle(out)
        return out

    def __repr__(self) -> str:
        return f"ShuffledOrder(seed={self.seed!r})"


def ordering_from_config(cfg=CFG, *, randomize: Optional[bool] = None, seed: Optional[int] = None) -> AnchorOrdering:
    """Build a fresh ordering from ``CFG``; explicit arguments win over config.

    Passing a ``seed`` implies shuffling unless ``randomize`` is explicitly
    ``False``.
    """

    explicit_seed = seed is not None
    if seed is None:
        seed = getattr(cfg, "RANDOM_SEED", None)
    if randomize is None:
        randomize = explicit_seed or bool(getattr(cfg, "RANDOMIZE_ANCHORS", False))
    if not randomize:
        return fixed_order
    return ShuffledOrder(seed=None if seed is None else int(seed))


__all__ = ["AnchorOrdering", "fixed_order", "ShuffledOrder", "ordering_from_config"]
