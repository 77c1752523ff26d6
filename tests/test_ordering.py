import random

from coordinate import Coordinate
from solver.ordering import ShuffledOrder, fixed_order, ordering_from_config

ANCHORS = [Coordinate(x, y) for y in range(3) for x in range(3)]


class _Cfg:
    RANDOMIZE_ANCHORS = False
    RANDOM_SEED = None


def test_fixed_order_keeps_row_major_input():
    assert list(fixed_order(list(ANCHORS))) == ANCHORS


def test_shuffled_order_is_a_permutation():
    out = ShuffledOrder(seed=3)(list(ANCHORS))
    assert sorted(out) == sorted(ANCHORS)


def test_shuffled_order_does_not_mutate_input():
    given = list(ANCHORS)
    ShuffledOrder(seed=3)(given)
    assert given == ANCHORS


def test_same_seed_same_sequence():
    a, b = ShuffledOrder(seed=42), ShuffledOrder(seed=42)
    for _ in range(5):
        assert a(list(ANCHORS)) == b(list(ANCHORS))


def test_explicit_rng_is_used():
    rng = random.Random(5)
    expected = list(ANCHORS)
    random.Random(5).shuffle(expected)
    assert ShuffledOrder(rng=rng)(list(ANCHORS)) == expected


def test_config_defaults_to_fixed_order():
    assert ordering_from_config(_Cfg) is fixed_order


def test_config_randomize_flag_and_seed():
    class Cfg(_Cfg):
        RANDOMIZE_ANCHORS = True
        RANDOM_SEED = 9

    ordering = ordering_from_config(Cfg)
    assert isinstance(ordering, ShuffledOrder)
    assert ordering.seed == 9


def test_explicit_seed_implies_shuffle():
    ordering = ordering_from_config(_Cfg, seed=4)
    assert isinstance(ordering, ShuffledOrder)
    assert ordering.seed == 4


def test_explicit_false_overrides_config():
    class Cfg(_Cfg):
        RANDOMIZE_ANCHORS = True

    assert ordering_from_config(Cfg, randomize=False) is fixed_order
    assert ordering_from_config(Cfg, randomize=False, seed=1) is fixed_order
