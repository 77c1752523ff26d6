import pytest

from catalog import CATALOGS, get_catalog


@pytest.mark.parametrize("name", sorted(CATALOGS))
def test_catalog_area_matches_its_board(name):
    cat = get_catalog(name)
    assert cat.area == cat.width * cat.height


def test_every_piece_needs_at_least_two_cells():
    for cat in CATALOGS.values():
        assert all(p.size >= 2 for p in cat.pieces)


def test_identifiers_are_unique_within_a_catalog():
    for cat in CATALOGS.values():
        ids = [p.identifier for p in cat.pieces]
        assert len(ids) == len(set(ids))


def test_lookup_is_case_insensitive_and_strict():
    assert get_catalog(" Small ").name == "small"
    with pytest.raises(KeyError):
        get_catalog("huge")
