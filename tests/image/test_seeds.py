import pytest

from seamcut.errors import SeedRegionOutOfBounds
from seamcut.image.seeds import SeedRegion


def test_parse_variants():
    """Comma-only and colon-separated corner pairs both parse, ignoring spaces."""
    assert SeedRegion.parse("9,9,29,29") == SeedRegion(9, 9, 29, 29)
    assert SeedRegion.parse(" 1, 2 : 3, 4 ") == SeedRegion(1, 2, 3, 4)


@pytest.mark.parametrize("text", ["1,2,3", "a,b,c,d", "1,2,3,4,5", ""])
def test_parse_rejects_bad_text(text):
    with pytest.raises(ValueError):
        SeedRegion.parse(text)


def test_coerce():
    """Regions pass through; lists, tuples and strings become regions."""
    region = SeedRegion(0, 0, 1, 1)
    assert SeedRegion.coerce(region) is region
    assert SeedRegion.coerce([0, 0, 1, 1]) == region
    assert SeedRegion.coerce((0, 0, 1, 1)) == region
    assert SeedRegion.coerce("0,0,1,1") == region
    with pytest.raises(ValueError):
        SeedRegion.coerce([0, 1])


@pytest.mark.parametrize(
    "value",
    [5, None, 2.5, {"x0": 0}, [0, 0, 1, 1.5], [0, "0", 1, 1], [True, 0, 1, 1]],
)
def test_coerce_rejects_non_integer_values(value):
    """Scalars, mappings and non-integer corners raise ValueError, never TypeError."""
    with pytest.raises(ValueError):
        SeedRegion.coerce(value)


def test_contains_is_inclusive():
    """Both corners belong to the region; pixels one step outside do not."""
    region = SeedRegion(2, 3, 4, 5)
    assert region.contains(2, 3)
    assert region.contains(4, 5)
    assert not region.contains(5, 5)
    assert not region.contains(2, 2)
    assert (region.width, region.height) == (3, 3)


def test_pixels_row_major():
    assert list(SeedRegion(0, 0, 1, 1).pixels()) == [(0, 0), (1, 0), (0, 1), (1, 1)]


def test_validate_inside():
    """A region touching the last row and column of the grid is valid."""
    SeedRegion(0, 0, 9, 4).validate(10, 5)


@pytest.mark.parametrize(
    "region",
    [
        SeedRegion(0, 0, 10, 4),
        SeedRegion(0, 0, 9, 5),
        SeedRegion(-1, 0, 3, 3),
        SeedRegion(0, -1, 3, 3),
        SeedRegion(3, 0, 2, 2),
        SeedRegion(0, 3, 2, 2),
    ],
)
def test_validate_out_of_bounds(region):
    """Regions past any grid edge, or with swapped corners, are rejected."""
    with pytest.raises(SeedRegionOutOfBounds):
        region.validate(10, 5)
