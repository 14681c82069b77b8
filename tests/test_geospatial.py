import pytest

from src.localgoods.models.domain import Coordinate
from src.localgoods.services.geospatial import distance_miles, round_tenth

LOS_ANGELES = Coordinate(34.0522, -118.2437)
NEW_YORK = Coordinate(40.7128, -74.0060)
CHICAGO = Coordinate(41.8781, -87.6298)


def test_distance_to_self_is_zero():
    for point in (LOS_ANGELES, NEW_YORK, CHICAGO, Coordinate(-33.8688, 151.2093)):
        assert distance_miles(point, point) == 0.0


def test_distance_is_symmetric():
    pairs = [(LOS_ANGELES, NEW_YORK), (NEW_YORK, CHICAGO), (CHICAGO, LOS_ANGELES)]
    for a, b in pairs:
        assert distance_miles(a, b) == distance_miles(b, a)


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (LOS_ANGELES, NEW_YORK, 2451),
        (CHICAGO, NEW_YORK, 711),
        (LOS_ANGELES, CHICAGO, 1745),
    ],
)
def test_distance_matches_published_city_distances(a, b, expected):
    assert distance_miles(a, b) == pytest.approx(expected, rel=0.01)


def test_distance_is_rounded_to_one_decimal():
    result = distance_miles(LOS_ANGELES, Coordinate(34.1, -118.3))
    assert result == round(result, 1)
    # one degree of latitude is R * pi / 180 miles
    assert distance_miles(Coordinate(0.5, 10.0), Coordinate(1.5, 10.0)) == 69.1


@pytest.mark.parametrize("value, expected", [(0.25, 0.3), (12.25, 12.3), (12.75, 12.8), (3.04, 3.0), (0.0, 0.0)])
def test_halves_round_up(value, expected):
    assert round_tenth(value) == expected
