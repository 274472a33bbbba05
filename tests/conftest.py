import pytest

from mapquiz.core.game import QuizGame
from mapquiz.models import Category, Datasets, Geometry, Point, Target
from mapquiz.storage import InMemoryStore


class SequenceRng:
    """Deterministic stand-in for random.Random: returns the given indexes in turn"""

    def __init__(self, picks):
        self.picks = list(picks)

    def randrange(self, n):
        return self.picks.pop(0) % n if self.picks else 0


def city(name, lat, lng, population, county_seat=False):
    return Target(
        name=name,
        category=Category.COUNTY_SEAT if county_seat else Category.CITY,
        location=Point(lat=lat, lng=lng),
        population=population,
        is_county_seat=county_seat,
        date_founded="1800",
    )


def box_county(name, west, south, east, north):
    geometry = Geometry(
        type="Polygon",
        coordinates=[[[west, south], [west, north], [east, north], [east, south], [west, south]]],
    )
    return Target(
        name=name,
        category=Category.COUNTY,
        location=Point(lat=(south + north) / 2, lng=(west + east) / 2),
        geometry=geometry,
    )


@pytest.fixture()
def cities():
    return [
        city("Detroit", 42.3314, -83.0458, 639111, county_seat=True),
        city("Grand Rapids", 42.9634, -85.6681, 198917, county_seat=True),
        city("Warren", 42.5145, -83.0147, 139387),
        city("Sterling Heights", 42.5803, -83.0302, 134346),
        city("Ann Arbor", 42.2808, -83.7430, 123851, county_seat=True),
        city("Lansing", 42.7325, -84.5555, 112644),
        city("Flint", 43.0125, -83.6875, 81252, county_seat=True),
    ]


@pytest.fixture()
def counties():
    return [
        box_county("Wayne", -83.55, 42.03, -82.90, 42.45),
        box_county("Washtenaw", -84.13, 42.07, -83.54, 42.43),
    ]


@pytest.fixture()
def datasets(cities, counties):
    return Datasets(cities=cities, counties=counties)


@pytest.fixture()
def store():
    return InMemoryStore()


@pytest.fixture()
def game(datasets, store):
    # Always pick the first pool entry (Detroit / Wayne)
    return QuizGame(datasets, store, rng=SequenceRng([]))
