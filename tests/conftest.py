import pytest

from fastfour.controllers.tournament import Shuffler, start_tournament

NAMES = [
    "Ana",
    "Bruno",
    "Carla",
    "Diego",
    "Elena",
    "Fabio",
    "Gina",
    "Hugo",
    "Ines",
    "Joao",
    "Kika",
    "Luis",
]

DATE = "2025-03-09"


class IdentityShuffler(Shuffler):
    """Keeps entry order, so groups are p-0..p-2, p-3..p-5, ..."""

    def shuffle(self, players):
        return list(players)


class FixedShuffler(Shuffler):
    def __init__(self, order):
        self.order = order

    def shuffle(self, players):
        by_id = {p.id: p for p in players}
        return [by_id[pid] for pid in self.order]


@pytest.fixture
def names():
    return list(NAMES)


@pytest.fixture
def started():
    return start_tournament(NAMES, DATE, shuffler=IdentityShuffler())
