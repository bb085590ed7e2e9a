"""Unit tests for utility functions"""
from datetime import datetime

import pytest

from models.rosters import Player
from utils import division_label, encode_age_group, last_updated_stamp, resolve_index


class TestResolveIndex:

    @pytest.fixture
    def pool(self):
        return [Player(name="Alice"), Player(name="Bob")]

    def test_index(self, pool):
        assert resolve_index(pool, 1) == 1

    def test_id(self, pool):
        assert resolve_index(pool, pool[1].id) == 1

    @pytest.mark.parametrize("ref", [2, -1, "unknown", None, True])
    def test_unresolvable(self, pool, ref):
        assert resolve_index(pool, ref) is None


def test_last_updated_stamp_uses_day_month_year():
    assert last_updated_stamp(datetime(2025, 3, 7)) == "07/03/2025"


def test_division_label():
    assert division_label("U15", "2025") == "U15/2025"


def test_encode_age_group():
    assert encode_age_group("U15 Girls/Boys") == "U15%20Girls%2FBoys"
