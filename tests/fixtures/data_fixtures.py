"""Test data fixtures and helper functions for creating test rosters"""
from typing import Any

from faker import Faker

from models.rosters import (
    Player,
    Roster,
    Selector,
    Staff,
    Team,
    TeamStaff,
    WithdrawnPlayer,
)

fake = Faker("en_AU")


def create_test_player(**overrides) -> Player:
    """Create a player with a fake name and club"""
    data = {
        "name": fake.name(),
        "club": f"{fake.city()} Hockey Club",
        "icon": "",
    }
    data.update(overrides)
    return Player(**data)


def create_test_withdrawn(reason: str = "Injured", **overrides) -> WithdrawnPlayer:
    player = create_test_player(**overrides)
    return WithdrawnPlayer(**player.model_dump(), reason=reason)


def create_test_staff(**overrides) -> Staff:
    data = {"name": fake.name(), "club": f"{fake.city()} Hockey Club"}
    data.update(overrides)
    return Staff(**data)


def create_test_selector(is_chair: bool = False, **overrides) -> Selector:
    data = {"name": fake.name(), "club": f"{fake.city()} Hockey Club", "isChair": is_chair}
    data.update(overrides)
    return Selector(**data)


def create_test_team(name: str = "Green", players: int = 3, **overrides) -> Team:
    data = {
        "name": name,
        "players": [create_test_player() for _ in range(players)],
        "staff": TeamStaff(coach=create_test_staff()),
    }
    data.update(overrides)
    return Team(**data)


def create_test_roster(
    age_group: str = "U15",
    season: str = "2025",
    team_names: tuple = ("Green", "Gold"),
    players_per_team: int = 3,
    shadow: int = 2,
    withdrawn: int = 1,
    selectors: int = 0,
    chair: int | None = None,
    **overrides,
) -> Roster:
    """
    Create a division with teams, reserve pools and selectors

    Args:
        chair: Index of the selector that chairs the panel, if any
    """
    data = {
        "ageGroup": age_group,
        "season": season,
        "lastUpdated": "01/02/2025",
        "version": 1,
        "teams": [create_test_team(name, players_per_team) for name in team_names],
        "shadowPlayers": [create_test_player() for _ in range(shadow)],
        "withdrawn": [create_test_withdrawn() for _ in range(withdrawn)],
        "selectors": [create_test_selector(is_chair=(i == chair)) for i in range(selectors)],
        "trialInfo": {"date": "2025-02-01", "venue": fake.street_name()},
    }
    data.update(overrides)
    return Roster(**data)


def create_test_roster_document(**kwargs) -> dict[str, Any]:
    """Roster as stored in MongoDB (without _id)"""
    return create_test_roster(**kwargs).model_dump(mode="json")
