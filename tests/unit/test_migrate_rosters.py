"""Unit tests for the legacy rosters.json import"""
import json

from scripts.migrate_rosters import legacy_to_roster, load_legacy_file, missing_ids

LEGACY = {
    "U15": {
        "Green": {
            "players": [{"name": "Alice", "club": "North"}],
            "staff": {"coach": {"name": "Carol", "club": "North"}},
        },
        "Gold": {"players": [], "staff": {}},
        "lastUpdated": "12/01/2024",
        "trialInfo": {"date": "2024-01-20"},
        "shadowPlayers": [{"name": "Sam", "club": "East"}],
        "withdrawn": [{"name": "Bob", "club": "South"}],
    },
    "U13": {"shadowPlayers": [{"name": ""}]},
}


class TestLegacyImport:

    def test_team_keys_become_teams(self):
        roster = legacy_to_roster("U15", LEGACY["U15"], "2024")

        assert roster.key == ("U15", "2024")
        assert [t.name for t in roster.teams] == ["Green", "Gold"]
        assert roster.find_team("Green").staff.coach.name == "Carol"
        assert roster.lastUpdated == "12/01/2024"
        assert roster.trialInfo == {"date": "2024-01-20"}
        assert roster.selectors == []

    def test_withdrawn_without_reason_gets_fallback(self):
        roster = legacy_to_roster("U15", LEGACY["U15"], "2024")

        assert roster.withdrawn[0].reason == "Withdrawn"

    def test_every_entry_gets_an_id(self):
        roster = legacy_to_roster("U15", LEGACY["U15"], "2024")
        document = roster.model_dump(mode="json")

        assert missing_ids(document) == 0
        assert missing_ids(LEGACY["U15"]) == 2

    def test_invalid_divisions_are_reported(self, tmp_path):
        path = tmp_path / "rosters.json"
        path.write_text(json.dumps(LEGACY), encoding="utf-8")

        rosters, errors = load_legacy_file(path, "2024")

        assert [r.ageGroup for r in rosters] == ["U15"]
        assert [e["ageGroup"] for e in errors] == ["U13"]


def test_missing_ids_counts_staff_and_selectors():
    document = {
        "teams": [{"players": [{"id": "a", "name": "A"}], "staff": {"coach": {"name": "C"}, "umpire": None}}],
        "shadowPlayers": [],
        "withdrawn": [{"name": "W", "reason": "Injured"}],
        "selectors": [{"name": "S", "isChair": True}],
    }

    assert missing_ids(document) == 3
