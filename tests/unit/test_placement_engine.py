"""Unit tests for moving players between team, shadow and withdrawn pools"""
import pytest

from exceptions import ValidationException
from models.rosters import MoveCommand, Placement, Player, PoolType, Roster, Team, WithdrawnPlayer
from services.placement_engine import (
    ensure_placement_exclusivity,
    find_duplicate_placements,
    move_player,
    placed_player_ids,
)
from tests.fixtures.data_fixtures import create_test_player, create_test_roster, create_test_withdrawn


def move(source_type, destination, age_group="U15", team=None, index=None, player_id=None,
         destination_team=None, reason=None) -> MoveCommand:
    return MoveCommand(
        source=Placement(type=source_type, ageGroup=age_group, teamName=team, index=index,
                         playerId=player_id),
        destination=destination,
        destinationTeamName=destination_team,
        reason=reason,
    )


class TestMovePlayer:
    """Test pool transitions"""

    def test_team_to_shadow(self):
        """Alice leaves Green for the shadow pool"""
        alice = Player(name="Alice", club="Northside")
        roster = Roster(ageGroup="U15", season="2025", teams=[Team(name="Green", players=[alice])])

        result = move_player(roster, move(PoolType.TEAM, PoolType.SHADOW, team="Green", index=0))

        assert result.moved is True
        assert result.roster.find_team("Green").players == []
        assert [p.name for p in result.roster.shadowPlayers] == ["Alice"]
        assert result.roster.shadowPlayers[0].id == alice.id

    def test_withdrawn_to_team_drops_reason(self):
        """Bob returns from injury to Gold without a reason field"""
        bob = WithdrawnPlayer(name="Bob", reason="Injured")
        roster = Roster(
            ageGroup="U15", season="2025", teams=[Team(name="Gold")], withdrawn=[bob]
        )

        result = move_player(
            roster, move(PoolType.WITHDRAWN, PoolType.TEAM, index=0, destination_team="Gold")
        )

        gold = result.roster.find_team("Gold")
        assert [p.name for p in gold.players] == ["Bob"]
        assert type(gold.players[0]) is Player
        assert "reason" not in gold.players[0].model_dump()
        assert result.roster.withdrawn == []

    def test_shadow_to_withdrawn_uses_given_reason(self):
        roster = create_test_roster(withdrawn=0)
        player = roster.shadowPlayers[1]

        result = move_player(
            roster, move(PoolType.SHADOW, PoolType.WITHDRAWN, index=1, reason="  Unavailable  ")
        )

        assert result.roster.withdrawn[-1].id == player.id
        assert result.roster.withdrawn[-1].reason == "Unavailable"

    @pytest.mark.parametrize("reason", [None, "", "   "])
    def test_withdrawal_without_reason_gets_fallback(self, reason):
        roster = create_test_roster(withdrawn=0)

        result = move_player(
            roster, move(PoolType.TEAM, PoolType.WITHDRAWN, team="Green", index=0, reason=reason)
        )

        assert result.roster.withdrawn[0].reason == "Withdrawn"

    def test_team_to_team(self):
        roster = create_test_roster()
        player = roster.find_team("Green").players[2]

        result = move_player(
            roster,
            move(PoolType.TEAM, PoolType.TEAM, team="Green", index=2, destination_team="Gold"),
        )

        assert player.id not in [p.id for p in result.roster.find_team("Green").players]
        assert result.roster.find_team("Gold").players[-1].id == player.id

    def test_player_id_wins_over_index(self):
        roster = create_test_roster()
        target = roster.shadowPlayers[1]

        result = move_player(
            roster,
            move(PoolType.SHADOW, PoolType.TEAM, index=0, player_id=target.id, destination_team="Green"),
        )

        assert [p.id for p in result.roster.shadowPlayers] == [roster.shadowPlayers[0].id]
        assert result.roster.find_team("Green").players[-1].id == target.id

    def test_input_snapshot_is_untouched(self):
        roster = create_test_roster()
        before = roster.model_dump()

        move_player(roster, move(PoolType.TEAM, PoolType.SHADOW, team="Green", index=0))

        assert roster.model_dump() == before

    def test_names_with_braces(self):
        """Names are logged verbatim, braces included"""
        roster = Roster(
            ageGroup="U15 {x}",
            season="2025",
            teams=[Team(name="Green {0}", players=[Player(name="Tom {Jr}")])],
        )

        result = move_player(
            roster, move(PoolType.TEAM, PoolType.SHADOW, age_group="U15 {x}", team="Green {0}", index=0)
        )

        assert result.moved is True
        assert [p.name for p in result.roster.shadowPlayers] == ["Tom {Jr}"]

    def test_other_division_is_rejected(self):
        roster = create_test_roster(age_group="U15")

        with pytest.raises(ValidationException) as exc_info:
            move_player(roster, move(PoolType.SHADOW, PoolType.WITHDRAWN, age_group="U17", index=0))

        assert exc_info.value.status_code == 400
        assert exc_info.value.details["field"] == "source.ageGroup"


class TestNoOpMoves:
    """Moves with nothing to move leave the snapshot as it is"""

    @pytest.mark.parametrize(
        "command",
        [
            move(PoolType.SHADOW, PoolType.SHADOW, index=0),
            move(PoolType.WITHDRAWN, PoolType.WITHDRAWN, index=0),
            move(PoolType.TEAM, PoolType.TEAM, team="Green", index=0, destination_team="Green"),
            move(PoolType.SHADOW, PoolType.TEAM, index=0),
            move(PoolType.SHADOW, PoolType.TEAM, index=0, destination_team="Blue"),
            move(PoolType.TEAM, PoolType.SHADOW, team="Blue", index=0),
            move(PoolType.TEAM, PoolType.SHADOW, index=0),
            move(PoolType.SHADOW, PoolType.WITHDRAWN, index=7),
            move(PoolType.SHADOW, PoolType.WITHDRAWN, index=-1),
            move(PoolType.SHADOW, PoolType.WITHDRAWN, player_id="missing"),
            move(PoolType.SHADOW, PoolType.WITHDRAWN),
        ],
    )
    def test_no_op(self, command):
        roster = create_test_roster()
        before = roster.model_dump()

        result = move_player(roster, command)

        assert result.moved is False
        assert result.roster is roster
        assert roster.model_dump() == before


class TestPlacementExclusivity:
    """A player is placed in exactly one pool"""

    def test_every_move_keeps_one_placement(self):
        roster = create_test_roster()
        ids_before = sorted(placed_player_ids(roster))
        commands = [
            move(PoolType.TEAM, PoolType.SHADOW, team="Green", index=0),
            move(PoolType.SHADOW, PoolType.WITHDRAWN, index=0, reason="Injured"),
            move(PoolType.WITHDRAWN, PoolType.TEAM, index=0, destination_team="Gold"),
            move(PoolType.TEAM, PoolType.TEAM, team="Gold", index=1, destination_team="Green"),
        ]

        for command in commands:
            roster = move_player(roster, command).roster
            assert find_duplicate_placements(roster) == []
            assert sorted(placed_player_ids(roster)) == ids_before

    def test_duplicate_is_reported(self):
        roster = create_test_roster()
        twin = roster.find_team("Green").players[0]
        roster.shadowPlayers.append(twin.model_copy())

        assert find_duplicate_placements(roster) == [twin.id]
        with pytest.raises(ValidationException) as exc_info:
            ensure_placement_exclusivity(roster)
        assert exc_info.value.details["duplicate_player_ids"] == [twin.id]

    def test_clean_roster_passes(self):
        ensure_placement_exclusivity(create_test_roster())

    def test_withdrawn_counts_as_placement(self):
        withdrawn = create_test_withdrawn()
        roster = create_test_roster(withdrawn=0)
        roster.withdrawn.append(withdrawn)
        roster.shadowPlayers.append(create_test_player(id=withdrawn.id))

        assert find_duplicate_placements(roster) == [withdrawn.id]
