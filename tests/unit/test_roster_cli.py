"""Unit tests for the roster admin CLI handlers"""
import pytest

from scripts.roster_cli import RosterCLI
from services.roster_store import RosterStore
from tests.fixtures.data_fixtures import create_test_roster
from tests.fixtures.memory_repository import InMemoryRosterRepository


@pytest.fixture
def repository():
    return InMemoryRosterRepository([create_test_roster(selectors=3, chair=1)])


@pytest.fixture
def cli(repository):
    cli = RosterCLI()
    cli.store = RosterStore(repository, season="2025")
    return cli


async def run(cli: RosterCLI, *argv: str) -> str:
    cli.args = cli.setup_parser().parse_args(["--season", "2025", "--yes", *argv])
    await cli.store.refresh()
    return await cli.handlers[cli.args.command]()


@pytest.mark.asyncio
class TestUpdateCommands:

    async def test_update_player(self, cli, repository):
        before = repository.documents[("U15", "2025")].find_team("Green").players[1]

        message = await run(cli, "update-player", "U15", "Green", "1", "--name", "Tom Edited", "--club", "East")

        assert message.startswith("Player updated")
        player = repository.documents[("U15", "2025")].find_team("Green").players[1]
        assert player.name == "Tom Edited"
        assert player.club == "East"
        assert player.id == before.id

    async def test_update_shadow_by_id(self, cli, repository):
        target = repository.documents[("U15", "2025")].shadowPlayers[1]

        await run(cli, "update-shadow", "U15", target.id, "--name", "Sam Edited")

        shadow = repository.documents[("U15", "2025")].shadowPlayers
        assert [p.id for p in shadow][1] == target.id
        assert shadow[1].name == "Sam Edited"

    async def test_update_reason(self, cli, repository):
        await run(cli, "update-reason", "U15", "0", "--reason", "Family commitments")

        assert repository.documents[("U15", "2025")].withdrawn[0].reason == "Family commitments"

    async def test_update_selector_keeps_chair(self, cli, repository):
        await run(cli, "update-selector", "U15", "1", "--name", "Chair Renamed")

        selectors = repository.documents[("U15", "2025")].selectors
        assert selectors[1].name == "Chair Renamed"
        assert [s.isChair for s in selectors] == [False, True, False]

    async def test_update_selector_moves_chair(self, cli, repository):
        await run(cli, "update-selector", "U15", "2", "--name", "New Chair", "--chair")

        selectors = repository.documents[("U15", "2025")].selectors
        assert [s.isChair for s in selectors] == [False, False, True]


def test_update_reason_requires_reason():
    with pytest.raises(SystemExit):
        RosterCLI().setup_parser().parse_args(["update-reason", "U15", "0"])
