#!/usr/bin/env python
"""
Roster Admin CLI

Command-line client for the roster admin API. Edits run through the same
placement engine, roster mutations and selector panel rules as the server and
are written back as complete division documents.

Usage:
    python scripts/roster_cli.py <command> [options]

Commands:
    list               List divisions of a season
    create-division    Create an empty division
    delete-division    Delete a division with all teams and selectors
    move               Move a player between team, shadow and withdrawn pools
    add-team           Add a team
    delete-team        Delete a team with its players and staff
    add-player         Add a player to a team
    update-player      Replace the details of a team player
    delete-player      Delete a player from a team
    add-shadow         Add a shadow player
    update-shadow      Replace the details of a shadow player
    delete-shadow      Delete a shadow player
    update-reason      Change the reason of a withdrawn player
    delete-withdrawn   Delete a withdrawn player
    assign-staff       Put a staff member in a role (coach, asstCoach, manager, umpire)
    remove-staff       Clear a staff role
    add-selector       Add a selector (max 5)
    update-selector    Replace the details of a selector; the chair stays unless --chair moves it
    set-chair          Make a selector the chair
    delete-selector    Remove a selector

Entries (players, selectors) are addressed by index or by entity id.

Examples:
    python scripts/roster_cli.py list --season 2025
    python scripts/roster_cli.py move U15 --from team --from-team Green --index 0 --to shadow
    python scripts/roster_cli.py move U15 --from shadow --index 2 --to withdrawn --reason Injured
    python scripts/roster_cli.py set-chair U15 2
    python scripts/roster_cli.py update-reason U15 0 --reason "Family commitments"
"""

import sys
from pathlib import Path

# Add parent directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

import argparse
import asyncio
from collections.abc import Awaitable, Callable

from pydantic import ValidationError

from config import settings
from exceptions import RosterAdminException
from logging_config import logger
from models.rosters import MoveCommand, Placement, Player, PoolType, Roster, Selector, Staff, StaffRole
from services.roster_api_client import RosterApiClient
from services.roster_store import RosterStore
from utils import EntityRef, resolve_index


def parse_ref(ref: str) -> EntityRef:
    return int(ref) if ref.isdigit() else ref


def describe(roster: Roster) -> str:
    chair = next((s.name for s in roster.selectors if s.isChair), "-")
    teams = ", ".join(f"{t.name} ({len(t.players)})" for t in roster.teams) or "-"
    return (
        f"{roster.ageGroup} [{roster.season}] v{roster.version} updated {roster.lastUpdated or '-'}\n"
        f"  teams: {teams}\n"
        f"  shadow: {len(roster.shadowPlayers)}  withdrawn: {len(roster.withdrawn)}\n"
        f"  selectors: {len(roster.selectors)}/{settings.MAX_SELECTORS}  chair: {chair}"
    )


class RosterCLI:
    """CLI for roster admin operations"""

    def __init__(self):
        self.store: RosterStore = None
        self.args = None

        self.handlers: dict[str, Callable[[], Awaitable[str]]] = {
            "list": self.list_divisions,
            "create-division": self.create_division,
            "delete-division": self.delete_division,
            "move": self.move,
            "add-team": self.add_team,
            "delete-team": self.delete_team,
            "add-player": self.add_player,
            "update-player": self.update_player,
            "delete-player": self.delete_player,
            "add-shadow": self.add_shadow,
            "update-shadow": self.update_shadow,
            "delete-shadow": self.delete_shadow,
            "update-reason": self.update_reason,
            "delete-withdrawn": self.delete_withdrawn,
            "assign-staff": self.assign_staff,
            "remove-staff": self.remove_staff,
            "add-selector": self.add_selector,
            "update-selector": self.update_selector,
            "set-chair": self.set_chair,
            "delete-selector": self.delete_selector,
        }

    def setup_parser(self) -> argparse.ArgumentParser:
        """Create argument parser"""
        parser = argparse.ArgumentParser(
            description="Roster admin CLI",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=__doc__,
        )
        parser.add_argument("--api", default=settings.API_BASE_URL, help="Base URL of the roster API")
        parser.add_argument("--season", default=settings.DEFAULT_SEASON, help="Season to work on")
        parser.add_argument("--yes", action="store_true", help="Skip confirmation prompts")

        sub = parser.add_subparsers(dest="command", required=True)
        sub.add_parser("list")

        for name in ("create-division", "delete-division"):
            sub.add_parser(name).add_argument("age_group")

        move = sub.add_parser("move")
        move.add_argument("age_group")
        move.add_argument("--from", dest="source", required=True, choices=[p.value for p in PoolType])
        move.add_argument("--from-team", dest="source_team")
        ref = move.add_mutually_exclusive_group(required=True)
        ref.add_argument("--index", type=int)
        ref.add_argument("--player-id")
        move.add_argument("--to", dest="destination", required=True, choices=[p.value for p in PoolType])
        move.add_argument("--to-team", dest="destination_team")
        move.add_argument("--reason", help=f"Withdrawal reason (default: {settings.DEFAULT_WITHDRAWAL_REASON})")

        for name in ("add-team", "delete-team"):
            p = sub.add_parser(name)
            p.add_argument("age_group")
            p.add_argument("team")

        p = sub.add_parser("add-player")
        p.add_argument("age_group")
        p.add_argument("team")
        self._add_person_arguments(p)

        p = sub.add_parser("update-player")
        p.add_argument("age_group")
        p.add_argument("team")
        p.add_argument("ref")
        self._add_person_arguments(p)

        p = sub.add_parser("delete-player")
        p.add_argument("age_group")
        p.add_argument("team")
        p.add_argument("ref")

        p = sub.add_parser("add-shadow")
        p.add_argument("age_group")
        self._add_person_arguments(p)

        p = sub.add_parser("update-shadow")
        p.add_argument("age_group")
        p.add_argument("ref")
        self._add_person_arguments(p)

        p = sub.add_parser("update-reason")
        p.add_argument("age_group")
        p.add_argument("ref")
        p.add_argument("--reason", required=True)

        for name in ("delete-shadow", "delete-withdrawn", "set-chair", "delete-selector"):
            p = sub.add_parser(name)
            p.add_argument("age_group")
            p.add_argument("ref")

        for name in ("assign-staff", "remove-staff"):
            p = sub.add_parser(name)
            p.add_argument("age_group")
            p.add_argument("team")
            p.add_argument("role", choices=[r.value for r in StaffRole])
            if name == "assign-staff":
                self._add_person_arguments(p)

        p = sub.add_parser("add-selector")
        p.add_argument("age_group")
        self._add_person_arguments(p)
        p.add_argument("--chair", action="store_true", help="Make the new selector the chair")

        p = sub.add_parser("update-selector")
        p.add_argument("age_group")
        p.add_argument("ref")
        self._add_person_arguments(p)
        p.add_argument("--chair", action="store_true", help="Make this selector the chair")

        return parser

    @staticmethod
    def _add_person_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--name", required=True)
        parser.add_argument("--club", default="")
        parser.add_argument("--icon", default="")

    def confirm_action(self, message: str) -> bool:
        """Ask user for confirmation"""
        if self.args.yes:
            return True
        response = input(f"{message} (y/N): ").strip().lower()
        return response == "y"

    def _report(self, message: str, roster: Roster) -> str:
        return f"{message}\n{describe(roster)}"

    # Handlers

    async def list_divisions(self) -> str:
        rosters = self.store.rosters
        if not rosters:
            return f"No divisions in season {self.store.season}"
        return "\n".join(describe(r) for r in rosters)

    async def create_division(self) -> str:
        roster = await self.store.create_division(
            Roster(ageGroup=self.args.age_group, season=self.store.season)
        )
        return self._report("Division created", roster)

    async def delete_division(self) -> str:
        if not self.confirm_action(f"Delete {self.args.age_group} ({self.store.season}) with all teams?"):
            return "Cancelled"
        await self.store.delete_division(self.args.age_group)
        return f"Division {self.args.age_group} deleted"

    async def move(self) -> str:
        command = MoveCommand(
            source=Placement(
                type=self.args.source,
                ageGroup=self.args.age_group,
                teamName=self.args.source_team,
                index=self.args.index,
                playerId=self.args.player_id,
            ),
            destination=self.args.destination,
            destinationTeamName=self.args.destination_team,
            reason=self.args.reason,
        )
        outcome = await self.store.move(command)
        if not outcome.moved:
            return "Nothing to move"
        return self._report(f"Player moved to {command.destination.value}", outcome.roster)

    async def add_team(self) -> str:
        roster = await self.store.add_team(self.args.age_group, self.args.team)
        return self._report(f"Team '{self.args.team}' added", roster)

    async def delete_team(self) -> str:
        if not self.confirm_action(f"Delete {self.args.team} from {self.args.age_group}?"):
            return "Cancelled"
        roster = await self.store.delete_team(self.args.age_group, self.args.team)
        return self._report(f"Team '{self.args.team}' deleted", roster)

    async def add_player(self) -> str:
        player = Player(name=self.args.name, club=self.args.club, icon=self.args.icon)
        roster = await self.store.add_player(self.args.age_group, self.args.team, player)
        return self._report("Player added", roster)

    async def update_player(self) -> str:
        player = Player(name=self.args.name, club=self.args.club, icon=self.args.icon)
        roster = await self.store.update_player(
            self.args.age_group, self.args.team, parse_ref(self.args.ref), player
        )
        return self._report("Player updated", roster)

    async def delete_player(self) -> str:
        if not self.confirm_action("Delete this player?"):
            return "Cancelled"
        roster = await self.store.delete_player(self.args.age_group, self.args.team, parse_ref(self.args.ref))
        return self._report("Player deleted", roster)

    async def add_shadow(self) -> str:
        player = Player(name=self.args.name, club=self.args.club, icon=self.args.icon)
        roster = await self.store.add_shadow_player(self.args.age_group, player)
        return self._report("Shadow player added", roster)

    async def update_shadow(self) -> str:
        player = Player(name=self.args.name, club=self.args.club, icon=self.args.icon)
        roster = await self.store.update_shadow_player(self.args.age_group, parse_ref(self.args.ref), player)
        return self._report("Shadow player updated", roster)

    async def delete_shadow(self) -> str:
        if not self.confirm_action("Delete this shadow player?"):
            return "Cancelled"
        roster = await self.store.delete_shadow_player(self.args.age_group, parse_ref(self.args.ref))
        return self._report("Shadow player deleted", roster)

    async def update_reason(self) -> str:
        roster = await self.store.update_withdrawn_reason(
            self.args.age_group, parse_ref(self.args.ref), self.args.reason
        )
        return self._report("Withdrawal reason updated", roster)

    async def delete_withdrawn(self) -> str:
        if not self.confirm_action("Delete this withdrawn player permanently?"):
            return "Cancelled"
        roster = await self.store.delete_withdrawn_player(self.args.age_group, parse_ref(self.args.ref))
        return self._report("Withdrawn player deleted", roster)

    async def assign_staff(self) -> str:
        staff = Staff(name=self.args.name, club=self.args.club, icon=self.args.icon)
        roster = await self.store.assign_staff(self.args.age_group, self.args.team, self.args.role, staff)
        return self._report("Staff updated", roster)

    async def remove_staff(self) -> str:
        if not self.confirm_action("Remove this staff member?"):
            return "Cancelled"
        roster = await self.store.remove_staff(self.args.age_group, self.args.team, self.args.role)
        return self._report("Staff member removed", roster)

    async def add_selector(self) -> str:
        selector = Selector(
            name=self.args.name, club=self.args.club, icon=self.args.icon or None, isChair=self.args.chair
        )
        roster = await self.store.add_selector(self.args.age_group, selector)
        return self._report("Selector added", roster)

    async def update_selector(self) -> str:
        ref = parse_ref(self.args.ref)
        seats = self.store.get(self.args.age_group).selectors
        idx = resolve_index(seats, ref)
        is_chair = self.args.chair or (idx is not None and seats[idx].isChair)
        selector = Selector(
            name=self.args.name, club=self.args.club, icon=self.args.icon or None, isChair=is_chair
        )
        roster = await self.store.update_selector(self.args.age_group, ref, selector)
        return self._report("Selector updated", roster)

    async def set_chair(self) -> str:
        roster = await self.store.set_chair(self.args.age_group, parse_ref(self.args.ref))
        return self._report("Chair of Selectors updated", roster)

    async def delete_selector(self) -> str:
        if not self.confirm_action("Remove this selector?"):
            return "Cancelled"
        roster = await self.store.delete_selector(self.args.age_group, parse_ref(self.args.ref))
        return self._report("Selector removed", roster)

    async def execute(self) -> int:
        async with RosterApiClient(base_url=self.args.api) as api:
            self.store = RosterStore(api, season=self.args.season)
            try:
                await self.store.refresh()
                message = await self.handlers[self.args.command]()
            except RosterAdminException as e:
                logger.error(f"✗ {self.args.command} failed: {e.message}")
                return 1
            except ValidationError as e:
                logger.error(f"✗ {self.args.command} failed: {e}")
                return 1
        print(message)
        return 0

    def run(self) -> int:
        """Main execution flow"""
        parser = self.setup_parser()
        self.args = parser.parse_args()
        logger.debug(f"Command: {self.args.command}, season: {self.args.season}, api: {self.args.api}")
        return asyncio.run(self.execute())


if __name__ == "__main__":
    sys.exit(RosterCLI().run())
