"""
Roster Store - Owner of the in-memory division snapshots of one season

All edits go through apply(): the mutation runs on a copy of the current
snapshot, the result is written through the PersistenceGateway and only then
is the store resynchronised from the repository. A failed mutation or write
leaves the store exactly as it was.

Mutations are the pure functions of services.placement_engine,
services.roster_mutations and services.selector_panel, bound to their
arguments, e.g.:

    await store.apply("U15", partial(roster_mutations.add_team, team_name="Green"))

The named methods below (add_team, set_chair, ...) are shorthands for exactly that.
"""

from collections.abc import Callable
from functools import partial

from config import settings
from exceptions import ResourceNotFoundException
from logging_config import logger
from models.rosters import MoveCommand, MoveResult, Player, Roster, Selector, Staff, StaffRole
from services import roster_mutations, selector_panel
from services.persistence_gateway import PersistenceGateway
from services.placement_engine import move_player
from services.roster_repository import RosterRepository
from utils import EntityRef, division_label

Mutation = Callable[[Roster], Roster]


class RosterStore:
    """Canonical snapshot of every division of a season"""

    def __init__(
        self,
        repository: RosterRepository,
        season: str | None = None,
        gateway: PersistenceGateway | None = None,
        resync_all: bool = True,
    ):
        self.repository = repository
        self.season = season or settings.DEFAULT_SEASON
        self.gateway = gateway or PersistenceGateway(repository)
        self.resync_all = resync_all
        self._rosters: dict[str, Roster] = {}

    @property
    def rosters(self) -> list[Roster]:
        return [r.model_copy(deep=True) for r in sorted(self._rosters.values(), key=lambda r: r.ageGroup)]

    @property
    def age_groups(self) -> list[str]:
        return sorted(self._rosters)

    async def refresh(self, age_group: str | None = None) -> None:
        """Reload every division of the season, or only the one named"""
        if age_group is None:
            rosters = await self.repository.list_all(self.season)
            self._rosters = {r.ageGroup: r for r in rosters}
            logger.bind(season=self.season).debug(f"Loaded {len(rosters)} divisions")
            return
        try:
            self._rosters[age_group] = await self.repository.get(age_group, self.season)
        except ResourceNotFoundException:
            self._rosters.pop(age_group, None)
            raise

    def get(self, age_group: str) -> Roster:
        """Copy of a loaded division; no implicit fetch"""
        roster = self._rosters.get(age_group)
        if roster is None:
            raise ResourceNotFoundException(
                resource_type="Division",
                resource_id=division_label(age_group, self.season),
                details={"loaded": self.age_groups},
            )
        return roster.model_copy(deep=True)

    async def _resync(self, saved: Roster) -> Roster:
        if self.resync_all:
            await self.refresh()
        else:
            self._rosters[saved.ageGroup] = saved
        return self._rosters.get(saved.ageGroup, saved).model_copy(deep=True)

    async def apply(self, age_group: str, mutation: Mutation) -> Roster:
        """
        Compute a new division snapshot and persist it as a whole

        Args:
            age_group: Division to edit
            mutation: Pure function from the current snapshot to the new one

        Returns:
            The division as stored after the write
        """
        updated = mutation(self.get(age_group))
        saved = await self.gateway.save(updated)
        return await self._resync(saved)

    async def move(self, command: MoveCommand) -> MoveResult:
        """Move a player; moves with nothing to move issue no write"""
        outcome = move_player(self.get(command.source.ageGroup), command)
        if not outcome.moved:
            return outcome
        saved = await self.gateway.save(outcome.roster)
        return MoveResult(moved=True, roster=await self._resync(saved))

    async def create_division(self, roster: Roster) -> Roster:
        if roster.season != self.season:
            roster = roster.model_copy(update={"season": self.season})
        created = await self.repository.create(roster)
        return await self._resync(created)

    async def delete_division(self, age_group: str) -> int:
        """Delete a division with all its teams, players and selectors"""
        deleted = await self.repository.delete(age_group, self.season)
        self._rosters.pop(age_group, None)
        if self.resync_all:
            await self.refresh()
        return deleted

    # --- teams, players and staff

    async def add_team(self, age_group: str, team_name: str) -> Roster:
        return await self.apply(age_group, partial(roster_mutations.add_team, team_name=team_name))

    async def delete_team(self, age_group: str, team_name: str) -> Roster:
        return await self.apply(age_group, partial(roster_mutations.delete_team, team_name=team_name))

    async def add_player(self, age_group: str, team_name: str, player: Player) -> Roster:
        return await self.apply(
            age_group, partial(roster_mutations.add_player, team_name=team_name, player=player)
        )

    async def update_player(self, age_group: str, team_name: str, ref: EntityRef, player: Player) -> Roster:
        return await self.apply(
            age_group,
            partial(roster_mutations.update_player, team_name=team_name, ref=ref, player=player),
        )

    async def delete_player(self, age_group: str, team_name: str, ref: EntityRef) -> Roster:
        return await self.apply(
            age_group, partial(roster_mutations.delete_player, team_name=team_name, ref=ref)
        )

    async def assign_staff(self, age_group: str, team_name: str, role: StaffRole | str, staff: Staff) -> Roster:
        return await self.apply(
            age_group,
            partial(roster_mutations.assign_staff, team_name=team_name, role=role, staff=staff),
        )

    async def remove_staff(self, age_group: str, team_name: str, role: StaffRole | str) -> Roster:
        return await self.apply(
            age_group, partial(roster_mutations.remove_staff, team_name=team_name, role=role)
        )

    # --- reserve pools

    async def add_shadow_player(self, age_group: str, player: Player) -> Roster:
        return await self.apply(age_group, partial(roster_mutations.add_shadow_player, player=player))

    async def update_shadow_player(self, age_group: str, ref: EntityRef, player: Player) -> Roster:
        return await self.apply(
            age_group, partial(roster_mutations.update_shadow_player, ref=ref, player=player)
        )

    async def delete_shadow_player(self, age_group: str, ref: EntityRef) -> Roster:
        return await self.apply(age_group, partial(roster_mutations.delete_shadow_player, ref=ref))

    async def update_withdrawn_reason(self, age_group: str, ref: EntityRef, reason: str) -> Roster:
        return await self.apply(
            age_group, partial(roster_mutations.update_withdrawn_reason, ref=ref, reason=reason)
        )

    async def delete_withdrawn_player(self, age_group: str, ref: EntityRef) -> Roster:
        return await self.apply(age_group, partial(roster_mutations.delete_withdrawn_player, ref=ref))

    # --- selection panel

    async def add_selector(self, age_group: str, selector: Selector) -> Roster:
        return await self.apply(age_group, partial(selector_panel.add_selector, selector=selector))

    async def update_selector(self, age_group: str, ref: EntityRef, selector: Selector) -> Roster:
        return await self.apply(
            age_group, partial(selector_panel.update_selector, ref=ref, selector=selector)
        )

    async def set_chair(self, age_group: str, ref: EntityRef) -> Roster:
        return await self.apply(age_group, partial(selector_panel.set_chair, ref=ref))

    async def delete_selector(self, age_group: str, ref: EntityRef) -> Roster:
        return await self.apply(age_group, partial(selector_panel.delete_selector, ref=ref))

    async def replace_selectors(self, age_group: str, selectors: list[Selector]) -> Roster:
        return await self.apply(age_group, partial(selector_panel.replace_selectors, selectors=selectors))
