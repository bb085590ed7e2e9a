"""
Roster Service - Business logic behind the admin roster API

Validates whole division documents before they are stored and delegates
storage to MongoRosterRepository. Command endpoints get a RosterStore bound
to the same repository via store_for().
"""

from config import settings
from exceptions import ValidationException
from logging_config import logger
from models.rosters import Roster, RosterMetadata
from services.placement_engine import ensure_placement_exclusivity
from services.roster_repository import MongoRosterRepository
from services.roster_store import RosterStore
from services.selector_panel import validate_panel


class RosterService:
    """Service for managing division documents"""

    def __init__(self, db):
        self.db = db
        self.repository = MongoRosterRepository(db)

    @staticmethod
    def resolve_season(season: str | None) -> str:
        return (season or "").strip() or settings.DEFAULT_SEASON

    @staticmethod
    def validate_document(roster: Roster) -> None:
        """
        Check the invariants of a complete division document

        Raises:
            ValidationException: On duplicate team names, a player placed twice,
                too many selectors or more than one chair
        """
        names = [t.name for t in roster.teams]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValidationException(
                field="teams",
                message="Team names must be unique within a division",
                details={"ageGroup": roster.ageGroup, "duplicate_teams": duplicates},
            )
        ensure_placement_exclusivity(roster)
        validate_panel(roster)

    def store_for(self, season: str | None) -> RosterStore:
        return RosterStore(self.repository, season=self.resolve_season(season), resync_all=False)

    async def list_rosters(self, season: str | None = None) -> list[Roster]:
        rosters = await self.repository.list_all(season)
        logger.bind(season=season).debug(f"Fetched {len(rosters)} rosters")
        return rosters

    async def get_roster(self, age_group: str, season: str | None) -> Roster:
        return await self.repository.get(age_group, self.resolve_season(season))

    async def create_roster(self, roster: Roster) -> Roster:
        self.validate_document(roster)
        return await self.repository.create(roster)

    async def replace_roster(self, age_group: str, season: str | None, roster: Roster) -> Roster:
        """Replace a division with the document sent by the caller"""
        season = self.resolve_season(season or roster.season)
        if roster.ageGroup != age_group or roster.season != season:
            raise ValidationException(
                field="ageGroup",
                message="Document key does not match the addressed division",
                details={
                    "path": {"ageGroup": age_group, "season": season},
                    "body": {"ageGroup": roster.ageGroup, "season": roster.season},
                },
            )
        self.validate_document(roster)
        return await self.repository.replace(roster)

    async def delete_roster(self, age_group: str, season: str) -> int:
        return await self.repository.delete(age_group, season)

    async def bulk_upsert(self, rosters: list[Roster]) -> tuple[dict, list[dict]]:
        """Upsert the valid documents; report the invalid ones"""
        valid, errors = [], []
        for roster in rosters:
            try:
                self.validate_document(roster)
            except ValidationException as e:
                errors.append({"ageGroup": roster.ageGroup, "season": roster.season, "error": e.message})
                continue
            valid.append(roster)
        counts = await self.repository.bulk_upsert(valid)
        return counts, errors

    async def bulk_delete(self, age_groups: list[str], season: str | None) -> int:
        if not age_groups:
            raise ValidationException(field="ageGroups", message="Expected at least one age group")
        return await self.repository.bulk_delete(age_groups, self.resolve_season(season))

    async def get_metadata(self) -> RosterMetadata:
        return await self.repository.metadata()
