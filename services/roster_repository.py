"""
Roster Repository - Storage of division documents

RosterRepository is the contract every store of division documents honours:
read-all, read-one, create, full-document replace and delete, keyed by
(ageGroup, season). MongoRosterRepository implements it on the rosters
collection; services.roster_api_client.RosterApiClient implements it over the
admin REST API.

A replace carrying a version only succeeds against the stored document with
that version and bumps it. A replace without a version is unconditional.
Info blocks the caller never set keep their stored value.

Entries stored before entity ids existed get ids when first read, and those
ids are written back so they stay valid for later requests.
"""

from datetime import datetime, timezone
from typing import Protocol, runtime_checkable

from pymongo import ReturnDocument, UpdateOne

from config import settings
from exceptions import (
    ConcurrencyConflictException,
    DatabaseOperationException,
    ResourceNotFoundException,
)
from logging_config import logger
from models.rosters import Roster, RosterMetadata
from utils import division_label, last_updated_stamp

INFO_FIELDS = {"trialInfo", "trainingInfo", "tournamentInfo"}
ENTRY_FIELDS = {"teams", "shadowPlayers", "withdrawn", "selectors"}


@runtime_checkable
class RosterRepository(Protocol):

    async def list_all(self, season: str | None = None) -> list[Roster]: ...

    async def get(self, age_group: str, season: str) -> Roster: ...

    async def create(self, roster: Roster) -> Roster: ...

    async def replace(self, roster: Roster) -> Roster: ...

    async def delete(self, age_group: str, season: str) -> int: ...


def missing_ids(document: dict) -> int:
    """Count player, staff and selector entries stored without an id."""
    entries = list(document.get("shadowPlayers") or [])
    entries += document.get("withdrawn") or []
    entries += document.get("selectors") or []
    for team in document.get("teams") or []:
        entries += team.get("players") or []
        entries += [s for s in (team.get("staff") or {}).values() if s]
    return sum(1 for entry in entries if isinstance(entry, dict) and not entry.get("id"))


def sort_seasons(seasons) -> list[str]:
    """Newest season first; numeric seasons before anything else"""
    def key(season: str):
        return (0, -int(season), "") if season.isdigit() else (1, 0, season)

    return sorted({s for s in seasons if s}, key=key)


class MongoRosterRepository:
    """Division documents in MongoDB, one document per (ageGroup, season)"""

    def __init__(self, db, collection_name: str | None = None):
        self.db = db
        self.collection_name = collection_name or settings.ROSTERS_COLLECTION

    @property
    def collection(self):
        return self.db[self.collection_name]

    @staticmethod
    def _filter(age_group: str, season: str) -> dict:
        return {"ageGroup": age_group, "season": season}

    async def list_all(self, season: str | None = None) -> list[Roster]:
        query = {"season": season} if season else {}
        cursor = self.collection.find(query, {"_id": 0}).sort("ageGroup", 1)
        documents = await cursor.to_list(length=None)
        return [await self._parse(doc) for doc in documents]

    async def get(self, age_group: str, season: str) -> Roster:
        doc = await self.collection.find_one(self._filter(age_group, season), {"_id": 0})
        if doc is None:
            raise ResourceNotFoundException(
                resource_type="Division",
                resource_id=division_label(age_group, season),
                details={"ageGroup": age_group, "season": season},
            )
        return await self._parse(doc)

    async def _parse(self, doc: dict) -> Roster:
        """Parse a stored document, persisting ids assigned to legacy entries"""
        roster = Roster(**doc)
        count = missing_ids(doc)
        if not count:
            return roster

        key = {"ageGroup": doc.get("ageGroup"), "season": doc.get("season")}
        stored = await self.collection.find_one_and_update(
            {**key, "version": doc.get("version")},
            {
                "$set": roster.model_dump(mode="json", include=ENTRY_FIELDS),
                "$inc": {"version": 1},
            },
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER,
        )
        if stored is None:
            # written by someone else since it was read
            stored = await self.collection.find_one(key, {"_id": 0})
            if stored is None:
                raise ResourceNotFoundException(
                    resource_type="Division",
                    resource_id=division_label(*roster.key),
                    details=key,
                )
            return Roster(**stored)

        logger.bind(**key, version=stored.get("version")).info(f"Assigned {count} entity ids")
        return Roster(**stored)

    async def create(self, roster: Roster) -> Roster:
        key = self._filter(roster.ageGroup, roster.season)
        if await self.collection.find_one(key, {"_id": 1}) is not None:
            raise ConcurrencyConflictException(
                resource_type="Division",
                resource_id=division_label(*roster.key),
                message=f"Roster already exists for {roster.ageGroup} in season {roster.season}",
            )

        now = datetime.now(timezone.utc)
        created = roster.model_copy(
            update={"version": 1, "lastUpdated": roster.lastUpdated or last_updated_stamp()}
        )
        document = created.model_dump(mode="json")
        document.update({"createdAt": now, "updatedAt": now})

        result = await self.collection.insert_one(document)
        if not result.acknowledged:
            raise DatabaseOperationException(
                operation="insert_one",
                collection=self.collection_name,
                details={**key, "reason": "Insert operation not acknowledged"},
            )

        logger.bind(**key).info("Division created")
        return created

    async def replace(self, roster: Roster) -> Roster:
        key = self._filter(roster.ageGroup, roster.season)
        query = dict(key)
        if roster.version is not None:
            query["version"] = roster.version

        unset_info = INFO_FIELDS - roster.model_fields_set
        fields = roster.model_dump(mode="json", exclude={"version"} | unset_info)
        fields["updatedAt"] = datetime.now(timezone.utc)

        doc = await self.collection.find_one_and_update(
            query,
            {"$set": fields, "$inc": {"version": 1}},
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            stored = await self.collection.find_one(key, {"_id": 0, "version": 1})
            if stored is None:
                raise ResourceNotFoundException(
                    resource_type="Division",
                    resource_id=division_label(*roster.key),
                    details=key,
                )
            raise ConcurrencyConflictException(
                resource_type="Division",
                resource_id=division_label(*roster.key),
                details={
                    **key,
                    "expected_version": roster.version,
                    "stored_version": stored.get("version"),
                },
            )

        logger.bind(
            **key,
            version=doc.get("version"),
            teams=len(roster.teams),
            selectors=len(roster.selectors),
        ).info("Division replaced")
        return Roster(**doc)

    async def delete(self, age_group: str, season: str) -> int:
        key = self._filter(age_group, season)
        result = await self.collection.delete_one(key)
        if result.deleted_count == 0:
            raise ResourceNotFoundException(
                resource_type="Division",
                resource_id=division_label(age_group, season),
                details=key,
            )
        logger.bind(**key).info("Division deleted")
        return result.deleted_count

    async def bulk_upsert(self, rosters: list[Roster]) -> dict:
        """Create or overwrite many divisions in one round trip, unconditionally"""
        if not rosters:
            return {"inserted": 0, "modified": 0, "matched": 0}

        now = datetime.now(timezone.utc)
        operations = []
        for roster in rosters:
            fields = roster.model_dump(mode="json", exclude={"version"})
            fields["lastUpdated"] = roster.lastUpdated or last_updated_stamp()
            fields["updatedAt"] = now
            operations.append(
                UpdateOne(
                    self._filter(*roster.key),
                    {"$set": fields, "$inc": {"version": 1}, "$setOnInsert": {"createdAt": now}},
                    upsert=True,
                )
            )

        result = await self.collection.bulk_write(operations)
        logger.bind(
            total=len(rosters),
            inserted=result.upserted_count,
            modified=result.modified_count,
        ).info("Bulk roster upsert")
        return {
            "inserted": result.upserted_count,
            "modified": result.modified_count,
            "matched": result.matched_count,
        }

    async def bulk_delete(self, age_groups: list[str], season: str) -> int:
        result = await self.collection.delete_many(
            {"ageGroup": {"$in": age_groups}, "season": season}
        )
        logger.bind(
            season=season, ageGroups=age_groups, deleted=result.deleted_count
        ).info("Bulk roster delete")
        return result.deleted_count

    async def metadata(self) -> RosterMetadata:
        cursor = self.collection.find({}, {"ageGroup": 1, "season": 1, "_id": 0})
        documents = await cursor.to_list(length=None)
        age_groups = sorted({d["ageGroup"] for d in documents if d.get("ageGroup")})
        seasons = sort_seasons(str(d["season"]) for d in documents if d.get("season"))
        return RosterMetadata(ageGroups=age_groups, seasons=seasons)
