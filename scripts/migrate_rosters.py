#!/usr/bin/env python3
"""
Migration script for roster documents.

Import mode reads a legacy rosters.json where every age group maps team names
to {players, staff} next to the reserved keys lastUpdated, trialInfo,
trainingInfo, tournamentInfo, shadowPlayers and withdrawn:

    {"U15": {"Green": {"players": [...], "staff": {...}},
             "shadowPlayers": [...], "withdrawn": [...], "lastUpdated": "01/02/2025"}}

Every division is upserted for the given season.

Backfill mode walks the stored rosters and assigns entity ids to players,
staff and selectors that were written without one.

Usage:
    python scripts/migrate_rosters.py --file public/data/rosters.json [--season 2025] [--dry-run] [--production]
    python scripts/migrate_rosters.py --backfill-ids [--dry-run] [--production]

Options:
    --file          Legacy rosters.json to import
    --season        Season the imported divisions belong to (default: current year)
    --backfill-ids  Assign ids to stored entries that have none
    --dry-run       Preview changes without modifying the database
    --production    Run against production database (uses DB_URL_PROD)
"""

import argparse
import asyncio
import json
import os
import sys
from datetime import datetime
from pathlib import Path

import certifi
from motor.motor_asyncio import AsyncIOMotorClient
from pydantic import ValidationError

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import settings
from logging_config import logger
from models.rosters import Roster
from services.roster_repository import MongoRosterRepository, missing_ids

RESERVED_KEYS = {
    "lastUpdated",
    "trialInfo",
    "trainingInfo",
    "tournamentInfo",
    "shadowPlayers",
    "withdrawn",
    "selectors",
}


async def get_database(use_production: bool = False):
    """Connect to MongoDB."""
    if use_production:
        db_url = settings.DB_URL_PROD
        db_name = "hockey_admin"
    else:
        db_url = settings.DB_URL
        db_name = settings.DB_NAME

    if not db_url:
        raise ValueError(
            f"Database URL not found. Set {'DB_URL_PROD' if use_production else 'DB_URL'} environment variable."
        )

    client = AsyncIOMotorClient(db_url, tlsCAFile=certifi.where())
    return client[db_name]


def legacy_to_roster(age_group: str, data: dict, season: str) -> Roster:
    """Convert one legacy age-group entry into a division document."""
    teams = [
        {
            "name": key,
            "players": (value or {}).get("players") or [],
            "staff": (value or {}).get("staff") or {},
        }
        for key, value in data.items()
        if key not in RESERVED_KEYS
    ]
    return Roster(
        ageGroup=age_group,
        season=season,
        lastUpdated=data.get("lastUpdated") or "",
        trialInfo=data.get("trialInfo"),
        trainingInfo=data.get("trainingInfo"),
        tournamentInfo=data.get("tournamentInfo"),
        shadowPlayers=data.get("shadowPlayers") or [],
        withdrawn=[
            {**p, "reason": p.get("reason") or settings.DEFAULT_WITHDRAWAL_REASON}
            for p in data.get("withdrawn") or []
        ],
        selectors=data.get("selectors") or [],
        teams=teams,
    )


def load_legacy_file(path: Path, season: str) -> tuple[list[Roster], list[dict]]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    rosters, errors = [], []
    for age_group, data in raw.items():
        try:
            rosters.append(legacy_to_roster(age_group, data or {}, season))
        except ValidationError as e:
            errors.append({"ageGroup": age_group, "error": str(e)})
    return rosters, errors


async def run_import(db, path: Path, season: str, dry_run: bool) -> None:
    rosters, errors = load_legacy_file(path, season)
    logger.info(f"Loaded {len(rosters)} divisions from {path}")

    for roster in rosters:
        prefix = "[DRY RUN] Would import" if dry_run else "Importing"
        logger.info(
            f"  {prefix} {roster.ageGroup}: {len(roster.teams)} teams, "
            f"{len(roster.shadowPlayers)} shadow players, {len(roster.withdrawn)} withdrawn"
        )
    for error in errors:
        logger.error(f"  ✗ Skipped {error['ageGroup']}: {error['error']}")

    if dry_run or not rosters:
        return

    counts = await MongoRosterRepository(db).bulk_upsert(rosters)
    logger.info(f"Inserted {counts['inserted']}, updated {counts['modified']}")


async def run_backfill(db, dry_run: bool) -> None:
    collection = db[settings.ROSTERS_COLLECTION]
    updated = skipped = error_count = 0

    async for document in collection.find({}):
        label = f"{document.get('ageGroup')}/{document.get('season')}"
        count = missing_ids(document)
        if not count:
            skipped += 1
            continue
        try:
            roster = Roster(**document)
        except ValidationError as e:
            error_count += 1
            logger.error(f"  ✗ {label} is not a valid roster: {e}")
            continue

        if dry_run:
            logger.info(f"  [DRY RUN] Would assign {count} ids in {label}")
        else:
            fields = roster.model_dump(
                mode="json", include={"teams", "shadowPlayers", "withdrawn", "selectors"}
            )
            await collection.update_one({"_id": document["_id"]}, {"$set": fields})
            logger.info(f"  Assigned {count} ids in {label}")
        updated += 1

    logger.info(f"Updated: {updated}, already up-to-date: {skipped}, errors: {error_count}")


async def run_migration(args) -> None:
    logger.info("=" * 60)
    logger.info("Roster Migration")
    logger.info(f"Mode: {'DRY RUN' if args.dry_run else 'LIVE'}")
    logger.info(f"Target: {'PRODUCTION' if args.production else 'DEVELOPMENT'}")
    logger.info(f"Started: {datetime.now().isoformat()}")
    logger.info("=" * 60)

    db = await get_database(args.production)
    try:
        if args.file:
            await run_import(db, Path(args.file), str(args.season), args.dry_run)
        if args.backfill_ids:
            await run_backfill(db, args.dry_run)
    finally:
        db.client.close()

    if args.dry_run:
        logger.info("This was a dry run. No changes were made to the database.")


def main():
    parser = argparse.ArgumentParser(description="Import legacy rosters and backfill entity ids")
    parser.add_argument("--file", help="Legacy rosters.json to import")
    parser.add_argument("--season", default=settings.DEFAULT_SEASON, help="Season of the imported divisions")
    parser.add_argument("--backfill-ids", action="store_true", help="Assign ids to stored entries without one")
    parser.add_argument("--dry-run", action="store_true", help="Preview changes without modifying the database")
    parser.add_argument("--production", action="store_true", help="Run against production database")
    args = parser.parse_args()

    if not args.file and not args.backfill_ids:
        parser.error("nothing to do: pass --file and/or --backfill-ids")

    asyncio.run(run_migration(args))


if __name__ == "__main__":
    main()
