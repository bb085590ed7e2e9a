"""
MongoDB Index Creation Script

Run this to create the indexes of the roster collection.
Should be run once after deployment and whenever index strategy changes.

Usage:
    python scripts/create_indexes.py [--prod]
"""

import sys
from pathlib import Path

# Add parent directory to Python path to allow importing from root
sys.path.insert(0, str(Path(__file__).parent.parent))

import argparse
import asyncio

import certifi
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import OperationFailure

from config import settings
from logging_config import logger


async def create_index_safe(collection, keys, **kwargs):
    """Helper to create index and skip if already exists"""
    index_name = kwargs.get("name", "unnamed")
    try:
        await collection.create_index(keys, **kwargs)
        logger.info(f"  ✓ Created index: {index_name}")
    except OperationFailure as e:
        if "already exists" in str(e) or "IndexOptionsConflict" in str(e):
            logger.info(f"  ↷ Index already exists: {index_name}")
        else:
            logger.error(f"  ✗ Failed to create index {index_name}: {str(e)}")
            raise


async def create_indexes(db_url: str, db_name: str):
    client = AsyncIOMotorClient(db_url, tlsCAFile=certifi.where())
    db = client[db_name]
    collection = db[settings.ROSTERS_COLLECTION]

    logger.info(f"Starting index creation for database: {db_name}...")
    try:
        # one division per age group and season
        await create_index_safe(
            collection,
            [("ageGroup", 1), ("season", 1)],
            name="age_group_season_unique_idx",
            unique=True,
            background=True,
        )
        await create_index_safe(collection, [("season", 1)], name="season_idx", background=True)

        logger.info("Index creation completed successfully")
        for idx_name, idx_info in (await collection.index_information()).items():
            logger.info(f"  - {idx_name}: {idx_info.get('key', [])}")
    finally:
        client.close()


def main():
    parser = argparse.ArgumentParser(description="Create MongoDB indexes.")
    parser.add_argument("--prod", action="store_true", help="Create indexes in production database.")
    args = parser.parse_args()

    db_url = settings.DB_URL_PROD if args.prod else settings.DB_URL
    db_name = "hockey_admin" if args.prod else settings.DB_NAME
    asyncio.run(create_indexes(db_url, db_name))


if __name__ == "__main__":
    main()
