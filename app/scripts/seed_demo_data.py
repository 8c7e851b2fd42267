"""
Seed Demo Data Script
This script populates the groups, posts and pets collections from the config.
Safe to run repeatedly; existing documents are left untouched.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from app.config.seed_data import DEMO_DATA
from app.core.serialization import utc_now
from app.database.mongo_client import get_database
from app.modules.groups.models import GROUPS_COLLECTION
from app.modules.pets.models import PETS_COLLECTION
from app.modules.posts.models import POSTS_COLLECTION
from pymongo.database import Database
from pymongo.errors import PyMongoError
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _insert_missing(db: Database, collection: str, documents: list, key_fields: tuple, defaults: dict) -> int:
    """Insert each document unless one with the same key fields exists. Returns the number inserted."""
    created_count = 0
    for doc in documents:
        key = {field: doc[field] for field in key_fields}
        try:
            result = db[collection].update_one(
                key,
                {"$setOnInsert": {**defaults, **doc, "createdAt": utc_now()}},
                upsert=True
            )
            if result.upserted_id is not None:
                created_count += 1
                logger.debug(f"Created {collection} document: {key}")
        except PyMongoError as e:
            logger.error(f"Error seeding {collection} document {key}: {e}")
    return created_count


def seed_groups(db: Database) -> int:
    logger.info("Seeding groups...")
    count = 0
    for group in DEMO_DATA["groups"]:
        member_ids = [group["ownerId"]] if group.get("ownerId") else []
        count += _insert_missing(
            db, GROUPS_COLLECTION, [group], ("name",),
            {"memberIds": member_ids, "members": len(member_ids)}
        )
    logger.info(f"Groups seeded: {count} created")
    return count


def seed_posts(db: Database) -> int:
    logger.info("Seeding posts...")
    count = _insert_missing(
        db, POSTS_COLLECTION, DEMO_DATA["posts"], ("authorId", "content"),
        {"likes": [], "comments": []}
    )
    logger.info(f"Posts seeded: {count} created")
    return count


def seed_pets(db: Database) -> int:
    logger.info("Seeding pets...")
    count = _insert_missing(db, PETS_COLLECTION, DEMO_DATA["pets"], ("name",), {})
    logger.info(f"Pets seeded: {count} created")
    return count


def main():
    """Main function to seed demo content"""
    try:
        db = get_database()

        logger.info("Starting demo data seeding...")
        group_count = seed_groups(db)
        post_count = seed_posts(db)
        pet_count = seed_pets(db)

        logger.info("Seeding completed successfully!")
        logger.info(f"Total: {group_count} groups, {post_count} posts, {pet_count} pets created")

    except PyMongoError as e:
        logger.error(f"Error during seeding: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
