import logging

import pymongo

from teamhub.db.mongodb import get_database

logger = logging.getLogger(__name__)


async def create_indexes(db):
    """Creates the lookup paths every service relies on."""
    logger.info("Creating database indexes...")

    # Identity-provider principals
    await db["users"].create_index("email")

    # Team roster: resolve by link first, email second
    # One roster row per principal; rows added by admins carry no user_id
    await db["team_members"].create_index(
        "user_id",
        unique=True,
        partialFilterExpression={"user_id": {"$type": "string"}},
    )
    await db["team_members"].create_index("email")
    await db["team_members"].create_index("access_level")
    await db["team_members"].create_index("department")

    # Invites
    await db["invites"].create_index("code", unique=True)
    await db["invites"].create_index([("created_at", pymongo.DESCENDING)])

    # Tasks
    await db["tasks"].create_index("visibility")
    await db["tasks"].create_index("assignee_id")
    await db["tasks"].create_index("owner_id")
    await db["tasks"].create_index("status")
    await db["tasks"].create_index(
        [("visibility", pymongo.ASCENDING), ("created_at", pymongo.DESCENDING)]
    )

    # Comments
    await db["comments"].create_index(
        [("task_id", pymongo.ASCENDING), ("created_at", pymongo.ASCENDING)]
    )

    # Documents
    await db["documents"].create_index([("updated_at", pymongo.DESCENDING)])
    await db["document_versions"].create_index(
        [("document_id", pymongo.ASCENDING), ("version", pymongo.ASCENDING)],
        unique=True,
    )

    # Activity log
    await db["activity_log"].create_index([("created_at", pymongo.DESCENDING)])

    # Budget
    await db["budget_items"].create_index("category", unique=True)
    await db["expenses"].create_index([("created_at", pymongo.DESCENDING)])

    # Calendar
    await db["events"].create_index("date")

    logger.info("Database indexes created successfully.")


async def init_db():
    db = await get_database()
    await create_indexes(db)

    member_count = await db["team_members"].count_documents({})
    if member_count == 0:
        logger.info("Team roster is empty. The first member to register becomes admin.")
    else:
        logger.info(f"Team roster has {member_count} member(s).")
