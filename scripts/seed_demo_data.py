#!/usr/bin/env python3
"""
Seed a demo workspace: roster, tasks, budget, calendar and activity.

Does nothing when the roster already has members, unless --reset is
given, which first clears every TeamHub collection. The reset is a data
utility for demo and development databases only.

Usage:
    python scripts/seed_demo_data.py [--reset]
"""

import argparse
import asyncio
import logging
import sys
from datetime import timedelta
from pathlib import Path

# Add backend directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from motor.motor_asyncio import AsyncIOMotorClient  # noqa: E402

from teamhub.core.clock import to_date_string, utc_now  # noqa: E402
from teamhub.core.config import settings  # noqa: E402
from teamhub.core.init_db import create_indexes  # noqa: E402
from teamhub.models.activity import ActivityLogEntry  # noqa: E402
from teamhub.models.budget import BudgetItem, Expense  # noqa: E402
from teamhub.models.calendar import Event, Milestone  # noqa: E402
from teamhub.models.member import TeamMember  # noqa: E402
from teamhub.models.task import Task  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

RESET_COLLECTIONS = [
    "activity_log",
    "comments",
    "events",
    "milestones",
    "expenses",
    "budget_items",
    "tasks",
    "document_versions",
    "documents",
    "invites",
    "team_members",
]

MEMBERS = [
    ("Alex Chen", "alex@team.com", "Product Lead", "product", "online", "admin"),
    ("Sarah Miller", "sarah@team.com", "Senior Designer", "design", "online", "member"),
    ("James Wilson", "james@team.com", "Backend Engineer", "engineering", "online", "member"),
    ("Emma Davis", "emma@team.com", "Product Designer", "design", "away", "member"),
    ("Michael Chen", "michael@team.com", "Finance Manager", "finance", "online", "member"),
    ("Lisa Wong", "lisa@team.com", "Marketing Lead", "marketing", "online", "member"),
    ("David Park", "david@team.com", "Frontend Engineer", "engineering", "offline", "member"),
    ("Rachel Kim", "rachel@team.com", "DevOps Engineer", "engineering", "online", "viewer"),
]

# (title, status, priority, owner/assignee email, due in days, tags)
TASKS = [
    ("Design system documentation", "in-progress", "high", "sarah@team.com", 3, ["design", "docs"]),
    ("API integration for payments", "todo", "high", "james@team.com", 8, ["backend", "api"]),
    ("User onboarding flow", "review", "medium", "emma@team.com", 1, ["ux", "design"]),
    ("Q1 Budget Review", "todo", "high", "michael@team.com", 5, ["finance", "budget"]),
    ("Mobile app performance", "in-progress", "medium", "david@team.com", 13, ["mobile", "performance"]),
    ("Marketing landing page", "done", "low", "lisa@team.com", -2, ["marketing", "web"]),
    ("Database migration", "review", "high", "james@team.com", -1, ["backend", "database"]),
    ("Security audit", "todo", "high", "rachel@team.com", 18, ["security", "audit"]),
]

BUDGET = [
    ("Engineering", 50000, 42000),
    ("Design", 25000, 18000),
    ("Marketing", 30000, 28000),
    ("Operations", 20000, 15000),
    ("Infrastructure", 15000, 12000),
    ("Legal & Compliance", 10000, 5000),
]

EXPENSES = [
    ("AWS Infrastructure", 4500, "Infrastructure", "approved"),
    ("Design tools subscription", 1200, "Design", "approved"),
    ("Marketing campaign", 8000, "Marketing", "pending"),
    ("Team offsite", 3500, "Operations", "approved"),
    ("Software licenses", 2800, "Engineering", "approved"),
]

MILESTONES = [
    ("Project Kickoff", "Initial team meeting and project setup", -14, "completed", 100),
    ("Design Phase Complete", "All design mockups and prototypes finalized", -4, "in-progress", 75),
    ("MVP Development", "Core features development and testing", 10, "in-progress", 40),
    ("Beta Launch", "Release beta version to select users", 24, "upcoming", 0),
    ("Public Launch", "Official product launch", 41, "upcoming", 0),
]

EVENTS = [
    ("Sprint Planning", 0, "10:00 AM", "meeting", 5),
    ("Design Review", 2, "2:00 PM", "review", 3),
    ("Team Standup", 3, "9:30 AM", "meeting", 8),
    ("Budget Review", 7, "11:00 AM", "review", 4),
    ("Client Presentation", 9, "3:00 PM", "presentation", 6),
]

ACTIVITY = [
    ("sarah@team.com", "completed task", "Homepage redesign"),
    ("james@team.com", "commented on", "API integration"),
    ("emma@team.com", "started", "User research"),
    ("michael@team.com", "approved", "Q1 budget"),
]


async def reset(db):
    for name in RESET_COLLECTIONS:
        result = await db[name].delete_many({})
        logger.info(f"Cleared {result.deleted_count} document(s) from {name}")


async def seed(db):
    if await db["team_members"].count_documents({}) > 0:
        logger.info("Roster is not empty; nothing to seed. Use --reset to start over.")
        return

    now = utc_now()
    today = now.date()

    members = {}
    for name, email, role, department, status, access_level in MEMBERS:
        member = TeamMember(
            name=name,
            email=email,
            role=role,
            department=department,
            status=status,
            access_level=access_level,
        )
        await db["team_members"].insert_one(member.model_dump(by_alias=True))
        members[email] = member
    logger.info(f"Seeded {len(members)} members")

    for index, (title, status, priority, email, due_in, tags) in enumerate(TASKS):
        task = Task(
            title=title,
            status=status,
            priority=priority,
            visibility="team",
            owner_id=members[email].id,
            assignee_id=members[email].id,
            due_date=to_date_string(today + timedelta(days=due_in)),
            tags=tags,
            created_at=now - timedelta(days=index),
        )
        await db["tasks"].insert_one(task.model_dump(by_alias=True))
    logger.info(f"Seeded {len(TASKS)} tasks")

    for category, allocated, spent in BUDGET:
        item = BudgetItem(category=category, allocated=allocated, spent=spent)
        await db["budget_items"].insert_one(item.model_dump(by_alias=True))

    for index, (description, amount, category, status) in enumerate(EXPENSES):
        expense = Expense(
            description=description,
            amount=amount,
            category=category,
            date=to_date_string(today - timedelta(days=len(EXPENSES) - index)),
            status=status,
            created_at=now - timedelta(hours=len(EXPENSES) - index),
        )
        await db["expenses"].insert_one(expense.model_dump(by_alias=True))
    logger.info(f"Seeded {len(BUDGET)} budget categories and {len(EXPENSES)} expenses")

    for title, description, due_in, status, progress in MILESTONES:
        milestone = Milestone(
            title=title,
            description=description,
            due_date=to_date_string(today + timedelta(days=due_in)),
            status=status,
            progress=progress,
        )
        await db["milestones"].insert_one(milestone.model_dump(by_alias=True))

    for title, in_days, time, event_type, attendees in EVENTS:
        event = Event(
            title=title,
            date=to_date_string(today + timedelta(days=in_days)),
            time=time,
            type=event_type,
            attendees=attendees,
        )
        await db["events"].insert_one(event.model_dump(by_alias=True))
    logger.info(f"Seeded {len(MILESTONES)} milestones and {len(EVENTS)} events")

    for index, (email, action, target) in enumerate(ACTIVITY):
        entry = ActivityLogEntry(
            user_id=members[email].id,
            action=action,
            target=target,
            created_at=now - timedelta(minutes=15 * (index + 1)),
        )
        await db["activity_log"].insert_one(entry.model_dump(by_alias=True))
    logger.info(f"Seeded {len(ACTIVITY)} activity entries")


async def main(do_reset: bool):
    client = AsyncIOMotorClient(settings.MONGODB_URL, tz_aware=True)
    db = client[settings.DATABASE_NAME]

    try:
        await client.admin.command("ping")
        logger.info("Connected to MongoDB")

        await create_indexes(db)
        if do_reset:
            await reset(db)
        await seed(db)
    finally:
        client.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed TeamHub with demo data")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete all TeamHub data before seeding",
    )
    args = parser.parse_args()
    asyncio.run(main(args.reset))
