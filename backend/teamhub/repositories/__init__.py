"""
Repository Pattern for Database Access

One repository per MongoDB collection. Services build the repositories
they need from the database handle they are given.
"""

from teamhub.repositories.activity import ActivityRepository
from teamhub.repositories.base import BaseRepository
from teamhub.repositories.budget import BudgetItemRepository, ExpenseRepository
from teamhub.repositories.calendar import EventRepository, MilestoneRepository
from teamhub.repositories.documents import DocumentRepository, DocumentVersionRepository
from teamhub.repositories.invites import InviteRepository
from teamhub.repositories.locks import LockRepository
from teamhub.repositories.members import MemberRepository
from teamhub.repositories.tasks import CommentRepository, TaskRepository
from teamhub.repositories.users import UserRepository

__all__ = [
    "BaseRepository",
    "ActivityRepository",
    "BudgetItemRepository",
    "CommentRepository",
    "DocumentRepository",
    "DocumentVersionRepository",
    "EventRepository",
    "ExpenseRepository",
    "InviteRepository",
    "LockRepository",
    "MemberRepository",
    "MilestoneRepository",
    "TaskRepository",
    "UserRepository",
]
