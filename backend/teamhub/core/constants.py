"""
Shared Constants

Centralized constants used across the application to ensure consistency.
"""

from typing import Dict, FrozenSet

# Access levels (coarse capability tiers)
ACCESS_LEVEL_ADMIN = "admin"
ACCESS_LEVEL_MEMBER = "member"
ACCESS_LEVEL_VIEWER = "viewer"

ACCESS_LEVELS = [ACCESS_LEVEL_ADMIN, ACCESS_LEVEL_MEMBER, ACCESS_LEVEL_VIEWER]

# Access levels allowed to write shared content (documents, budget, calendar)
EDITOR_ACCESS_LEVELS: FrozenSet[str] = frozenset({ACCESS_LEVEL_ADMIN, ACCESS_LEVEL_MEMBER})

# Task visibility
VISIBILITY_TEAM = "team"
VISIBILITY_PERSONAL = "personal"

# Task status -> human readable label used in activity entries
TASK_STATUS_LABELS: Dict[str, str] = {
    "todo": "To Do",
    "in-progress": "In Progress",
    "review": "Review",
    "done": "Done",
}

TASK_STATUS_DONE = "done"

# Invite codes: uppercase letters and digits without I, O, 0 and 1
INVITE_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
INVITE_CODE_MAX_ATTEMPTS = 5

# Reasons returned by invite validation
INVITE_REASON_NOT_FOUND = "Invalid invite code"
INVITE_REASON_USED = "Invite already used"
INVITE_REASON_EXPIRED = "Invite expired"

# Defaults applied when a principal registers itself
DEFAULT_MEMBER_NAME = "User"
DEFAULT_MEMBER_ROLE = "Developer"
DEFAULT_MEMBER_DEPARTMENT = "engineering"

# Display fallbacks for hydrated references
UNKNOWN_MEMBER_NAME = "Unknown"
UNASSIGNED_NAME = "Unassigned"

# Dashboard windows
DASHBOARD_WINDOW_DAYS = 7

# Activity verbs
ACTIVITY_CREATED_TASK = "created task"
ACTIVITY_UPDATED_TASK = "updated task"
ACTIVITY_COMMENTED = "commented on"
ACTIVITY_DELETED_TASK = "deleted task"
ACTIVITY_MOVED_TASK = "moved task to {label}"
ACTIVITY_CREATED_INVITE = "created invite link"
ACTIVITY_REVOKED_INVITE = "revoked invite link"
ACTIVITY_EXTENDED_INVITE = "extended invite link"
ACTIVITY_JOINED_TEAM = "joined the team"

# Distributed lock names
ROSTER_LOCK_NAME = "team-roster"

# Storage token types
TOKEN_TYPE_ACCESS = "access"
TOKEN_TYPE_UPLOAD = "upload"
TOKEN_TYPE_DOWNLOAD = "download"
