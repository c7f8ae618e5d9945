"""Tests for task endpoints."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

from teamhub.api.v1.endpoints.tasks import (
    add_comment,
    create_task,
    delete_task,
    list_recent_tasks,
    read_task,
    update_task_status,
)
from teamhub.schemas.task import CommentCreate, TaskCreate, TaskStatusUpdate


def _service():
    service = MagicMock()
    for name in ("list_recent", "get_by_id", "create", "update_status", "add_comment", "remove"):
        setattr(service, name, AsyncMock())
    return service


class TestReads:
    def test_recent_uses_default_limit_when_omitted(self):
        service = _service()
        asyncio.run(list_recent_tasks(limit=None, principal_id="principal-bob", service=service))
        service.list_recent.assert_called_once_with("principal-bob", None)

    def test_invisible_task_reads_as_null(self):
        service = _service()
        service.get_by_id.return_value = None
        assert asyncio.run(read_task(task_id="task-personal", principal_id="principal-carol", service=service)) is None


class TestWrites:
    def test_create_forwards_enum_values(self):
        service = _service()
        task_in = TaskCreate(title="Write docs", assignee_id="member-bob", due_date="2024-07-01", visibility="personal")

        asyncio.run(create_task(task_in=task_in, principal_id="principal-bob", service=service))

        fields = service.create.call_args.args[1]
        assert fields["visibility"] == "personal"
        assert fields["status"] == "todo"
        assert fields["owner_id"] is None

    def test_status_change(self):
        service = _service()
        asyncio.run(
            update_task_status(
                task_id="task-team",
                status_in=TaskStatusUpdate(status="review"),
                principal_id="principal-bob",
                service=service,
            )
        )
        service.update_status.assert_called_once_with("principal-bob", "task-team", "review")

    def test_comment(self):
        service = _service()
        asyncio.run(
            add_comment(
                task_id="task-team",
                comment_in=CommentCreate(content="  Nice  "),
                principal_id="principal-bob",
                service=service,
            )
        )
        service.add_comment.assert_called_once_with("principal-bob", "task-team", "  Nice  ")

    def test_delete_no_content(self):
        service = _service()
        response = asyncio.run(delete_task(task_id="task-team", principal_id="principal-bob", service=service))
        assert response.status_code == 204
        service.remove.assert_called_once_with("principal-bob", "task-team")
