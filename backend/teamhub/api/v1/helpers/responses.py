"""
Shared OpenAPI response definitions for FastAPI route decorators.

Usage:
    from teamhub.api.v1.helpers.responses import RESP_AUTH_404

    @router.get("/tasks/{task_id}", responses={**RESP_AUTH_404})
    async def get_task(...): ...
"""

RESP_400 = {400: {"description": "Invalid input"}}
RESP_401 = {401: {"description": "Not authenticated"}}
RESP_403 = {403: {"description": "Team membership or permission required"}}
RESP_404 = {404: {"description": "Resource not found"}}
RESP_409 = {409: {"description": "Conflict with existing state"}}
RESP_502 = {502: {"description": "Blob storage failure"}}

RESP_AUTH = {**RESP_401, **RESP_403}
RESP_AUTH_404 = {**RESP_AUTH, **RESP_404}
RESP_AUTH_400 = {**RESP_AUTH, **RESP_400}
RESP_AUTH_400_404 = {**RESP_AUTH, **RESP_400, **RESP_404}
