import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from teamhub.api import health
from teamhub.api.v1.endpoints import budget, calendar, dashboard, documents, invites, members, storage, tasks
from teamhub.core.config import settings
from teamhub.core.exceptions import TeamHubError
from teamhub.core.init_db import init_db
from teamhub.core.logging_config import RequestLoggingMiddleware, setup_logging
from teamhub.core.metrics import PrometheusMiddleware, metrics_endpoint
from teamhub.db.mongodb import close_mongo_connection, connect_to_mongo

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_to_mongo()
    await init_db()
    logger.info(f"{settings.PROJECT_NAME} started")
    yield
    await close_mongo_connection()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
    TeamHub API for a small team's shared workspace.

    ## Features
    * **Team Roster**: Members with admin, member and viewer access levels.
    * **Invites**: Single-use, time-limited join codes issued by admins.
    * **Tasks**: Team and personal tasks with comments and an activity log.
    * **Documents**: Versioned file uploads with signed download links.
    * **Budget & Calendar**: Categories, expenses, milestones and events.

    """,
    version="0.1.0",
    lifespan=lifespan,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
)

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(PrometheusMiddleware)


@app.exception_handler(TeamHubError)
async def teamhub_error_handler(request: Request, exc: TeamHubError):
    content = {"detail": exc.detail, "error_code": exc.error_code}
    if exc.extra:
        content.update(exc.extra)
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


app.add_route("/metrics", metrics_endpoint, methods=["GET"])

app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(members.router, prefix=f"{settings.API_V1_STR}/members", tags=["members"])
app.include_router(invites.router, prefix=f"{settings.API_V1_STR}/invites", tags=["invites"])
app.include_router(tasks.router, prefix=f"{settings.API_V1_STR}/tasks", tags=["tasks"])
app.include_router(documents.router, prefix=f"{settings.API_V1_STR}/documents", tags=["documents"])
app.include_router(storage.router, prefix=f"{settings.API_V1_STR}/storage", tags=["storage"])
app.include_router(dashboard.router, prefix=f"{settings.API_V1_STR}/dashboard", tags=["dashboard"])
app.include_router(budget.router, prefix=f"{settings.API_V1_STR}/budget", tags=["budget"])
app.include_router(calendar.router, prefix=f"{settings.API_V1_STR}/calendar", tags=["calendar"])


@app.get("/")
async def root():
    return {"message": "Welcome to TeamHub API"}
