from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable

import sentry_sdk
from fastapi import FastAPI, Request, Response
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from .database import db, db_context
from .endpoints import ROUTERS
from .logger import get_logger
from .settings import settings


logger = get_logger(__name__)

if settings.sentry_dsn:
    logger.debug("initializing sentry")
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        attach_stacktrace=True,
        shutdown_timeout=5,
        integrations=[SqlalchemyIntegration()],
        environment=settings.sentry_environment,
    )


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    if settings.debug:
        await db.create_tables()
    logger.info("mentoring service started")
    yield
    await db.engine.dispose()
    logger.info("mentoring service stopped")


app = FastAPI(
    title="Mentoring",
    description="Mentor availability, mentoring reports and mentor payouts.",
    root_path=settings.root_path,
    lifespan=lifespan,
)

for router in ROUTERS:
    app.include_router(router)


@app.middleware("http")
async def db_session(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Run each request in its own database session, which is only committed if the request succeeded."""

    async with db_context() as session:
        response = await call_next(request)
        if response.status_code >= 400:
            await session.rollback()
        return response
