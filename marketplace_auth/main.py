"""Main FastAPI application entry point.

Wires configuration, middleware, exception handlers and routers, and runs
the expired-token sweep in the background for the application's lifetime.
"""

import asyncio
import contextlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketplace_auth.core.config import settings
from marketplace_auth.core.container import get_database, get_logger
from marketplace_auth.infrastructure.jobs import TokenCleanupJob
from marketplace_auth.presentation.api.middleware.trace_middleware import TraceMiddleware
from marketplace_auth.presentation.api.v1.errors import register_exception_handlers
from marketplace_auth.presentation.routers.api.v1 import account_router
from marketplace_auth.presentation.routers.system import system_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    - Startup: start the token cleanup loop (if enabled)
    - Shutdown: stop the loop and dispose of the connection pool
    """
    logger = get_logger()
    database = get_database()

    cleanup_task: asyncio.Task[None] | None = None
    if settings.token_cleanup_interval_seconds > 0:
        job = TokenCleanupJob(database=database, logger=logger)
        cleanup_task = asyncio.create_task(
            job.run_forever(settings.token_cleanup_interval_seconds)
        )

    logger.info(
        "application_started",
        environment=settings.environment.value,
        version=settings.app_version,
    )

    yield

    if cleanup_task is not None:
        cleanup_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await cleanup_task

    await database.close()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.app_name,
    description="Account service: registration, email confirmation, login and refresh token rotation",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Wire trace middleware (request correlation)
app.add_middleware(TraceMiddleware)

register_exception_handlers(app)

app.include_router(system_router)
app.include_router(account_router, prefix=settings.api_prefix)
