"""FastAPI application serving a read-only database."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sqlite_eval.server.routes import health, query
from sqlite_eval.server.services.db import close_connection

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle — close DB on shutdown."""
    log.info("Starting sqlite-eval server")
    yield
    log.info("Shutting down sqlite-eval server")
    close_connection()


app = FastAPI(
    title="sqlite-eval",
    description="Read-only SQL evaluation over HTTP",
    lifespan=lifespan,
)


@app.exception_handler(FileNotFoundError)
async def database_missing(request: Request, exc: FileNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": str(exc)})


app.include_router(health.router)
app.include_router(query.router)
