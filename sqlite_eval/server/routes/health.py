"""Health check endpoint."""

import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter

from sqlite_eval import config
from sqlite_eval.errors import EvalError
from sqlite_eval.server.services.db import get_connection

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health() -> dict[str, Any]:
    """Health check with database status."""
    status: dict[str, Any] = {
        "status": "ok",
        "db_path": config.DB_PATH,
        "db_exists": bool(config.DB_PATH) and Path(config.DB_PATH).exists(),
    }

    try:
        conn = get_connection()
        status["connected"] = not conn.closed
    except (FileNotFoundError, EvalError) as e:
        log.warning("Health check database error: %s", e)
        status["connected"] = False
        status["error"] = str(e)

    return status
