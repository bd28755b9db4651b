"""Query and connection info endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from sqlite_eval.connection import Connection
from sqlite_eval.errors import EvalError
from sqlite_eval.query import evaluate
from sqlite_eval.server.services.db import db_session

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["query"])


class QueryRequest(BaseModel):
    sql: str
    buffer_size: int | None = Field(default=None, ge=1)


@router.get("/info")
def info(conn: Connection = Depends(db_session)) -> dict[str, Any]:
    """Database file name and buffer size."""
    return conn.info()


@router.post("/query")
def query(req: QueryRequest, conn: Connection = Depends(db_session)) -> dict[str, Any]:
    """Evaluate SQL and return every row as a JSON object."""
    try:
        result = evaluate(conn, req.sql, req.buffer_size)
    except EvalError as e:
        log.info("Query failed: %s", e)
        raise HTTPException(status_code=400, detail=str(e)) from e

    return {
        "columns": list(result.columns),
        "row_count": len(result),
        "rows": result.to_dicts(),
    }
