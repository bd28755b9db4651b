"""Configuration for sqlite-eval, read from the environment."""

import os

# Rows per accumulation chunk for new connections
DEFAULT_BUFFER_SIZE = int(os.environ.get("SQLITE_EVAL_BUFFER_SIZE", "5000"))

# Database served by `sqlite-eval serve` when --db is not given
DB_PATH = os.environ.get("SQLITE_EVAL_DB_PATH", "")

# Extensions loaded into the served connection, os.pathsep-separated
EXTENSIONS = [p for p in os.environ.get("SQLITE_EVAL_EXTENSIONS", "").split(os.pathsep) if p]

# Server defaults
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8200
