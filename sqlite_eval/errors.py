"""Exception types raised by sqlite-eval.

Every failure surfaced to callers derives from `EvalError`. Engine failures
carry SQLite's own diagnostic text and chain the original `sqlite3` error.
"""


class EvalError(Exception):
    """Base class for sqlite-eval failures."""


class ConnectError(EvalError):
    """The database could not be opened read-only."""


class ConnectionClosedError(EvalError):
    """An operation was attempted on a closed connection."""

    def __init__(self, msg: str = "The database connection is closed.") -> None:
        super().__init__(msg)


class PrepareError(EvalError):
    """SQL text failed to compile (syntax error, unknown table or column)."""


class StepError(EvalError):
    """The engine failed while stepping through result rows."""


class ExtensionError(EvalError):
    """A loadable extension could not be loaded."""
