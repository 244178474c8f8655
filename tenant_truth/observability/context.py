"""
Batch context: which classification run a log line belongs to, and the
as-of day that run judges every tenant against.

Both values live in context variables so log formatters can stamp them on
every record without threading them through the engine's call signatures.
"""

import contextvars
import uuid
from datetime import date

_batch_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "batch_id", default=None
)
_as_of_var: contextvars.ContextVar[date | None] = contextvars.ContextVar("as_of", default=None)


def get_batch_id() -> str | None:
    return _batch_id_var.get()


def get_as_of() -> date | None:
    """As-of day of the batch in progress, if any."""
    return _as_of_var.get()


def generate_batch_id() -> str:
    return f"batch-{uuid.uuid4().hex[:16]}"


class BatchContext:
    """
    Scope one classification run.

    Usage:
        with BatchContext(as_of=classifier.as_of):
            classifier.aggregate_statistics(snapshots)
            # Every log line carries batch_id and as_of

    Nested contexts restore the outer batch on exit.
    """

    def __init__(self, batch_id: str | None = None, as_of: date | None = None):
        self.batch_id = batch_id or generate_batch_id()
        self.as_of = as_of
        self._tokens: tuple[contextvars.Token, contextvars.Token] | None = None

    def __enter__(self) -> "BatchContext":
        self._tokens = (_batch_id_var.set(self.batch_id), _as_of_var.set(self.as_of))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._tokens is None:
            return
        batch_token, as_of_token = self._tokens
        _as_of_var.reset(as_of_token)
        _batch_id_var.reset(batch_token)
        self._tokens = None
