"""
Log formatting for classification runs.

Each line is stamped with the current batch ID and as-of day from
BatchContext, and with the tenant_id passed in `extra` by the engine, so a
single tenant's fallback or invariant violation can be traced to the run and
the day it was judged against.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from .context import get_as_of, get_batch_id

# Attributes every LogRecord carries; anything else came in through `extra`
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}


def _batch_fields() -> dict[str, str]:
    fields = {}
    batch_id = get_batch_id()
    if batch_id:
        fields["batch_id"] = batch_id
    as_of = get_as_of()
    if as_of is not None:
        fields["as_of"] = as_of.isoformat()
    return fields


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line:

    {"timestamp": "2024-02-15T10:30:00.000Z", "level": "WARNING",
     "logger": "tenant_truth.rent_status.classifier",
     "message": "Status calculation failed, falling back to pending: ...",
     "batch_id": "batch-3f2a...", "as_of": "2024-02-15", "tenant_id": "t-42"}
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_batch_fields())

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                payload[key] = value

        return json.dumps(payload, default=str)


class HumanFormatter(logging.Formatter):
    """Terminal format: `time [LEVEL] logger: [batch as_of] message tenant=...`"""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        fields = _batch_fields()
        scope = " ".join(
            part
            for part in (fields.get("batch_id", "")[:14], fields.get("as_of", ""))
            if part
        )
        line = f"{timestamp} [{record.levelname}] {record.name}: "
        if scope:
            line += f"[{scope}] "
        line += record.getMessage()

        tenant_id = getattr(record, "tenant_id", None)
        if tenant_id is not None:
            line += f" tenant={tenant_id}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(level: str = "INFO", json_format: bool | None = None) -> None:
    """
    Install a single stderr handler on the root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: JSON lines if True, human lines if False. None picks
            JSON when stderr is not a terminal.
    """
    if json_format is None:
        json_format = not sys.stderr.isatty()

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if json_format else HumanFormatter())
    root.addHandler(handler)
