"""Root logging setup: plain text for development, one JSON object per line otherwise."""

from __future__ import annotations

import logging
import sys
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from .shared.correlation import get_causation_id, get_correlation_id

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(correlation_id)s] %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class CorrelationFilter(logging.Filter):
    """Stamps every record with the active correlation and causation ids."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        record.causation_id = get_causation_id() or "-"
        return True


class GiftDeskJsonFormatter(JsonFormatter):
    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["correlation_id"] = getattr(record, "correlation_id", None)
        log_record["causation_id"] = getattr(record, "causation_id", None)


def configure_logging(level: str = "INFO", json: bool = False) -> logging.Handler:
    """Install a single stdout handler on the root logger and return it.

    Calling it again replaces the handler installed by the previous call.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationFilter())
    if json:
        handler.setFormatter(
            GiftDeskJsonFormatter(JSON_FORMAT, rename_fields={"asctime": "timestamp"})
        )
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    handler.set_name("giftdesk")

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == "giftdesk":
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper())

    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    return handler
