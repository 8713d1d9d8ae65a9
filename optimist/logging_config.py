"""
Logging setup for optimist.

Library modules only log through module loggers; the application (or the
optimist CLI) decides where records go by calling setup_logging().

Environment Variables:
    OPTIMIST_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR - default: INFO
    OPTIMIST_LOG_FORMAT: json or text - default: json

Usage:
    setup_logging()
    get_logger(__name__, txn_id="save-42").debug("Transaction started")
"""

import logging
import os
import sys
from typing import Any, Optional, TextIO

from pythonjsonlogger.json import JsonFormatter

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s [txn_id=%(txn_id)s]"


class TxnIdFilter(logging.Filter):
    """Give records logged without a txn_id the placeholder "N/A"."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "txn_id"):
            record.txn_id = "N/A"  # type: ignore
        return True


def _formatter(log_format: str) -> logging.Formatter:
    if log_format == "text":
        return logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
    return JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s %(txn_id)s",
        rename_fields={"asctime": "timestamp", "name": "logger", "levelname": "level"},
    )


def setup_logging(stream: Optional[TextIO] = None) -> None:
    """
    Route all records to one stream handler (stderr by default).

    Replaces any handlers already on the root logger. Unknown levels fall
    back to INFO, unknown formats to json.
    """
    level = LEVELS.get(os.getenv("OPTIMIST_LOG_LEVEL", "INFO").upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.addFilter(TxnIdFilter())
    handler.setFormatter(_formatter(os.getenv("OPTIMIST_LOG_FORMAT", "json").lower()))

    root = logging.getLogger()
    for old in root.handlers[:]:
        root.removeHandler(old)
    root.setLevel(level)
    root.addHandler(handler)


def get_logger(name: str, txn_id: Optional[Any] = None) -> logging.LoggerAdapter:
    """Logger whose records carry txn_id ("N/A" when not tied to a transaction)."""
    return logging.LoggerAdapter(
        logging.getLogger(name),
        {"txn_id": "N/A" if txn_id is None else str(txn_id)},
    )
