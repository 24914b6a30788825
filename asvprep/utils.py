"""
asvprep Utilities - Shared helper functions.

Responsibilities:
- Time formatting
- JSON serialization helpers
- Logging setup for the runner

Invariants:
- All timestamps use ISO-8601 format in UTC
- Log lines carry a second-resolution timestamp and the call site
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Mapping


LOG_FORMAT = "%(asctime)s (%(filename)s:%(lineno)d:%(funcName)s) %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

_handler: logging.Handler | None = None


def now_iso() -> str:
    """
    Return current time as ISO-8601 in UTC.
    
    Returns:
        ISO-8601 formatted string, e.g., "2025-12-23T17:02:10+00:00"
    """
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def serialize_json(data: Mapping[str, Any]) -> str:
    """
    Serialize dictionary to JSON deterministically.
    
    Args:
        data: Dictionary to serialize.
    
    Returns:
        JSON string with sorted keys, 2-space indent, trailing newline.
    """
    return json.dumps(data, indent=2, sort_keys=True) + "\n"


def setup_logging(level: str = "INFO") -> None:
    """Configure the asvprep logger hierarchy (idempotent)."""
    global _handler
    logger = logging.getLogger("asvprep")
    logger.setLevel(level.upper())
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        logger.addHandler(_handler)
