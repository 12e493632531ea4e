"""
Local Greece - Logging setup

Configures the root logger from `LoggingConfig`. Modules log through
`logging.getLogger(__name__)` and attach context via `extra={...}`; the JSON
formatter carries those extra fields into the emitted record.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from local_greece.shared.config import LoggingConfig, Settings

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord has; anything else came in through `extra`
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys() | {"message", "asctime"}
)


class JsonFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    def __init__(self, include_timestamp: bool = True):
        super().__init__()
        self.include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self.include_timestamp:
            payload["timestamp"] = datetime.fromtimestamp(record.created, UTC).isoformat()

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str, ensure_ascii=False)


def setup_logging(config: Settings | LoggingConfig) -> None:
    """
    Configure the root logger.

    Args:
        config: Full settings or just the logging section
    """
    logging_config = config.logging if isinstance(config, Settings) else config

    handler = logging.StreamHandler()
    if logging_config.format == "json":
        handler.setFormatter(JsonFormatter(include_timestamp=logging_config.include_timestamp))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logging.basicConfig(level=logging_config.level.upper(), handlers=[handler], force=True)
