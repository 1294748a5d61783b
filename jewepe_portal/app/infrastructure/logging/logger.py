import json
import logging
from datetime import datetime, timezone
from typing import Any

ROOT_LOGGER = "jewepe_portal"
_REDACTED_KEYS = {"token", "access_token", "password", "authorization"}


def get_logger(name: str) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        root.setLevel(logging.INFO)
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    return logging.getLogger(name)


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    outcome: str,
    trace_id: str | None = None,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    record = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": logging.getLevelName(level),
        "module": module,
        "action": action,
        "outcome": outcome,
        "trace_id": trace_id,
    }
    for key, value in context.items():
        record[key] = "***" if key.lower() in _REDACTED_KEYS else value
    logger.log(level, json.dumps(record, default=str))
