import json
import logging
from datetime import datetime, timezone
from typing import Any

_REDACTED_KEYS = {"token", "access", "phone", "phone_number", "otp", "authorization"}


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    outcome: str,
    **context: Any,
) -> None:
    entry: dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": "INFO" if outcome == "success" else "WARNING",
        "module": module,
        "action": action,
        "outcome": outcome,
    }
    # credentials and phone numbers never reach the log stream
    for key, value in context.items():
        entry[key] = "***" if key.lower() in _REDACTED_KEYS else value
    line = json.dumps(entry, default=str)
    if outcome == "success":
        logger.info(line)
    else:
        logger.warning(line)
