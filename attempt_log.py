from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from config import CFG

LOGGER_NAME = "ubongo.attempt_log"


def _log_path() -> Optional[Path]:
    configured = (CFG.ATTEMPT_LOG or "").strip()
    if not configured:
        return None
    path = Path(configured)
    if not path.is_absolute():
        path = Path(__file__).resolve().parent / path
    return path


def _init_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    log_path = _log_path()
    if log_path is None:
        return logger
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    except Exception:
        # An unwritable log location must not stop generation.
        logger.handlers.clear()
    return logger


ATTEMPT_LOGGER = _init_logger()


def _log_enabled() -> bool:
    return bool(ATTEMPT_LOGGER.handlers)


def emit(event: str, *, level: int = logging.INFO, **fields: Any) -> None:
    """Write ``"<event> | key=value ..."``, dropping empty fields."""
    if not _log_enabled():
        return
    extras = [
        f"{key}={value}"
        for key, value in fields.items()
        if value is not None and value != ""
    ]
    try:
        if extras:
            ATTEMPT_LOGGER.log(level, "%s | %s", event, " ".join(extras))
        else:
            ATTEMPT_LOGGER.log(level, "%s", event)
    except Exception:
        # Logging failures must never bubble back to callers.
        pass


__all__ = ["ATTEMPT_LOGGER", "LOGGER_NAME", "emit"]
