"""Logging for the song queue.

Everything goes through the "song_queue" logger. Call configure_logging()
once per process (the API app and the CLI do); the log_* helpers prefix each
line with a marker so queue events are easy to spot in server output.
"""

import logging
import sys
from typing import Optional, Union

logger = logging.getLogger("song_queue")

# Third-party loggers that are too chatty at INFO
_QUIET_LOGGERS = ("urllib3", "httpx")


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Attach a stdout handler to the root logger and set the level.

    `level` may be a name such as "DEBUG". When uvicorn or pytest already
    installed root handlers, only the level changes.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s", datefmt="%H:%M:%S")
    )
    root.addHandler(handler)


def log_section(title: str) -> None:
    logger.info("--- %s ---", title)


def log_info(message: str) -> None:
    logger.info("%s", message)


def log_step(message: str) -> None:
    logger.info("→ %s", message)


def log_success(message: str) -> None:
    logger.info("✅ %s", message)


def log_warning(message: str) -> None:
    logger.warning("⚠️ %s", message)


def log_error(message: str) -> None:
    logger.error("❌ %s", message)


def mask_token(token: Optional[str], visible: int = 6) -> str:
    """mask_token("BQDx12345abcdef") -> "BQDx12..." """
    if not token:
        return "<none>"
    return f"{token[:visible]}..."
