"""Logger configuration for podrun.

Every record carries ``user_id`` and ``session_id`` extras so lines from
concurrent live runs can be told apart. Code outside a run logs with the
``-`` defaults; live runs log through ``session_logger`` and request
handlers wrap their work in ``logger.contextualize``.
"""

import sys
from pathlib import Path

from loguru import logger

NO_CONTEXT = "-"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>user={extra[user_id]} run={extra[session_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | "
    "user={extra[user_id]} run={extra[session_id]} | {name}:{line} - {message}"
)


def session_logger(session_id: str, user_id: str):
    """Logger bound to one live run and its owner."""
    return logger.bind(session_id=session_id, user_id=user_id)


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Install the console sink and, if ``log_file`` is set, a rotating file sink.

    Args:
        level: Minimum level for both sinks.
        log_file: Optional log file path; its directory is created if needed.
        rotation: When the file sink rolls over ("10 MB", "1 day").
        retention: How long rolled files are kept.
    """
    logger.remove()
    logger.configure(extra={"user_id": NO_CONTEXT, "session_id": NO_CONTEXT})

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
        )

    logger.info(f"Logging to stderr{f' and {log_file}' if log_file else ''} at {level}")
