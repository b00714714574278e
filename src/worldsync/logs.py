"""Log sink configuration.

All modules log through ``loguru.logger`` directly; this module only decides
where records go.

Usage:
    from worldsync.logs import configure_logging

    configure_logging(LoggingSettings(level="DEBUG", file="logs/worldsync.log"))
"""

from __future__ import annotations

import sys

from loguru import logger

from worldsync.config import LoggingSettings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | {name}:{function} | {message}"

_configured = False


def configure_logging(settings: LoggingSettings | None = None, *, force: bool = False) -> None:
    """Install the stderr sink and the optional rotating file sink.

    Runs once per process; later calls are ignored unless `force` is set.
    """
    global _configured
    if _configured and not force:
        return

    settings = settings or LoggingSettings()
    logger.remove()
    logger.add(sys.stderr, level=settings.level, format=LOG_FORMAT)
    if settings.file:
        logger.add(
            settings.file,
            level=settings.level,
            format=LOG_FORMAT,
            rotation=settings.rotation,
            retention=settings.retention,
            enqueue=True,
            backtrace=True,
        )
    _configured = True
    logger.debug("Logging configured at level {}", settings.level)
