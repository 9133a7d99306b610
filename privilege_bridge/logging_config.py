import logging

from .config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _resolve_log_level(value: str) -> int:
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(log_level: str | None = None) -> int:
    """Configure logging for an application embedding the translator.

    Leaves existing root handlers alone; only the package logger level is set
    in that case. Returns the resolved level.
    """
    if log_level is None:
        current = get_settings()
        log_level = "DEBUG" if current.debug else current.log_level
    level = _resolve_log_level(log_level)

    if not logging.getLogger().handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("privilege_bridge").setLevel(level)
    return level
