import logging
import os

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def level_for_verbosity(verbosity: int) -> int:
    """Map a count of ``-v`` flags to a logging level."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(default_level: int = logging.WARNING) -> None:
    """Configure root logger with a sane default format.

    Respects KEYCRAWL_LOG_LEVEL env var if present.
    """
    level_name = os.getenv("KEYCRAWL_LOG_LEVEL")
    level = default_level
    if level_name:
        level = getattr(logging, level_name.upper(), default_level)
    logging.basicConfig(level=level, format=LOG_FORMAT)
