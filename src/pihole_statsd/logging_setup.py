"""Root logger configuration for the exporter process."""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a single stderr handler on the root logger.

    Args:
        level: Level name (e.g., "DEBUG"). Unknown names fall back to INFO.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(numeric_level)
    root_logger.addHandler(handler)

    # httpx logs every request at INFO, once per tick
    logging.getLogger("httpx").setLevel(max(numeric_level, logging.WARNING))
