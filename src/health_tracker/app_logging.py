"""Logging configuration helpers."""

import logging

# Client libraries that log every request at INFO.
_QUIET_LOGGERS = ("httpx", "httpcore", "hpack")


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the package logger.

    Repeated calls only update the level.
    """
    logger = logging.getLogger("health_tracker")
    logger.setLevel(level.upper())
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
