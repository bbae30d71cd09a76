"""Logging setup for the users API."""

import logging

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    """Attach one stream handler to the ``users_api`` logger and set its level.

    Calling it again only updates the level, so the app factory and the
    console entrypoint can both call it.
    """
    logger = logging.getLogger("users_api")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    logger.propagate = False
    return logger
