"""Logging setup shared by the CLI and the HTTP server."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
PACKAGE_LOGGERS = ("totp_core", "totp_backend")

_HANDLER_ATTR = "_is_totp_handler"


def _resolve_level(level) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


def configure_logging(level="INFO") -> None:
    """
    Attach one stream handler to each package logger; safe to call twice.

    Package records stop at these loggers and are not passed on to root.
    """
    level = _resolve_level(level)
    for name in PACKAGE_LOGGERS:
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            if getattr(handler, _HANDLER_ATTR, False):
                break
        else:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            setattr(handler, _HANDLER_ATTR, True)
            logger.addHandler(handler)
        logger.setLevel(level)
        # records go to the package handler only
        logger.propagate = False
