"""Stdlib logging setup.

App code reports through Logfire; this only governs records from the
stdlib ``logging`` tree (our own ``uniprofile.*`` loggers and third-party
libraries), and forwards them to Logfire when events leave the device.
"""

import logging
import sys

import logfire

from uniprofile.config import Settings
from uniprofile.util.observability import should_send

# Log a line per Identity Toolkit / Firestore request
NOISY_LOGGERS = ("httpx", "httpcore")

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"


def log_level(settings: Settings) -> int:
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "production":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure stdlib logging for the app.

    Args:
        settings: Application settings
    """
    level = log_level(settings)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if should_send(settings):
        handlers.append(logfire.LogfireLoggingHandler())

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    logging.getLogger("uniprofile").setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured: locale=%s level=%s forwarded=%s",
        settings.locale,
        logging.getLevelName(level),
        len(handlers) > 1,
    )
