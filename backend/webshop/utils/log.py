import logging
import sys
from typing import Optional

from webshop.config import settings

ROOT_LOGGER = "webshop"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a single stdout handler to the package logger.
    Safe to call more than once (tests create the app repeatedly).
    """
    log = logging.getLogger(ROOT_LOGGER)
    log.setLevel((level or settings.LOG_LEVEL).upper())
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter("[%(name)s] %(levelname)s %(message)s"))
        log.addHandler(h)
    return log


def get_logger(name: str) -> logging.Logger:
    # keep everything under the package logger so one handler covers it
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
