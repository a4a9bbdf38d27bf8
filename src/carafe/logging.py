"""Logging helpers for carafe.

Library code logs through ``logger`` and never installs handlers on its
own. Applications that want carafe's output call ``create_logger``.
"""
import logging
import sys

from carafe.config import config

logger = logging.getLogger("carafe")

default_handler = logging.StreamHandler(sys.stderr)
default_handler.setFormatter(
    logging.Formatter("[%(asctime)s] %(levelname)s in %(module)s: %(message)s")
)


def has_level_handler(logger):
    level = logger.getEffectiveLevel()
    current = logger
    while current:
        if any(handler.level <= level for handler in current.handlers):
            return True
        if not current.propagate:
            break
        current = current.parent
    return False


def create_logger(name="carafe", debug=None):
    """Return the named logger, attaching ``default_handler`` if needed.

    ``debug`` defaults to ``config["DEBUG"]``.
    """
    if debug is None:
        debug = config.get("DEBUG", False)
    log = logging.getLogger(name)
    if debug and not log.level:
        log.setLevel(logging.DEBUG)
    if not has_level_handler(log):
        log.addHandler(default_handler)
    return log
