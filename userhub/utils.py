"""
Shared helpers.
"""
import logging
import sys

from userhub.core import config


_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root = logging.getLogger("userhub")
    root.addHandler(handler)
    root.setLevel(config.LOG_LEVEL)
    root.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger under the shared ``userhub`` handler.

    Usage:
        log = get_logger(__name__)
        log.info("Created user %s", user.id)
    """
    _configure_root()
    if not name.startswith("userhub"):
        name = f"userhub.{name}"
    return logging.getLogger(name)
