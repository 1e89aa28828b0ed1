"""
Centralized logging for rbplay.

Usage:
    from rbplay.log import get_logger

    logger = get_logger(__name__)
    logger.info("Loaded %d steps", len(steps))
    logger.warning("Could not read settings from %s", path)
"""

import logging
import sys

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for the viewer / command line.

    Call once at startup (``python -m rbplay``). Subsequent calls are no-ops.
    Library use never calls this; the host application owns the handlers.
    """
    global _configured
    if _configured:
        return

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger scoped to the rbplay namespace.

    Args:
        name: Module name (typically ``__name__``).
    """
    return logging.getLogger(name)
