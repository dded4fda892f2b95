"""Logging setup for applications that generate Gabor patches.

The library only emits records through module loggers; call
configure_logging() once from the application, never from library code.
"""

import logging
from typing import Optional


def configure_logging(
    level: int = logging.WARNING,
    format_string: Optional[str] = None
) -> None:
    """Configure root logging.

    Args:
        level: Logging level (logging.DEBUG shows every default substitution)
        format_string: Custom format string (optional)
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.getLogger().setLevel(level)
    logging.basicConfig(level=level, format=format_string, force=True)
