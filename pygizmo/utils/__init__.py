"""
Utilities for pygizmo: the library logger, the enums and the
computational geometry that the handles are built on.
"""

import os
import logging

from . import enums  # noqa: F401


logger = logging.getLogger("pygizmo")


def _set_log_level():
    # Set default level
    logger.setLevel(logging.WARN)
    # Set user-specified level
    level = os.getenv("PYGIZMO_LOG_LEVEL", "")
    if level:
        try:
            if level.isnumeric():
                logger.setLevel(int(level))
            else:
                logger.setLevel(level.upper())
        except Exception:
            logger.warning(f"Invalid pygizmo log level: {level}")


_set_log_level()
