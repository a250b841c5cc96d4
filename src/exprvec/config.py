"""
Configuration & Constants
=========================
This module serves as the central registry for package-wide constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (which dimensions get positional
   constructors, which dimension carries the 3D geometry) from being
   scattered through the vector code.
2. Deployment: It resolves the default log level from the environment so an
   embedding evaluator can turn on debug output without code changes.

Exports:
    DEFAULT_DTYPE: Scalar type used when none is requested.
    EXPLICIT_COMPONENT_DIMENSIONS (tuple[int, ...]): Dimensions that accept
        one positional scalar per component.
    GEOMETRY_DIMENSION (int): The only dimension with cross/orthogonal/angle/rotate_by.
    LOG_LEVEL_ENV_VAR (str): Environment variable consulted by `default_log_level`.
"""
import logging
import os
from typing import Final

import numpy as np


# Global Constants
DEFAULT_DTYPE: Final = np.float64
EXPLICIT_COMPONENT_DIMENSIONS: Final[tuple[int, ...]] = (2, 3, 4)
GEOMETRY_DIMENSION: Final[int] = 3

LOG_LEVEL_ENV_VAR: Final[str] = "EXPRVEC_LOG_LEVEL"


def default_log_level() -> int:
    """
    Resolve the log level from `EXPRVEC_LOG_LEVEL`.

    Accepts either a level name ("DEBUG", "info") or a number ("10").
    Unset or unrecognised values fall back to WARNING.
    """
    raw = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip()
    if not raw:
        return logging.WARNING

    if raw.isdigit():
        return int(raw)

    level = logging.getLevelName(raw.upper())
    # getLevelName returns "Level <name>" for unknown names
    if isinstance(level, int):
        return level
    return logging.WARNING
