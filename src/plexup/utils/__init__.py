"""
A module providing constants, configuration loading, logging, TMDb lookups and
external command helpers for the download handoff.

Sub-modules are imported directly by callers (``from plexup.utils import
logger``); only the most common names are re-exported here.
"""

from .constants import (
    AUTO_FOLDER,
    AV_MIN_FILE_SIZE,
    CATEGORY_AV,
    CATEGORY_MOVIE,
    CATEGORY_TV,
    CATEGORY_UNCLASSIFIED,
    SEASON_EPISODE_REGEX,
    UPLOAD_ATTEMPTS,
)
from .logger import LogLevel

__all__ = [
    "AUTO_FOLDER",
    "AV_MIN_FILE_SIZE",
    "CATEGORY_AV",
    "CATEGORY_MOVIE",
    "CATEGORY_TV",
    "CATEGORY_UNCLASSIFIED",
    "SEASON_EPISODE_REGEX",
    "UPLOAD_ATTEMPTS",
    "LogLevel",
]
