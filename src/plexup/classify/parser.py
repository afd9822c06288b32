"""
Module for parsing download paths: checking that a path lies inside the
managed download tree, reading the library name from ``<prefix>/auto/<name>``
and extracting item identifiers and season/episode numbers.

Every extraction is match-or-fail: a path that does not have the expected
shape raises a typed error instead of being guessed at.
"""
import posixpath
import re
from dataclasses import dataclass

from plexup.errors import InvalidPathError, PathExtractionError, SeasonEpisodeParseError
from plexup.utils import AUTO_FOLDER, SEASON_EPISODE_REGEX


@dataclass(frozen=True)
class SeasonEpisode:
    season: int
    episode: int

    @property
    def season_folder(self) -> str:
        return f"S{self.season:02d}"

    @property
    def token(self) -> str:
        return f"S{self.season:02d}E{self.episode:02d}"


def normalize_path(path: str) -> str:
    """Collapse duplicate separators, ``.``/``..`` parts and trailing slashes."""
    return posixpath.normpath(path) if path else path


def ensure_under_prefix(path: str, prefix: str) -> str:
    """Return the normalized ``path`` or raise if it is not below ``prefix``."""
    norm = normalize_path(path)
    if not norm.startswith(prefix + "/"):
        raise InvalidPathError(path, prefix)
    return norm


def classify_path(path: str, prefix: str) -> tuple[str | None, bool]:
    """
    Read the candidate library name from ``<prefix>/auto/<name>/...``.

    Returns ``(name, True)`` on a match and ``(None, False)`` for paths that
    are inside the download root but not under its ``auto`` folder.
    """
    norm = ensure_under_prefix(path, prefix)
    m = re.match(rf"{re.escape(prefix)}/{AUTO_FOLDER}/([^/]+)/", norm + "/")
    if not m:
        return None, False
    return m.group(1), True


def first_segment(path: str, prefix: str) -> str:
    """Return the first path segment below ``prefix``."""
    m = re.match(rf"{re.escape(prefix)}/([^/]+)", path)
    if not m:
        raise PathExtractionError(path, "first segment below the download root")
    return m.group(1)


def extract_item(path: str, prefix: str, library: str) -> str:
    """Extract ``<identifier>`` from ``<prefix>/auto/<library>/<identifier>``."""
    m = re.match(rf"{re.escape(prefix)}/{AUTO_FOLDER}/{re.escape(library)}/([^/]+)", path)
    if not m:
        raise PathExtractionError(path, "item identifier")
    return m.group(1)


def extract_episode(path: str, prefix: str, library: str) -> tuple[str, str]:
    """Extract ``(series identifier, episode segment)`` from a TV download path."""
    m = re.match(rf"{re.escape(prefix)}/{AUTO_FOLDER}/{re.escape(library)}/([^/]+)/([^/]+)", path)
    if not m:
        raise PathExtractionError(path, "series identifier and episode segment")
    return m.group(1), m.group(2)


def parse_season_episode(segment: str) -> SeasonEpisode:
    """Read the ``S<NN>E<NN>`` token from an episode folder or file name."""
    m = SEASON_EPISODE_REGEX.search(segment)
    if not m:
        raise SeasonEpisodeParseError(segment)
    return SeasonEpisode(season=int(m.group(1)), episode=int(m.group(2)))
