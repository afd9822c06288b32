"""
Exception hierarchy for classifying and preparing a download.

Every error carries a short ``kind`` string that is written to the log so a
failed invocation can be grepped by category.
"""
from pathlib import Path


class PlexUpError(Exception):
    """Base exception for all plexup errors."""

    kind = "error"


class ConfigError(PlexUpError):
    """Configuration file is missing, malformed or inconsistent."""

    kind = "config"


class InvalidPathError(PlexUpError):
    """The download path lies outside the managed download root."""

    kind = "invalid_path"

    def __init__(self, path: str, prefix: str):
        super().__init__(f"path {path!r} is not under download root {prefix!r}")
        self.path = path
        self.prefix = prefix


class ClassificationMiss(PlexUpError):
    """The path is under the auto root but names no configured library."""

    kind = "classification_miss"

    def __init__(self, name: str):
        super().__init__(f"unknown library {name!r}")
        self.name = name


class PathExtractionError(PlexUpError):
    """Expected path segments are missing from the download path."""

    kind = "path_extraction"

    def __init__(self, path: str, expected: str):
        super().__init__(f"cannot extract {expected} from {path!r}")
        self.path = path
        self.expected = expected


class SeasonEpisodeParseError(PlexUpError):
    """No S<NN>E<NN> token could be read from the episode segment."""

    kind = "season_episode_parse"

    def __init__(self, segment: str):
        super().__init__(f"no season/episode token in {segment!r}")
        self.segment = segment


class MetadataUnavailableError(PlexUpError):
    """The metadata lookup failed or returned incomplete data."""

    kind = "metadata_unavailable"

    def __init__(self, identifier: str, reason: str):
        super().__init__(f"metadata lookup for {identifier!r} failed: {reason}")
        self.identifier = identifier
        self.reason = reason


class FilesystemError(PlexUpError):
    """A rename, remove or walk failed.

    ``completed`` lists the paths already handled before the failure so the
    tree can be repaired by hand.
    """

    kind = "filesystem"

    def __init__(self, path: Path, cause: OSError, completed: list[Path] | None = None):
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause
        self.completed = list(completed or [])
