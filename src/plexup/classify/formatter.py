"""
Helpers that build remote destination paths and local file names.

Remote paths are plain POSIX strings rooted at a library's configured remote
path:

- TV:    "<root>/Title (Year)/S02/"
- Movie: "<root>/Title (Year)/"
- AV:    "<root>/<identifier>"
"""
from pathlib import Path

from plexup.classify.parser import SeasonEpisode


def build_folder_name(title: str, year: str | None) -> str:
    """Return "Title (Year)", or just "Title" when no year is known."""
    if year:
        return f"{title} ({year})"
    return title


def tv_remote_path(root: str, title: str, year: str, se: SeasonEpisode) -> str:
    return f"{root}/{build_folder_name(title, year)}/{se.season_folder}/"


def movie_remote_path(root: str, title: str, year: str) -> str:
    return f"{root}/{build_folder_name(title, year)}/"


def av_remote_path(root: str, identifier: str) -> str:
    return f"{root}/{identifier}"


def join_remote(base: str, name: str) -> str:
    return f"{base.rstrip('/')}/{name}"


def tv_file_name(file: Path, se: SeasonEpisode) -> Path:
    """Insert "S02E05." in front of the file name, keeping its directory."""
    return file.with_name(f"{se.token}.{file.name}")


def av_file_name(file: Path, identifier: str, counter: int | None = None) -> Path:
    """Return "<identifier>.<ext>" or "<identifier>-<n>.<ext>" beside ``file``."""
    stem = identifier if counter is None else f"{identifier}-{counter}"
    return file.with_name(f"{stem}{file.suffix}")
