from pathlib import Path

import pytest

from plexup.errors import MetadataUnavailableError
from plexup.utils.config import AppConfig, AutoScanConfig, LibraryInfo, LibraryRegistry

MIB = 1024 * 1024

LIBRARIES = [
    LibraryInfo(name="TV", remote_path="/lib/tv", plex_library_id=2),
    LibraryInfo(name="Movies", remote_path="/lib/movies", plex_library_id=1, is_movie=True),
    LibraryInfo(name="Adult", remote_path="/lib/adult", plex_library_id=3, is_av=True),
]


class FakeResolver:
    def __init__(self, series=None, movies=None):
        self.series = series or {}
        self.movies = movies or {}
        self.calls = []

    def resolve_series(self, identifier):
        self.calls.append(("tv", identifier))
        if identifier not in self.series:
            raise MetadataUnavailableError(identifier, "not found")
        return self.series[identifier]

    def resolve_movie(self, identifier):
        self.calls.append(("movie", identifier))
        if identifier not in self.movies:
            raise MetadataUnavailableError(identifier, "not found")
        return self.movies[identifier]


def make_cfg(prefix: Path, **overrides) -> AppConfig:
    values = dict(
        tmdb_token="token",
        download_path_prefix=str(prefix),
        remote_default_path="/Unsorted",
        libraries=LibraryRegistry(LIBRARIES),
        remote_drive_name="gdrive",
        rclone_path="rclone",
        rclone_config="/etc/rclone.conf",
        av_data_capture="",
        av_data_capture_config="",
        auto_scan=AutoScanConfig(),
    )
    values.update(overrides)
    return AppConfig(**values)


def write_file(path: Path, size: int = 1) -> Path:
    """Create ``path`` with ``size`` bytes; large files are sparse."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.truncate(size)
    return path


@pytest.fixture
def prefix(tmp_path) -> Path:
    p = tmp_path / "dl"
    p.mkdir()
    return p


@pytest.fixture
def cfg(prefix) -> AppConfig:
    return make_cfg(prefix)


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver(
        series={"12345": ("Great Show", "2019")},
        movies={"9001": ("Cool Film", "2021")},
    )
