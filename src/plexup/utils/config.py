"""
Loading and validation of the JSON configuration file.

The configuration is read once at start-up into frozen dataclasses and handed
to each component explicitly. The ordered ``library`` list is turned into a
``LibraryRegistry`` keyed by library name.
"""
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from plexup.errors import ClassificationMiss, ConfigError
from plexup.utils import constants


@dataclass(frozen=True)
class LibraryInfo:
    """A configured destination library."""

    name: str
    remote_path: str
    plex_library_id: int
    is_av: bool = False
    is_movie: bool = False


class LibraryRegistry:
    """Read-only lookup from library name to its ``LibraryInfo``."""

    def __init__(self, libraries: List[LibraryInfo]):
        by_name: Dict[str, LibraryInfo] = {}
        for lib in libraries:
            if lib.name in by_name:
                raise ConfigError(f"Duplicate library name: {lib.name!r}")
            by_name[lib.name] = lib
        self._by_name = by_name

    def get(self, name: str) -> LibraryInfo:
        """Return the library called ``name`` or raise ``ClassificationMiss``."""
        try:
            return self._by_name[name]
        except KeyError:
            raise ClassificationMiss(name) from None


@dataclass(frozen=True)
class AutoScanConfig:
    enable: bool = False
    plex_server_path: str = ""
    plex_scan_prefix: str = ""
    plex_token: str = ""
    delay_seconds: float = constants.DEFAULT_SCAN_DELAY


@dataclass(frozen=True)
class AppConfig:
    tmdb_token: str
    download_path_prefix: str
    remote_default_path: str
    libraries: LibraryRegistry
    remote_drive_name: str = ""
    rclone_path: str = "rclone"
    rclone_config: str = ""
    av_data_capture: str = ""
    av_data_capture_config: str = ""
    auto_scan: AutoScanConfig = field(default_factory=AutoScanConfig)


def _as_str(d: Dict[str, Any], key: str, *aliases: str, default: Optional[str] = None) -> str:
    for k in (key, *aliases):
        if k in d:
            v = d[k]
            if isinstance(v, str):
                return v
            raise ConfigError(f"Expected string for '{k}', got: {type(v).__name__}")
    if default is not None:
        return default
    raise ConfigError(f"Missing required key: '{key}'")


def _as_bool(d: Dict[str, Any], key: str, default: bool = False) -> bool:
    v = d.get(key, default)
    if isinstance(v, bool):
        return v
    raise ConfigError(f"Expected boolean for '{key}', got: {type(v).__name__}")


def _as_int(d: Dict[str, Any], key: str, default: int = 0) -> int:
    v = d.get(key, default)
    # bool is an int subclass; reject it explicitly
    if isinstance(v, int) and not isinstance(v, bool):
        return v
    raise ConfigError(f"Expected integer for '{key}', got: {type(v).__name__}")


def _parse_library(i: int, entry: Any) -> LibraryInfo:
    if not isinstance(entry, dict):
        raise ConfigError(f"library[{i}] must be an object")
    name = _as_str(entry, "name")
    if not name or "/" in name:
        raise ConfigError(f"library[{i}].name must be a non-empty single path segment")
    return LibraryInfo(
        name=name,
        remote_path=_as_str(entry, "path").rstrip("/"),
        plex_library_id=_as_int(entry, "plex_library_id"),
        is_av=_as_bool(entry, "is_av"),
        is_movie=_as_bool(entry, "is_movie"),
    )


def _parse_auto_scan(raw: Any) -> AutoScanConfig:
    if raw is None:
        return AutoScanConfig()
    if not isinstance(raw, dict):
        raise ConfigError("auto_scan must be an object")
    delay = raw.get("delay_seconds", constants.DEFAULT_SCAN_DELAY)
    if isinstance(delay, bool) or not isinstance(delay, (int, float)) or delay < 0:
        raise ConfigError("auto_scan.delay_seconds must be a non-negative number")
    return AutoScanConfig(
        enable=_as_bool(raw, "enable"),
        plex_server_path=_as_str(raw, "plex_server_path", default="").rstrip("/"),
        plex_scan_prefix=_as_str(raw, "plex_scan_prefix", "plex_scan_perfix", default=""),
        plex_token=_as_str(raw, "plex_token", default=""),
        delay_seconds=float(delay),
    )


def parse_config(root: Dict[str, Any]) -> AppConfig:
    """Validate a decoded config document and build an ``AppConfig``."""
    if not isinstance(root, dict):
        raise ConfigError("Config root must be a JSON object")

    prefix = _as_str(root, "download_path_prefix").rstrip("/")
    if not prefix:
        raise ConfigError("download_path_prefix must not be the filesystem root")

    default_remote = _as_str(root, "remote_default_path", default="")
    if not default_remote.startswith("/"):
        default_remote = "/" + default_remote

    raw_libs = root.get("library", [])
    if not isinstance(raw_libs, list):
        raise ConfigError("library must be an array of objects")
    registry = LibraryRegistry([_parse_library(i, e) for i, e in enumerate(raw_libs)])

    # The environment wins over the file so the token can stay out of it.
    token = constants.TMDB_API_KEY or _as_str(root, "tmdb_token", default="")

    return AppConfig(
        tmdb_token=token,
        download_path_prefix=prefix,
        remote_default_path=default_remote,
        libraries=registry,
        remote_drive_name=_as_str(root, "remote_drive_name", "remote_drvie_name", default=""),
        rclone_path=_as_str(root, "rclone_path", default="rclone"),
        rclone_config=_as_str(root, "rclone_config", default=""),
        av_data_capture=_as_str(root, "av_data_capture", default=""),
        av_data_capture_config=_as_str(root, "av_data_capture_config", default=""),
        auto_scan=_parse_auto_scan(root.get("auto_scan")),
    )


def load_config(path: Path) -> AppConfig:
    """Read and parse the JSON config at ``path``."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config is not valid JSON: {path}: {e}") from e
    return parse_config(data)
