"""
Classification of a finished download and per-library preparation.

This module decides which configured library a download belongs to and
prepares the item for upload:

- classify_and_prepare: Entry point. Classifies the path and dispatches to
  exactly one processor, or falls back to the default remote path.
- process_tv: Looks up the series on TMDb and prefixes every file with its
  "S<NN>E<NN>." token.
- process_movie: Looks up the movie on TMDb; files are left untouched.
- process_av: Deletes sample-sized files, renames the rest to the item
  identifier and runs the capture tool on the item.

Processors never catch their own errors: a failure stops the item and is
reported by the caller. Renames are not transactional; a FilesystemError
lists the entries that were already renamed.
"""
import errno
from dataclasses import dataclass
from pathlib import Path

from tqdm import tqdm

from plexup.classify import formatter, parser
from plexup.errors import ClassificationMiss, FilesystemError, MetadataUnavailableError, PathExtractionError
from plexup.utils import (
    AUTO_FOLDER,
    AV_MIN_FILE_SIZE,
    CATEGORY_AV,
    CATEGORY_MOVIE,
    CATEGORY_TV,
    CATEGORY_UNCLASSIFIED,
    LogLevel,
    file_util,
    logger,
    system_util,
)
from plexup.utils.config import AppConfig, LibraryInfo


@dataclass(frozen=True)
class ClassifiedItem:
    """Result of preparing one download: what to upload, where, and for which library."""

    local_path: str
    remote_path: str
    library_id: int
    category: str


def classify_and_prepare(cfg: AppConfig, file_path: str, file_count: int, resolver=None) -> ClassifiedItem:
    """
    Classify ``file_path`` and prepare it for upload.

    Raises InvalidPathError when the path is outside the download root. A
    path under ``auto/`` that names no configured library is logged and
    uploaded as given to the default remote path.
    """
    prefix = cfg.download_path_prefix
    name, matched = parser.classify_path(file_path, prefix)
    path = parser.normalize_path(file_path)

    if matched:
        try:
            lib = cfg.libraries.get(name)
        except ClassificationMiss as miss:
            logger.log("classify.miss", LogLevel.WARN, kind=miss.kind, library=name, path=path)
        else:
            item = _dispatch(cfg, lib, path, resolver)
            logger.log(
                "classify.done",
                LogLevel.INFO,
                category=item.category,
                library=lib.name,
                local=item.local_path,
                remote=item.remote_path,
                plex_library_id=item.library_id,
            )
            return item

    local, remote = _unclassified_target(cfg, path, file_count, matched)
    logger.log("classify.default", LogLevel.INFO, local=local, remote=remote, file_count=file_count)
    return ClassifiedItem(local, remote, 0, CATEGORY_UNCLASSIFIED)


def _unclassified_target(cfg: AppConfig, path: str, file_count: int, under_auto: bool) -> tuple[str, str]:
    if file_count == 1:
        return path, cfg.remote_default_path
    # Under auto/ the path is kept as given; truncating would hit the shared auto root.
    if under_auto:
        return path, formatter.join_remote(cfg.remote_default_path, path.rsplit("/", 1)[-1])
    # Other multi-file downloads are uploaded as their top-level folder.
    top = parser.first_segment(path, cfg.download_path_prefix)
    if top == AUTO_FOLDER:
        raise PathExtractionError(path, "download folder below the auto root")
    return (
        f"{cfg.download_path_prefix}/{top}",
        formatter.join_remote(cfg.remote_default_path, top),
    )


def _dispatch(cfg: AppConfig, lib: LibraryInfo, path: str, resolver) -> ClassifiedItem:
    if lib.is_av:
        local, remote = process_av(cfg, lib, path)
        category = CATEGORY_AV
    elif lib.is_movie:
        local, remote = process_movie(cfg, lib, path, resolver)
        category = CATEGORY_MOVIE
    else:
        local, remote = process_tv(cfg, lib, path, resolver)
        category = CATEGORY_TV
    return ClassifiedItem(local, remote, lib.plex_library_id, category)


def _require_resolver(resolver, identifier: str):
    if resolver is None:
        raise MetadataUnavailableError(identifier, "no metadata resolver available")
    return resolver


def process_tv(cfg: AppConfig, lib: LibraryInfo, path: str, resolver) -> tuple[str, str]:
    """
    Prepare a TV episode download.

    The episode folder (or file) name supplies one season/episode pair which
    is applied to every file in the item; per-file numbers are not re-read.
    Returns ``(local_path, remote_path)``.
    """
    prefix = cfg.download_path_prefix
    series_id, segment = parser.extract_episode(path, prefix, lib.name)
    local = Path(prefix, AUTO_FOLDER, lib.name, series_id, segment)
    se = parser.parse_season_episode(segment)

    title, year = _require_resolver(resolver, series_id).resolve_series(series_id)
    remote = formatter.tv_remote_path(lib.remote_path, title, year, se)

    files = file_util.collect_files(local)
    completed: list[Path] = []
    new_local = local
    for file in tqdm(files, desc="Renaming episode files", disable=None, leave=False):
        if file.name.startswith(f"{se.token}."):
            logger.log("tv.rename.skip", LogLevel.DEBUG, file=str(file), reason="already prefixed")
            continue
        target = formatter.tv_file_name(file, se)
        file_util.rename(file, target, completed)
        logger.log("tv.rename", LogLevel.DEBUG, src=str(file), dst=str(target))
        if file == local:
            new_local = target

    logger.log("tv.prepared", LogLevel.INFO, series=series_id, episode=se.token, renamed=len(completed))
    return str(new_local), remote


def process_movie(cfg: AppConfig, lib: LibraryInfo, path: str, resolver) -> tuple[str, str]:
    """Prepare a movie download. Nothing on disk is changed."""
    prefix = cfg.download_path_prefix
    movie_id = parser.extract_item(path, prefix, lib.name)
    local = f"{prefix}/{AUTO_FOLDER}/{lib.name}/{movie_id}"
    title, year = _require_resolver(resolver, movie_id).resolve_movie(movie_id)
    return local, formatter.movie_remote_path(lib.remote_path, title, year)


def process_av(cfg: AppConfig, lib: LibraryInfo, path: str) -> tuple[str, str]:
    """
    Prepare an AV download.

    Files smaller than ``AV_MIN_FILE_SIZE`` are deleted. Each remaining file
    is renamed to ``<identifier><ext>``; when that name is taken it gets
    ``<identifier>-<n><ext>`` instead, with ``n`` counting up across the
    whole walk. The counter also advances past suffixed names that already
    exist, so no file is ever overwritten. Files are visited in sorted
    depth-first order, so the first qualifying file keeps the bare name.
    Names are checked one rename at a time, which is only safe while a
    single process owns the item.

    A single-file item uses the file stem as its identifier and returns the
    renamed file as its local path.
    """
    prefix = cfg.download_path_prefix
    segment = parser.extract_item(path, prefix, lib.name)
    local = Path(prefix, AUTO_FOLDER, lib.name, segment)
    identifier = Path(segment).stem if local.is_file() else segment

    counter = 1
    kept = 0
    new_local = local
    completed: list[Path] = []
    for file in tqdm(file_util.collect_files(local), desc="Preparing files", disable=None, leave=False):
        try:
            size = file.stat().st_size
        except OSError as e:
            raise FilesystemError(file, e, completed) from e

        if size < AV_MIN_FILE_SIZE:
            file_util.remove(file, completed)
            logger.log("av.remove", LogLevel.DEBUG, file=str(file), size=size)
            continue

        kept += 1
        target = formatter.av_file_name(file, identifier)
        while target != file and target.exists():
            target = formatter.av_file_name(file, identifier, counter)
            counter += 1
        if target == file:
            continue
        file_util.rename(file, target, completed)
        logger.log("av.rename", LogLevel.DEBUG, src=str(file), dst=str(target))
        if file == local:
            new_local = target

    if not kept:
        nothing_left = FileNotFoundError(errno.ENOENT, "no file left above the size threshold", str(local))
        raise FilesystemError(local, nothing_left, completed)

    system_util.run_capture(cfg.av_data_capture, cfg.av_data_capture_config, new_local)
    return str(new_local), formatter.av_remote_path(lib.remote_path, identifier)
