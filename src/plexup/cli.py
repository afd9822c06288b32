"""
Command-line entry point, meant to be called by the download client when a
download completes:

    plex-auto-upload --config config.json --file-number 3 --file-path /dl/auto/TV/1399/Show.S01E01

Exit codes: 0 success, 2 bad arguments or config, 3 path outside the
download root, 4 the item could not be prepared, 5 the upload failed.
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from plexup import __version__
from plexup.classify import classify_and_prepare
from plexup.errors import (
    ConfigError,
    FilesystemError,
    InvalidPathError,
    MetadataUnavailableError,
    PathExtractionError,
    SeasonEpisodeParseError,
)
from plexup.upload import notify, transfer
from plexup.utils import LogLevel, constants, logger
from plexup.utils.config import load_config
from plexup.utils.tmdb import TMDbResolver

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_INVALID_PATH = 3
EXIT_ITEM_FAILED = 4
EXIT_UPLOAD_FAILED = 5


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plex-auto-upload",
        description="Classify a finished download, rename it for Plex, upload it with rclone and trigger a rescan.",
    )
    parser.add_argument("--config", default=constants.DEFAULT_CONFIG_PATH, help="Custom config path (default: config.json)")
    parser.add_argument("--file-number", type=int, default=0, help="The number of downloaded files")
    parser.add_argument("--file-path", default="/", help="The path of the downloaded item")
    parser.add_argument("--no-upload", action="store_true", help="Prepare the item and print the result without uploading")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    if args.debug:
        logger.set_log_level(LogLevel.DEBUG)

    if args.file_number < 1 or args.file_path == "/":
        logger.log("args.invalid", LogLevel.ERROR, file_number=args.file_number, file_path=args.file_path)
        return EXIT_USAGE

    try:
        cfg = load_config(Path(args.config).expanduser())
    except ConfigError as e:
        logger.log_error("config.error", e, config=str(args.config))
        return EXIT_USAGE

    logger.log("task.start", LogLevel.INFO, file_number=args.file_number, file_path=args.file_path)

    resolver = TMDbResolver(cfg.tmdb_token) if cfg.tmdb_token else None
    try:
        item = classify_and_prepare(cfg, args.file_path, args.file_number, resolver)
    except InvalidPathError as e:
        logger.log_error("task.reject", e)
        return EXIT_INVALID_PATH
    except FilesystemError as e:
        logger.log_error("task.fail", e, completed=[str(p) for p in e.completed])
        return EXIT_ITEM_FAILED
    except (PathExtractionError, SeasonEpisodeParseError, MetadataUnavailableError) as e:
        logger.log_error("task.fail", e)
        return EXIT_ITEM_FAILED

    if args.no_upload:
        print(f"{item.local_path}\t{item.remote_path}\t{item.library_id}")
        return EXIT_OK

    status = EXIT_OK
    try:
        if not transfer.upload(cfg, item.local_path, item.remote_path):
            return EXIT_UPLOAD_FAILED
    except (InvalidPathError, FilesystemError) as e:
        # Uploaded, but the local copy could not be removed.
        logger.log_error("cleanup.fail", e)
        status = EXIT_ITEM_FAILED

    if cfg.auto_scan.enable:
        notify.scan(cfg.auto_scan, item.remote_path, item.library_id)
    return status


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
