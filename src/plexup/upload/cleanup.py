"""
Removal of an uploaded item and pruning of the folders it leaves behind.

After a successful upload the item is deleted, then each parent folder is
removed in turn until one is not empty (or already gone) or the download
root is reached. The root itself is never removed.
"""
import os
import shutil
from pathlib import Path

from plexup.classify import parser
from plexup.errors import FilesystemError
from plexup.utils import LogLevel, logger


def remove_item(path: Path) -> None:
    """Delete a file or a whole directory tree."""
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except FileNotFoundError:
        logger.log("cleanup.missing", LogLevel.WARN, path=str(path))
    except OSError as e:
        raise FilesystemError(path, e) from e


def prune_parents(path: str, prefix: str) -> list[str]:
    """Remove empty ancestors of ``path`` strictly below ``prefix``; return those removed."""
    removed: list[str] = []
    current = os.path.dirname(path)
    while len(current) > len(prefix) and current.rfind("/") > 0:
        try:
            os.rmdir(current)
        except OSError as e:
            logger.log("cleanup.prune.stop", LogLevel.DEBUG, path=current, reason=e.strerror)
            break
        removed.append(current)
        current = os.path.dirname(current)
    return removed


def clean_up(local_path: str, prefix: str) -> None:
    """Delete an uploaded item and prune the folders above it."""
    path = parser.ensure_under_prefix(local_path, prefix)
    remove_item(Path(path))
    removed = prune_parents(path, prefix)
    logger.log("cleanup.done", LogLevel.INFO, path=path, pruned=len(removed))
