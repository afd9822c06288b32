"""
Filesystem helpers shared by the item processors and the cleanup step.

Directory walks are materialized into a sorted list before anything is
renamed or removed, so mutation never interferes with traversal and the
order (and with it the AV collision tie-break) is reproducible.
"""
import errno
import os
from pathlib import Path

from plexup.errors import FilesystemError


def sanitize_filename(name: str) -> str:
    """
    Remove invalid filesystem characters from a name.
    Uses str.translate() for optimal performance.
    """
    invalid_chars = '<>:"/\\|?*'
    translation_table = str.maketrans('', '', invalid_chars)
    return name.translate(translation_table).strip()


def collect_files(root: Path) -> list[Path]:
    """
    Return every non-directory entry under ``root`` in depth-first order.

    Directories are visited top-down with their entries sorted by name. When
    ``root`` is itself a file it is the only entry returned.
    """
    if root.is_file():
        return [root]
    if not root.is_dir():
        raise FilesystemError(root, FileNotFoundError(2, "No such file or directory"))

    files: list[Path] = []

    def _onerror(err: OSError):
        raise FilesystemError(Path(err.filename or root), err, files)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_onerror):
        dirnames.sort()
        for name in sorted(filenames):
            files.append(Path(dirpath) / name)
    return files


def rename(src: Path, dst: Path, completed: list[Path]) -> None:
    """
    Rename ``src`` to ``dst``, recording ``dst`` in ``completed`` on success.

    An existing ``dst`` is never replaced; the clash raises FilesystemError.
    """
    if dst.exists():
        clash = FileExistsError(errno.EEXIST, "destination exists", str(dst))
        raise FilesystemError(src, clash, completed)
    try:
        os.rename(src, dst)
    except OSError as e:
        raise FilesystemError(src, e, completed) from e
    completed.append(dst)


def remove(path: Path, completed: list[Path]) -> None:
    """Remove a single file, recording it in ``completed`` on success."""
    try:
        path.unlink()
    except OSError as e:
        raise FilesystemError(path, e, completed) from e
    completed.append(path)
