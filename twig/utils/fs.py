"""Filesystem helpers."""

import os
import tempfile
from pathlib import Path
from typing import Union


def atomic_write(path: Union[str, Path], data: bytes, fsync: bool = True) -> None:
    """
    Replace a file's content as a whole.

    Data goes to a temporary sibling first and is then renamed over the
    target, so readers see either the old or the new content.

    Args:
        path: Destination file
        data: Full new content
        fsync: Flush the temporary file to disk before the rename
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=str(path.parent), prefix=f'.{path.name}.', suffix='.tmp')
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
            if fsync:
                f.flush()
                os.fsync(f.fileno())
        os.replace(tmp_name, str(path))
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def atomic_write_text(path: Union[str, Path], text: str, fsync: bool = True) -> None:
    """Text variant of :func:`atomic_write` (UTF-8)."""
    atomic_write(path, text.encode('utf-8'), fsync=fsync)


def to_posix(path: Union[str, Path]) -> str:
    """Repository-relative paths are always stored with forward slashes."""
    return str(path).replace('\\', '/')


def prune_empty_dirs(start: Path, stop: Path) -> None:
    """Remove empty directories from start up to (not including) stop."""
    current = start
    while current != stop and stop in current.parents:
        try:
            current.rmdir()
        except OSError:
            return
        current = current.parent
