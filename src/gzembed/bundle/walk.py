"""Source tree traversal.

Returns every regular file under the source root as a POSIX relative
path, sorted so that bundles are reproducible regardless of the order
the filesystem lists directory entries.
"""

import logging
import os
import stat
from pathlib import Path

from gzembed.errors import SourceReadError

logger = logging.getLogger("gzembed.bundle")


def walk(source_root: str | Path) -> list[str]:
    """Enumerate regular files under *source_root*.

    Symlinked files are followed; symlinked directories are not
    descended into.  Sockets, FIFOs and device nodes are skipped.

    Raises:
        SourceReadError: If the root is missing or any entry cannot be
            listed or stat'ed.  Bundling must abort on this error.
    """
    root = Path(source_root)
    if not root.is_dir():
        raise SourceReadError(str(root), "not a directory")

    def _raise(exc: OSError) -> None:
        raise SourceReadError(exc.filename or str(root), exc.strerror or str(exc)) from exc

    found: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        base = Path(dirpath)
        for name in filenames:
            path = base / name
            try:
                mode = path.stat().st_mode
            except OSError as exc:
                raise SourceReadError(str(path), exc.strerror or str(exc)) from exc
            if not stat.S_ISREG(mode):
                logger.debug("Skipping non-regular file %s", path)
                continue
            found.append(path.relative_to(root).as_posix())

    found.sort()
    return found


def read_source(source_root: str | Path, relative_path: str) -> bytes:
    """Read one file's bytes, wrapping I/O failures as ``SourceReadError``."""
    path = Path(source_root) / relative_path
    try:
        return path.read_bytes()
    except OSError as exc:
        raise SourceReadError(relative_path, exc.strerror or str(exc)) from exc
