"""Safe file I/O utilities.

Whole-value replacement of small JSON blobs with file locking (``fcntl``)
and ``fsync`` so a crash mid-write never leaves a truncated blob behind.
"""

from __future__ import annotations

import fcntl
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def safe_write_text(path: Path, text: str) -> None:
    """Replace the contents of *path* with *text* atomically.

    * Writers are serialised by an exclusive ``fcntl`` lock on a sibling
      ``<name>.lock`` file.
    * The data goes to a unique temporary file in the same directory,
      is flushed and ``fsync``-ed, then swapped in with ``os.replace``:
      readers see either the old blob or the new one, never a partial
      write.
    * Parent directories are created as needed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    lock_path = path.with_name(path.name + ".lock")
    with open(lock_path, "a") as lock:
        fcntl.flock(lock.fileno(), fcntl.LOCK_EX)
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=path.name + ".", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        finally:
            fcntl.flock(lock.fileno(), fcntl.LOCK_UN)
    logger.debug("Wrote %d bytes to %s", len(text), path)


def read_text_or_none(path: Path) -> str | None:
    """Return the file contents, or ``None`` if the file does not exist."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
