"""File I/O operations for rendering."""

from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path

from ..core.errors import FileIOError


def read_text(path: Path) -> str:
    """Read a UTF-8 text file.

    Args:
        path: File to read

    Returns:
        File contents
    """
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise FileIOError("read", path, e) from e


def ensure_dir(path: Path) -> None:
    """Create a directory and any missing parents."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileIOError("create directory", path, e) from e


def atomic_write_text(path: Path, text: str, mode: int = 0o644) -> None:
    """Write text to a file atomically using a temporary file.

    Args:
        path: Destination file path
        text: Text content to write
        mode: File permissions (octal)
    """
    ensure_dir(path.parent)

    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    except OSError as e:
        raise FileIOError("write", path, e) from e
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, mode)
    except OSError as e:
        raise FileIOError("write", path, e) from e
    finally:
        with contextlib.suppress(FileNotFoundError):
            os.remove(tmp_name)
