"""CLI argument parsers and validators."""

from __future__ import annotations

from pathlib import Path

import typer

from ..core.models import normalize_extension


def parse_file_mode(value: str) -> int:
    """Parse octal file mode string."""
    try:
        return int(value, 8)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid octal mode: {value!r}") from e


def parse_extension(value: str) -> str:
    """Normalize an output extension, dropping any leading dots."""
    try:
        return normalize_extension(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def parse_output_dir(value: str, default: Path | None = None) -> Path:
    """Resolve the output directory, falling back to ``default`` then cwd."""
    if value:
        return Path(value)
    return default or Path.cwd()
