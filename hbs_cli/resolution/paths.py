"""Resolution of template, helper, partial and data arguments into files."""

from __future__ import annotations

import glob
import logging
import os
import re
import sys
from importlib.machinery import ModuleSpec, PathFinder
from pathlib import Path
from typing import Any

from ..core.errors import InvalidArgumentTypeError, ModuleResolutionError

logger = logging.getLogger(__name__)

_GLOB_PATTERN = re.compile(r"[*?[]")
_MODULE_PATTERN = re.compile(r"^[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*$")


def is_glob(path: str) -> bool:
    return _GLOB_PATTERN.search(path) is not None


def expand_glob(pattern: str, cwd: Path) -> list[Path]:
    """Expand a glob pattern (or literal path) relative to ``cwd``.

    Only files are returned; directories matched by the pattern are skipped.

    Args:
        pattern: Glob pattern; ``**`` matches across directories
        cwd: Directory relative patterns are anchored to

    Returns:
        Sorted absolute paths of the matching files
    """
    if not pattern:
        return []
    pattern = os.path.expanduser(pattern)
    literal = cwd / pattern
    if literal.is_file():
        return [literal]
    matches = glob.glob(pattern, root_dir=str(cwd), recursive=True)
    return [cwd / match for match in sorted(matches) if (cwd / match).is_file()]


def _find_spec(name: str, search: list[str]) -> ModuleSpec | None:
    try:
        return PathFinder.find_spec(name, search)
    except (ImportError, ValueError) as e:
        raise ModuleResolutionError(f"Cannot resolve module {name}: {e}") from e


def find_module_file(name: str, cwd: Path) -> Path | None:
    """Locate the source file of an installed module without importing it.

    ``cwd`` is searched before ``sys.path``. A package resolves to its
    ``__init__.py``. Namespace packages, which include plain directories,
    have no source file and count as not found.

    Returns:
        Source file path, or None when no such module exists
    """
    search: list[str] = [str(cwd), *sys.path]
    parts = name.split(".")
    for depth in range(1, len(parts)):
        spec = _find_spec(".".join(parts[:depth]), search)
        if spec is None or spec.submodule_search_locations is None:
            return None
        search = list(spec.submodule_search_locations)

    spec = _find_spec(name, search)
    if spec is None or spec.origin is None or not spec.has_location:
        return None
    return Path(spec.origin)


def resolve_module_or_glob(path: str, cwd: Path | None = None) -> list[Path]:
    """Resolve one argument to the files it names.

    The filesystem is consulted first. Only a non-glob string with no
    filesystem match is looked up as a dotted module name.

    Args:
        path: Literal path, glob pattern or module name
        cwd: Base directory (default: process cwd)

    Returns:
        Matching files; empty when nothing matches
    """
    cwd = cwd or Path.cwd()

    matches = expand_glob(path, cwd)
    if matches or is_glob(path):
        logger.debug(f"{path} expanded to {len(matches)} file(s)")
        return matches

    if _MODULE_PATTERN.match(path):
        logger.debug(f"Trying to resolve {path} as a module")
        module_file = find_module_file(path, cwd)
        if module_file is not None:
            logger.debug(f"{path} resolved to {module_file}")
            return [module_file]

    logger.debug(f"{path} matched nothing")
    return []


def expand_glob_list(globs: Any, cwd: Path | None = None) -> list[Path]:
    """Resolve a string or list of strings, concatenating results in order."""
    if isinstance(globs, str):
        globs = [globs]
    if not isinstance(globs, (list, tuple)):
        raise InvalidArgumentTypeError("expand_glob_list", globs)

    files: list[Path] = []
    for path in globs:
        if not isinstance(path, str):
            raise InvalidArgumentTypeError("expand_glob_list", path)
        files.extend(resolve_module_or_glob(path, cwd))
    return files
