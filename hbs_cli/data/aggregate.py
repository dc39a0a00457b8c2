"""Merging of inline JSON and JSON files into one data object."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Mapping

from ..core.errors import InvalidArgumentTypeError, InvalidDataError, JsonParseError
from ..rendering.io import read_text
from ..resolution.paths import expand_glob_list

logger = logging.getLogger(__name__)


def deep_merge(target: dict[str, Any], *sources: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge ``sources`` into ``target`` from left to right.

    Nested mappings are merged key by key; any other value (lists included)
    replaces what was there. Source values are copied so later mutation of
    the result does not leak back into the inputs.

    Returns:
        ``target``, updated in place
    """
    for source in sources:
        for key, value in source.items():
            existing = target.get(key)
            if isinstance(value, Mapping) and isinstance(existing, dict):
                deep_merge(existing, value)
            elif isinstance(value, Mapping):
                target[key] = deep_merge({}, value)
            else:
                target[key] = copy.deepcopy(value)
    return target


def _parse_inline(value: str) -> tuple[bool, Any]:
    try:
        return True, json.loads(value)
    except json.JSONDecodeError:
        return False, None


def load_json_file(path: Path) -> Any:
    """Read and parse a JSON file."""
    logger.debug(f"Loading JSON file {path}")
    try:
        return json.loads(read_text(path))
    except json.JSONDecodeError as e:
        raise JsonParseError(str(path), str(e)) from e


def _require_object(source: str, value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise InvalidDataError(source, value)
    return value


def add_objects_to_data(objects: Any, cwd: Path | None = None) -> dict[str, Any]:
    """Build the data object from inline JSON and JSON file references.

    Entries that parse as JSON are used directly; every other entry is
    resolved as a path, glob or module. Inline objects are merged first,
    then file contents, each group in argument order.

    Args:
        objects: A string or list of strings
        cwd: Base directory for relative references

    Returns:
        Merged data object
    """
    if isinstance(objects, str):
        objects = [objects]
    if not isinstance(objects, (list, tuple)):
        raise InvalidArgumentTypeError("add_objects_to_data", objects)

    inline: list[dict[str, Any]] = []
    references: list[str] = []
    for item in objects:
        if not isinstance(item, str):
            raise InvalidArgumentTypeError("add_objects_to_data", item)
        parsed, value = _parse_inline(item)
        if parsed:
            logger.debug("Parsed inline JSON data")
            inline.append(_require_object("inline JSON", value))
        else:
            references.append(item)

    file_data = [
        _require_object(str(path), load_json_file(path))
        for path in expand_glob_list(references, cwd)
    ]

    return deep_merge({}, *inline, *file_data)
