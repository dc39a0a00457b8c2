"""Reading the data object from standard input."""

from __future__ import annotations

import json
import logging
import sys
from typing import IO, Any

from ..core.errors import StdinNotJsonError

logger = logging.getLogger(__name__)


def read_stdin_data(stream: IO[str] | None = None) -> Any:
    """Read all of ``stream`` (default: stdin) and parse it as JSON."""
    stream = stream or sys.stdin
    raw = stream.read()
    logger.debug(f"Read {len(raw)} character(s) from stdin")
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise StdinNotJsonError(str(e)) from e
