"""Registration of partial templates."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from ..core.registry import TemplateRegistry
from ..rendering.io import read_text

logger = logging.getLogger(__name__)


def add_partials(files: Iterable[Path], registry: TemplateRegistry) -> dict[str, Path]:
    """Register each file as a partial named after its stem.

    Files are registered in order, so a later file replaces an earlier one
    with the same stem.

    Returns:
        Mapping of partial name to the file that provided it
    """
    sources: dict[str, Path] = {}
    for file in files:
        name = file.stem
        logger.debug(f"Registering partial {name} from {file}")
        registry.register_partial(name, read_text(file), source_name=str(file))
        sources[name] = file
    return sources
