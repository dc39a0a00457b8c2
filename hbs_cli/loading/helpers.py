"""Loading of helper modules into a template registry."""

from __future__ import annotations

import hashlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Iterable

from ..core.errors import ModuleLoadError
from ..core.registry import TemplateRegistry

logger = logging.getLogger(__name__)


def _module_name(path: Path) -> str:
    digest = hashlib.sha1(str(path.resolve()).encode("utf-8")).hexdigest()[:10]
    return f"hbs_helper_{path.stem}_{digest}"


def load_module(path: Path) -> ModuleType:
    """Execute a Python source file and return it as a module.

    Loading the same file twice returns the already loaded module.
    """
    name = _module_name(path)
    if name in sys.modules:
        return sys.modules[name]

    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise ModuleLoadError(path, "not a Python module")

    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        del sys.modules[name]
        raise ModuleLoadError(path, f"{type(e).__name__}: {e}") from e
    return module


def add_helpers(files: Iterable[Path], registry: TemplateRegistry) -> list[Path]:
    """Load helper modules and let each one register with the registry.

    A module without a callable ``register`` is skipped with a warning.

    Args:
        files: Helper files, processed in order
        registry: Registry passed to each module's ``register``

    Returns:
        Files whose ``register`` function was called
    """
    registered: list[Path] = []
    for file in files:
        logger.debug(f"Loading helper {file}")
        module = load_module(file)
        register = getattr(module, "register", None)
        if not callable(register):
            logger.warning(
                f"{file} does not define a 'register' function, cannot import"
            )
            continue
        logger.debug(f"{file} has a register function, registering helpers")
        register(registry)
        registered.append(file)
    return registered
