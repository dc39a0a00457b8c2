"""Error kinds raised while resolving, loading and rendering templates."""

from __future__ import annotations

from pathlib import Path


class HbsError(Exception):
    """Base class for every failure the renderer reports."""


class InvalidArgumentTypeError(HbsError, TypeError):
    """Raised when a glob list or data list is neither a string nor a list."""

    def __init__(self, operation: str, value: object) -> None:
        self.operation = operation
        self.given_type = type(value).__name__
        super().__init__(
            f"{operation} expects list or str, given {self.given_type}"
        )


class JsonParseError(HbsError, ValueError):
    """Raised when a data source does not contain valid JSON."""

    def __init__(self, source: str, detail: str) -> None:
        self.source = source
        super().__init__(f"Invalid JSON in {source}: {detail}")


class StdinNotJsonError(JsonParseError):
    """Raised when standard input does not contain valid JSON."""

    def __init__(self, detail: str) -> None:
        super().__init__("<stdin>", detail)


class InvalidDataError(HbsError, ValueError):
    """Raised when a data source parses but is not a JSON object."""

    def __init__(self, source: str, value: object) -> None:
        self.source = source
        super().__init__(
            f"Data from {source} must be a JSON object, got {type(value).__name__}"
        )


class ModuleResolutionError(HbsError):
    """Raised when a module name is found but cannot be turned into a file."""


class ModuleLoadError(HbsError, ImportError):
    """Raised when a helper file cannot be loaded as a Python module."""

    def __init__(self, path: Path, detail: str) -> None:
        # ImportError.__init__ resets ``path``
        super().__init__(f"Cannot load helper {path}: {detail}")
        self.path = path


class FileIOError(HbsError):
    """Raised when reading, writing or creating a directory fails."""

    def __init__(self, action: str, path: Path, error: OSError) -> None:
        self.action = action
        self.path = path
        super().__init__(f"Cannot {action} {path}: {error.strerror or error}")


class TemplateCompileError(HbsError):
    """Raised when a template or partial has malformed Handlebars syntax."""

    def __init__(self, source: str, detail: str) -> None:
        self.source = source
        super().__init__(f"Cannot compile {source}: {detail}")


class TemplateRenderError(HbsError):
    """Raised when a compiled template fails while rendering."""

    def __init__(self, source: str, detail: str) -> None:
        self.source = source
        super().__init__(f"Cannot render {source}: {detail}")
