"""Helper and partial tables for one rendering run."""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Mapping

from pybars import Compiler, PybarsError

from .errors import TemplateCompileError, TemplateRenderError

logger = logging.getLogger(__name__)

CompiledTemplate = Callable[..., str]

_TAG_PATTERN = re.compile(r"\{\{!--.*?--\}\}|\{\{\{.*?\}\}\}|\{\{.*?\}\}", re.DOTALL)


def _line_of(source: str, position: int) -> int:
    return source.count("\n", 0, position) + 1


def check_syntax(source: str) -> None:
    """Reject unclosed mustaches and unbalanced blocks.

    pybars stops parsing at the first tag it cannot read and silently drops
    the rest of the template, so both cases are detected here first.

    Raises:
        ValueError: describing the first problem found
    """
    blocks: list[tuple[str, int]] = []
    end = 0
    for match in _TAG_PATTERN.finditer(source):
        tag = match.group(0)
        if "{{" in tag[2:]:
            raise ValueError(f"Unclosed tag on line {_line_of(source, match.start())}")
        end = match.end()
        if tag.startswith(("{{!", "{{{")):
            continue
        inner = tag[2:-2].strip("~ \t\r\n")
        if inner[:1] in ("#", "^") and inner[1:].strip():
            blocks.append((inner[1:].split()[0], match.start()))
        elif inner.startswith("/"):
            name = inner[1:].strip()
            if not blocks:
                raise ValueError(
                    f"Unexpected {{{{/{name}}}}} on line {_line_of(source, match.start())}"
                )
            opened, _ = blocks.pop()
            if opened != name:
                raise ValueError(
                    f"{{{{/{name}}}}} on line {_line_of(source, match.start())} "
                    f"does not close {{{{#{opened}}}}}"
                )

    leftover = source.find("{{", end)
    if leftover != -1:
        raise ValueError(f"Unclosed tag on line {_line_of(source, leftover)}")
    if blocks:
        name, position = blocks[-1]
        raise ValueError(
            f"Unclosed block {{{{#{name}}}}} on line {_line_of(source, position)}"
        )


class TemplateRegistry:
    """Owns the Handlebars compiler plus the helpers and partials it renders with.

    Helper modules receive an instance of this class in their ``register``
    function and add helpers or partials through it. Nothing is shared between
    instances, so separate runs in the same process do not see each other's
    registrations.
    """

    def __init__(self, compiler: Compiler | None = None) -> None:
        self.compiler = compiler or Compiler()
        self.helpers: dict[str, Callable[..., Any]] = {}
        self.partials: dict[str, CompiledTemplate] = {}

    def register_helper(self, name: str, helper: Callable[..., Any]) -> None:
        if not callable(helper):
            raise TypeError(f"Helper {name!r} must be callable")
        if name in self.helpers:
            logger.debug(f"Overriding helper {name}")
        self.helpers[name] = helper

    def register_helpers(self, helpers: Mapping[str, Callable[..., Any]]) -> None:
        for name, helper in helpers.items():
            self.register_helper(name, helper)

    def register_partial(
        self, name: str, source: str | CompiledTemplate, *, source_name: str = ""
    ) -> None:
        """Register a partial, compiling it first when given template text."""
        if isinstance(source, str):
            source = self.compile(source, source_name=source_name or name)
        if name in self.partials:
            logger.debug(f"Overriding partial {name}")
        self.partials[name] = source

    def compile(self, source: str, *, source_name: str = "<string>") -> CompiledTemplate:
        try:
            check_syntax(source)
            return self.compiler.compile(source)
        except (PybarsError, ValueError) as e:
            raise TemplateCompileError(source_name, str(e)) from e

    def render(
        self, template: CompiledTemplate, data: Any, *, source_name: str = "<string>"
    ) -> str:
        try:
            return str(template(data, helpers=self.helpers, partials=self.partials))
        except PybarsError as e:
            raise TemplateRenderError(source_name, str(e)) from e

    def render_source(
        self, source: str, data: Any, *, source_name: str = "<string>"
    ) -> str:
        template = self.compile(source, source_name=source_name)
        return self.render(template, data, source_name=source_name)
