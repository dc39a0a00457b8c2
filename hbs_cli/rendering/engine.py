"""Template rendering engine."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import IO, Any

from ..core.models import RenderConfig, RenderTask
from ..core.registry import TemplateRegistry
from .io import atomic_write_text, ensure_dir, read_text

logger = logging.getLogger(__name__)


def render_template(template_path: Path, registry: TemplateRegistry, data: Any) -> str:
    """Compile a template file and render it against ``data``.

    Args:
        template_path: Path to the template file
        registry: Compiler, helpers and partials to render with
        data: Template context

    Returns:
        Rendered text
    """
    logger.debug(f"Rendering template: {template_path}")
    source_name = str(template_path)
    template = registry.compile(read_text(template_path), source_name=source_name)
    return registry.render(template, data, source_name=source_name)


def render_task(
    task: RenderTask, registry: TemplateRegistry, data: Any, file_mode: int
) -> Path:
    """Render a single template task to its output file.

    Returns:
        Output file path
    """
    rendered_text = render_template(task.template_path, registry, data)
    atomic_write_text(task.output_path, rendered_text, mode=file_mode)
    logger.info(f"Wrote {task.output_path} from {task.template_path}")
    return task.output_path


def render_templates(
    config: RenderConfig,
    registry: TemplateRegistry,
    data: Any = None,
    stream: IO[str] | None = None,
) -> list[Path]:
    """Render all configured templates, in order.

    In stdout mode every rendered template is written to ``stream``
    (default: stdout) and no files are created.

    Args:
        config: Render configuration
        registry: Compiler, helpers and partials to render with
        data: Template context (default: empty object)
        stream: Destination for stdout mode

    Returns:
        List of output file paths
    """
    data = {} if data is None else data
    logger.debug(f"Rendering {len(config.templates)} template(s)")

    if config.stdout:
        stream = stream or sys.stdout
        for template_path in config.templates:
            stream.write(render_template(template_path, registry, data))
        stream.flush()
        return []

    if not config.templates:
        return []

    ensure_dir(config.output_dir)
    outputs = [
        render_task(task, registry, data, config.file_mode) for task in config.tasks()
    ]

    logger.debug(f"Successfully rendered {len(outputs)} file(s)")
    return outputs
