"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Optional

import typer
from pydantic import ValidationError
from typing_extensions import Annotated

from .. import __version__
from ..core.errors import HbsError
from ..core.models import RenderConfig
from ..core.registry import TemplateRegistry
from ..data.aggregate import add_objects_to_data
from ..data.stdin import read_stdin_data
from ..loading.helpers import add_helpers
from ..loading.partials import add_partials
from ..rendering import engine
from ..resolution.paths import expand_glob_list
from ..settings import Settings
from .parsers import parse_extension, parse_file_mode, parse_output_dir

logger = logging.getLogger(__name__)

USAGE = """
Usage:
  hbs --version
  hbs --help
  hbs [-P <partial>]... [-H <helper>]... [-D <data>]... [-o <directory>] [--] (<template>...)

  -h, --help                 output usage information
  -v, --version              output the version number
  -o, --output <directory>   Directory to output rendered templates, defaults to cwd
  -e, --extension <ext>      Output extension of generated files, defaults to html
  -s, --stdout               Output to standard output
  -i, --stdin                Read the data object as JSON from standard input
  -P, --partial <glob>...    Register a partial (use as many of these as you want)
  -H, --helper <glob>...     Register a helper (use as many of these as you want)
  -D, --data <glob|json>...  Parse some data (use as many of these as you want)
      --mode <octal>         Permissions of written files, defaults to 0644
      --verbose              Enable debug logging

Examples:

  hbs --helper my_helpers --partial ./templates/layout.hbs -- ./index.hbs
  hbs --data ./package.json --data ./extra.json ./homepage.hbs --output ./site/
  hbs --helper './helpers/*.py' --partial './partials/*' ./index.hbs  # Supports globs!
  echo '{"title": "Home"}' | hbs --stdin --stdout ./index.hbs
"""

app = typer.Typer(
    name="hbs",
    help="Render Handlebars templates with helpers, partials and JSON data.",
    add_completion=False,
)


def run(
    templates: list[str],
    *,
    config: RenderConfig,
    helpers: list[str] | None = None,
    partials: list[str] | None = None,
    data: list[str] | None = None,
    use_stdin: bool = False,
    stdin_stream: IO[str] | None = None,
    registry: TemplateRegistry | None = None,
) -> list[Path]:
    """Set up helpers, partials and data, then render every template.

    Returns:
        Written output files (empty in stdout mode)
    """
    registry = registry or TemplateRegistry()
    context: Any = {}

    if helpers:
        logger.debug(f"Setting up helpers: {helpers}")
        add_helpers(expand_glob_list(helpers), registry)
    if partials:
        logger.debug(f"Setting up partials: {partials}")
        add_partials(expand_glob_list(partials), registry)
    if data:
        logger.debug(f"Setting up data: {data}")
        context = add_objects_to_data(data)
    if use_stdin:
        logger.debug("Reading data from stdin")
        context = read_stdin_data(stdin_stream)

    config = config.model_copy(update={"templates": expand_glob_list(templates)})
    if not config.templates:
        logger.warning(f"No templates matched {templates}")
    return engine.render_templates(config, registry, context)


@app.command(context_settings={"help_option_names": []})
def render(
    templates: Annotated[
        Optional[list[str]],
        typer.Argument(
            help="Template files, glob patterns or module names.",
            metavar="TEMPLATE...",
            show_default=False,
        ),
    ] = None,
    output: Annotated[
        str,
        typer.Option(
            "--output",
            "-o",
            help="Directory to output rendered templates (default: cwd).",
            metavar="DIR",
        ),
    ] = "",
    extension: Annotated[
        str,
        typer.Option(
            "--extension",
            "-e",
            help="Output extension of generated files (default: html).",
            metavar="EXT",
        ),
    ] = "",
    stdout: Annotated[
        bool,
        typer.Option("--stdout", "-s", help="Output to standard output."),
    ] = False,
    stdin: Annotated[
        bool,
        typer.Option("--stdin", "-i", help="Read data as JSON from standard input."),
    ] = False,
    partials: Annotated[
        list[str],
        typer.Option(
            "--partial",
            "-P",
            help="Register partials from a path, glob or module. Repeatable.",
            metavar="GLOB",
        ),
    ] = [],
    helpers: Annotated[
        list[str],
        typer.Option(
            "--helper",
            "-H",
            help="Load helper modules from a path, glob or module. Repeatable.",
            metavar="GLOB",
        ),
    ] = [],
    data: Annotated[
        list[str],
        typer.Option(
            "--data",
            "-D",
            help="Inline JSON or a path, glob or module of JSON files. Repeatable.",
            metavar="GLOB|JSON",
        ),
    ] = [],
    file_mode: Annotated[
        str,
        typer.Option(
            "--mode",
            help="File permissions in octal (default: 0644).",
            metavar="OCTAL",
        ),
    ] = "",
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Output the version number."),
    ] = False,
    show_help: Annotated[
        bool,
        typer.Option("--help", "-h", help="Output usage information."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Render Handlebars templates."""
    try:
        settings = Settings()
    except ValidationError as e:
        typer.echo(f"Invalid HBS_* environment settings: {e}", err=True)
        raise typer.Exit(code=1) from e

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if verbose or settings.debug else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    if version:
        typer.echo(__version__, err=True)
        return
    if show_help or not templates:
        typer.echo(USAGE, err=True)
        return

    logger.debug("Starting hbs")

    config = RenderConfig(
        output_dir=parse_output_dir(output, settings.output),
        extension=parse_extension(extension or settings.extension),
        stdout=stdout,
        file_mode=parse_file_mode(file_mode) if file_mode else settings.file_mode,
    )

    try:
        outputs = run(
            templates,
            config=config,
            helpers=helpers,
            partials=partials,
            data=data,
            use_stdin=stdin,
        )
    except HbsError as e:
        logger.debug("Render failed", exc_info=True)
        logger.error(str(e))
        raise typer.Exit(code=1) from e
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        raise typer.Exit(code=1) from e

    logger.debug(f"Completed: {len(outputs)} file(s) rendered")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
