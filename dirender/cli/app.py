"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from typing_extensions import Annotated

from ..core.errors import (
    DiscoveryError,
    RenderFailures,
    TemplateParseError,
    VariablesError,
)
from ..pipeline import run
from ..settings import get_settings
from .parsers import parse_extension, parse_file_mode

logger = logging.getLogger(__name__)

EXIT_VARIABLES = 3
EXIT_TEMPLATES = 4
EXIT_RENDER = 5

app = typer.Typer(
    name="dirender",
    help="Render a directory of Jinja2 templates against a shared YAML variables file.",
    add_completion=False,
)


@app.command()
def render(
    source_dir: Annotated[
        Path,
        typer.Argument(
            help="Directory containing the templates ('*.tmpl' by default) and the variables file ('_vars.yml' by default).",
            metavar="SOURCE",
        ),
    ],
    target_dir: Annotated[
        Path,
        typer.Argument(
            help="Directory where the rendered templates are written.",
            metavar="TARGET",
        ),
    ],
    vars_file: Annotated[
        Optional[str],
        typer.Option(
            "--vars-file",
            help="Name of the variables file inside SOURCE (default: _vars.yml).",
            metavar="NAME",
        ),
    ] = None,
    extension: Annotated[
        Optional[str],
        typer.Option(
            "--ext",
            help="Template file extension (default: .tmpl).",
            metavar="SUFFIX",
        ),
    ] = None,
    jobs: Annotated[
        Optional[int],
        typer.Option(
            "--jobs",
            "-j",
            min=1,
            help="Maximum concurrent renders (default: one per template).",
            metavar="N",
        ),
    ] = None,
    file_mode: Annotated[
        Optional[str],
        typer.Option(
            "--mode",
            help="File permissions in octal (default: 0644).",
            metavar="OCTAL",
        ),
    ] = None,
    lenient: Annotated[
        bool,
        typer.Option(
            "--lenient",
            help="Render undefined variables as empty strings instead of failing.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Render every template in SOURCE into TARGET, one output per template."""
    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    logger.debug("Starting dirender")

    # Parse configuration
    overrides: dict[str, object] = {}
    if vars_file is not None:
        overrides["vars_file"] = vars_file
    if extension is not None:
        overrides["template_ext"] = parse_extension(extension)
    if jobs is not None:
        overrides["max_workers"] = jobs
    if file_mode is not None:
        overrides["file_mode"] = parse_file_mode(file_mode)
    if lenient:
        overrides["strict_undefined"] = False
    try:
        base_settings = get_settings()
    except ValidationError as e:
        raise typer.BadParameter(f"Invalid DIRENDER_* setting: {e}") from e
    settings = base_settings.model_copy(update=overrides)

    logger.debug(f"Settings: {settings!r}")

    try:
        result = run(source_dir, target_dir, settings)
    except VariablesError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_VARIABLES) from exc
    except (DiscoveryError, TemplateParseError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_TEMPLATES) from exc
    except RenderFailures as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_RENDER) from exc

    logger.debug(f"Completed: {len(result.rendered)} file(s) rendered")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
