"""Template discovery and compilation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateSyntaxError,
    Undefined,
)

from ..core.errors import DiscoveryError, NoTemplatesError, TemplateParseError
from ..core.models import RenderJob, TemplateUnit

logger = logging.getLogger(__name__)

_PATTERN_CHARS = set("*?[]/\\")


def build_environment(
    directory: Path, *, strict_undefined: bool = True, encoding: str = "utf-8"
) -> Environment:
    """Create the Jinja2 environment shared by every template of a run.

    Args:
        directory: Directory holding the templates (loader search path)
        strict_undefined: Fail on undefined variables instead of rendering ""
        encoding: Template file encoding

    Returns:
        Configured Jinja2 environment
    """
    return Environment(
        loader=FileSystemLoader(str(directory), encoding=encoding),
        undefined=StrictUndefined if strict_undefined else Undefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def output_name(name: str, extension: str) -> str:
    """Strip the template extension from a file name."""
    if extension and name.endswith(extension):
        return name[: -len(extension)]
    return name


def _validate_extension(extension: str) -> None:
    if not extension.startswith(".") or len(extension) < 2:
        raise DiscoveryError(
            f"Invalid template extension {extension!r}: must start with '.'"
        )
    if _PATTERN_CHARS & set(extension):
        raise DiscoveryError(
            f"Invalid template extension {extension!r}: "
            "contains path separators or pattern characters"
        )


def list_template_files(
    directory: Path, extension: str, exclude: Iterable[str] = ()
) -> list[Path]:
    """List template files directly inside ``directory``.

    Args:
        directory: Source directory (not searched recursively)
        extension: Template file suffix, e.g. ".tmpl"
        exclude: File names to ignore

    Returns:
        Sorted template file paths
    """
    _validate_extension(extension)
    excluded = set(exclude)
    pattern = f"*{extension}"

    try:
        matches = sorted(
            path
            for path in directory.glob(pattern)
            if path.is_file() and path.name not in excluded
        )
    except OSError as exc:
        raise DiscoveryError(
            f"Failed to list templates {str(directory / pattern)!r}: {exc}"
        ) from exc

    templates = []
    for path in matches:
        if path.name == extension:
            logger.warning(f"Skipping {path}: empty output name")
            continue
        templates.append(path)

    if not templates:
        raise NoTemplatesError(f"No template file found in {str(directory)!r}")
    return templates


def discover_templates(
    directory: Path,
    extension: str,
    *,
    exclude: Iterable[str] = (),
    strict_undefined: bool = True,
    encoding: str = "utf-8",
) -> dict[str, TemplateUnit]:
    """Discover and compile every template in a directory.

    Compilation is all-or-nothing: the first syntax error aborts discovery.

    Args:
        directory: Source directory
        extension: Template file suffix
        exclude: File names to ignore (the variables file)
        strict_undefined: Fail on undefined variables at render time
        encoding: Template file encoding

    Returns:
        Mapping of template file name to compiled unit
    """
    paths = list_template_files(directory, extension, exclude)
    logger.debug(f"Found {len(paths)} template(s) in {directory}")

    env = build_environment(
        directory, strict_undefined=strict_undefined, encoding=encoding
    )

    units: dict[str, TemplateUnit] = {}
    for path in paths:
        try:
            template = env.get_template(path.name)
        except TemplateSyntaxError as exc:
            raise TemplateParseError(path.name, exc.message or str(exc), exc.lineno) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise TemplateParseError(path.name, str(exc)) from exc
        units[path.name] = TemplateUnit(name=path.name, path=path, template=template)

    return units


def plan_jobs(
    templates: Mapping[str, TemplateUnit], target_dir: Path, extension: str
) -> list[RenderJob]:
    """Pair every template with its output path.

    Raises:
        DiscoveryError: if two templates would write the same output path
    """
    jobs: list[RenderJob] = []
    claimed: dict[Path, str] = {}
    for name, unit in sorted(templates.items()):
        output_path = target_dir / output_name(name, extension)
        if output_path in claimed:
            raise DiscoveryError(
                f"Templates {claimed[output_path]!r} and {name!r} "
                f"both render to {output_path}"
            )
        claimed[output_path] = name
        jobs.append(RenderJob(unit=unit, output_path=output_path))
    return jobs
