"""End-to-end rendering of one source directory into one target directory."""

from __future__ import annotations

import logging
from pathlib import Path

from .context.variables import load_variables
from .core.models import RunResult
from .rendering.dispatcher import run_jobs
from .rendering.templates import discover_templates, plan_jobs
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


def run(
    source_dir: Path, target_dir: Path, settings: Settings | None = None
) -> RunResult:
    """Render every template of ``source_dir`` into ``target_dir``.

    Variables loading, discovery and compilation all happen before the
    first output is written; any failure there raises immediately.

    Args:
        source_dir: Directory holding the templates and the variables file
        target_dir: Directory receiving the rendered files
        settings: Run configuration (default: environment settings)

    Returns:
        Run result listing the rendered outputs

    Raises:
        VariablesError: variables file missing, unreadable or malformed
        DiscoveryError: no templates, unlistable directory or path collision
        TemplateParseError: a template failed to compile
        RenderFailures: one or more templates failed to render or write
    """
    settings = settings or get_settings()
    source_dir = Path(source_dir)
    target_dir = Path(target_dir)

    variables = load_variables(source_dir / settings.vars_file, settings.encoding)

    templates = discover_templates(
        source_dir,
        settings.template_ext,
        exclude=[settings.vars_file],
        strict_undefined=settings.strict_undefined,
        encoding=settings.encoding,
    )
    jobs = plan_jobs(templates, target_dir, settings.template_ext)
    logger.debug(f"Planned {len(jobs)} job(s) into {target_dir}")

    result = run_jobs(
        jobs,
        variables,
        max_workers=settings.max_workers,
        file_mode=settings.file_mode,
        encoding=settings.encoding,
    )
    result.raise_for_failures()
    return result
