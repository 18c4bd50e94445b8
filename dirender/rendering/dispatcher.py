"""Concurrent rendering of a template set."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Mapping, Sequence

from ..context.variables import Variables
from ..core.errors import OutputWriteError, RenderError
from ..core.models import RenderJob, RunResult, TemplateUnit
from .engine import render
from .io import write_output
from .results import FailureSet, aggregate
from .templates import plan_jobs

logger = logging.getLogger(__name__)


def render_job(
    job: RenderJob, variables: Variables, file_mode: int, encoding: str = "utf-8"
) -> Path:
    """Render one template and write it to its output path.

    Args:
        job: Template and output path
        variables: Template context data
        file_mode: File permissions
        encoding: Output encoding

    Returns:
        Output file path
    """
    data = render(job.unit, variables, encoding=encoding)
    try:
        write_output(job.output_path, data, mode=file_mode)
    except OSError as exc:
        raise OutputWriteError(job.output_path, str(exc)) from exc

    logger.info(f"Rendered {job.unit.path} → {job.output_path}")
    return job.output_path


def run_jobs(
    jobs: Sequence[RenderJob],
    variables: Variables,
    *,
    max_workers: int | None = None,
    file_mode: int = 0o644,
    encoding: str = "utf-8",
) -> RunResult:
    """Run every render job concurrently and wait for all of them.

    A failing job records its output path and never affects its siblings.

    Args:
        jobs: Render jobs, one per template
        variables: Template context data, shared read-only
        max_workers: Upper bound on worker threads (default: one per job)
        file_mode: File permissions
        encoding: Output encoding

    Returns:
        Aggregated run result
    """
    failures = FailureSet()

    def _task(job: RenderJob) -> Path | None:
        try:
            return render_job(job, variables, file_mode, encoding)
        except (RenderError, OutputWriteError) as exc:
            logger.error(str(exc))
            failures.add(job.output_path)
            return None

    if not jobs:
        return aggregate([], [])

    workers = len(jobs) if max_workers is None else min(max_workers, len(jobs))
    logger.info(f"Rendering {len(jobs)} template(s) with {workers} worker(s)")

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="dirender") as pool:
        outputs = list(pool.map(_task, jobs))

    result = aggregate([out for out in outputs if out is not None], failures)
    logger.info(f"Rendered {len(result.rendered)} file(s), {len(result.failed)} failed")
    return result


def render_all(
    templates: Mapping[str, TemplateUnit],
    variables: Variables,
    target_dir: Path,
    *,
    extension: str,
    max_workers: int | None = None,
    file_mode: int = 0o644,
    encoding: str = "utf-8",
) -> RunResult:
    """Render every template into ``target_dir``.

    Args:
        templates: Compiled templates keyed by file name
        variables: Template context data
        target_dir: Output directory
        extension: Template suffix stripped from output names
        max_workers: Upper bound on worker threads
        file_mode: File permissions
        encoding: Output encoding

    Returns:
        Aggregated run result
    """
    jobs = plan_jobs(templates, target_dir, extension)
    return run_jobs(
        jobs,
        variables,
        max_workers=max_workers,
        file_mode=file_mode,
        encoding=encoding,
    )
