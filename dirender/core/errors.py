"""Exception hierarchy for the rendering pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


class DirenderError(Exception):
    """Base class for every error raised by dirender."""


class VariablesError(DirenderError):
    """Raised when the variables file cannot be loaded."""


class VariablesReadError(VariablesError):
    """Raised when the variables file is missing or unreadable."""


class VariablesParseError(VariablesError):
    """Raised when the variables file is not a valid YAML mapping."""


class DiscoveryError(DirenderError):
    """Raised when the template set cannot be assembled."""


class NoTemplatesError(DiscoveryError):
    """Raised when a source directory holds no template files."""


class TemplateParseError(DirenderError):
    """Raised when a template fails to compile."""

    def __init__(self, template_name: str, message: str, lineno: int | None = None):
        location = f"{template_name}:{lineno}" if lineno else template_name
        super().__init__(f"Failed to parse template {location}: {message}")
        self.template_name = template_name
        self.lineno = lineno


class RenderError(DirenderError):
    """Raised when a template fails to evaluate against the variables."""

    def __init__(self, template_name: str, message: str):
        super().__init__(f"Failed to render template {template_name!r}: {message}")
        self.template_name = template_name


class OutputWriteError(DirenderError):
    """Raised when a rendered output cannot be written."""

    def __init__(self, path: Path, message: str):
        super().__init__(f"Failed to write {path}: {message}")
        self.path = path


class RenderFailures(DirenderError):
    """Aggregate error listing every output that failed to render."""

    def __init__(self, paths: Iterable[Path]):
        self.paths = sorted(paths)
        listed = ", ".join(str(p) for p in self.paths)
        super().__init__(
            f"Failed to render {len(self.paths)} template(s): {listed}"
        )
