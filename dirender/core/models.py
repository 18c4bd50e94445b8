"""Domain models for template units, render jobs and run results."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Template
from pydantic import BaseModel, ConfigDict, Field

from .errors import RenderFailures


class TemplateUnit(BaseModel):
    """A compiled template, addressed by its source file name."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    name: str = Field(..., description="Source file name including extension")
    path: Path = Field(..., description="Source file path")
    template: Template = Field(..., description="Compiled Jinja2 template")


class RenderJob(BaseModel):
    """One template paired with the file it renders to."""

    model_config = ConfigDict(frozen=True)

    unit: TemplateUnit = Field(..., description="Template to render")
    output_path: Path = Field(..., description="Output file path")


class RunResult(BaseModel):
    """Outcome of rendering a template set."""

    rendered: list[Path] = Field(default_factory=list, description="Written outputs")
    failed: list[Path] = Field(default_factory=list, description="Failed outputs")

    @property
    def ok(self) -> bool:
        return not self.failed

    def raise_for_failures(self) -> None:
        """Raise RenderFailures naming every failed output, if any."""
        if self.failed:
            raise RenderFailures(self.failed)
