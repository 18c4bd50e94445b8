"""Template rendering engine."""

from __future__ import annotations

import logging

from ..context.variables import Variables
from ..core.errors import RenderError
from ..core.models import TemplateUnit

logger = logging.getLogger(__name__)


def render(unit: TemplateUnit, variables: Variables, *, encoding: str = "utf-8") -> bytes:
    """Render a single template against the variables.

    Args:
        unit: Compiled template
        variables: Template context data
        encoding: Output encoding

    Returns:
        Rendered output bytes
    """
    logger.debug(f"Rendering template: {unit.name}")

    try:
        rendered_text = unit.template.render(variables)
        return rendered_text.encode(encoding)
    except Exception as exc:
        raise RenderError(unit.name, str(exc)) from exc
