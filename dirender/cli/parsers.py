"""CLI argument parsers and validators."""

from __future__ import annotations

import typer


def parse_file_mode(value: str) -> int:
    """Parse octal file mode string."""
    try:
        return int(value, 8)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid octal mode: {value!r}") from e


def parse_extension(value: str) -> str:
    """Parse a template extension, adding the leading dot if missing."""
    value = value.strip()
    if not value or value == ".":
        raise typer.BadParameter("Template extension must not be empty")
    return value if value.startswith(".") else f".{value}"
