"""Loading of the shared YAML variables file."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from pathlib import Path
from types import MappingProxyType
from typing import Any, Union

import yaml

from ..core.errors import VariablesParseError, VariablesReadError

logger = logging.getLogger(__name__)

Scalar = Union[None, bool, int, float, str, date]
Value = Union[Scalar, tuple["Value", ...], Mapping[str, "Value"]]
Variables = Mapping[str, Value]


def freeze(value: Any, _memo: dict[int, Any] | None = None) -> Value:
    """Recursively convert parsed YAML into read-only containers.

    Mappings become ``MappingProxyType`` views and sequences become tuples,
    so the result can be shared between render threads without locking.
    Containers reached through several YAML aliases are frozen once and
    shared; a container that contains itself is rejected.
    """
    if not isinstance(value, (Mapping, list, tuple)):
        return value

    memo = {} if _memo is None else _memo
    key = id(value)
    if key in memo:
        frozen = memo[key]
        if frozen is None:
            raise ValueError("recursive alias: a value contains itself")
        return frozen

    # None marks a container whose freezing is still in progress.
    memo[key] = None
    if isinstance(value, Mapping):
        frozen = MappingProxyType(
            {name: freeze(item, memo) for name, item in value.items()}
        )
    else:
        frozen = tuple(freeze(item, memo) for item in value)
    memo[key] = frozen
    return frozen


def parse_variables(text: str, source: str = "<string>") -> Variables:
    """Parse YAML text into a frozen variables mapping.

    Args:
        text: YAML document
        source: Name used in error messages

    Returns:
        Read-only mapping of top-level variables
    """
    try:
        data = yaml.safe_load(text)
    except (yaml.YAMLError, RecursionError) as exc:
        raise VariablesParseError(
            f"Failed to parse variables file {source!r}: {exc}"
        ) from exc

    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise VariablesParseError(
            f"Variables file {source!r} must contain a mapping, "
            f"got {type(data).__name__}"
        )

    try:
        return freeze(data)  # type: ignore[return-value]
    except (ValueError, RecursionError) as exc:
        raise VariablesParseError(
            f"Variables file {source!r} cannot be used as template context: {exc}"
        ) from exc


def load_variables(path: Path, encoding: str = "utf-8") -> Variables:
    """Load the variables file used as the context of every template.

    Args:
        path: Path to the YAML variables file
        encoding: Text encoding of the file

    Returns:
        Read-only mapping of top-level variables
    """
    logger.debug(f"Loading variables from {path}")

    try:
        text = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise VariablesReadError(
            f"Failed to read variables file {str(path)!r}: {exc}"
        ) from exc

    variables = parse_variables(text, source=str(path))
    logger.debug(f"Loaded {len(variables)} top-level variable(s)")
    return variables
