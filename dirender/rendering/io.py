"""Output file writing for rendered templates."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def write_output(path: Path, data: bytes, mode: int = 0o644) -> None:
    """Replace ``path`` with ``data`` in one step.

    The bytes and permissions are staged in a temporary file next to the
    destination, which is then renamed over it, so readers never observe a
    truncated or wrongly-permissioned output.

    Args:
        path: Destination file path (parent directories are created)
        data: Rendered content
        mode: File permissions (octal)
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, staged = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            os.fchmod(handle.fileno(), mode)
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(staged, path)
    finally:
        Path(staged).unlink(missing_ok=True)
