"""Dirender - batch Jinja2 renderer for a directory of templates.

Every ``*.tmpl`` file in a source directory is rendered against one shared
YAML variables file and written, in parallel, to a target directory.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main entry points
from .cli import main
from .pipeline import run

__all__ = ["main", "run"]
