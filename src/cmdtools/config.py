"""Environment-driven settings shared by the tools.

Decisions:
- Todo storage defaults to ".todo.json" in the working directory.
- TODO_FILENAME overrides it when set and non-empty; there is no flag.
- CMDTOOLS_DEBUG turns on debug logging (stderr only, stdout stays clean).
"""
from __future__ import annotations
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_TODO_FILE = '.todo.json'
TODO_FILE_ENV = 'TODO_FILENAME'
DEBUG_ENV = 'CMDTOOLS_DEBUG'

DEFAULT_BROWSER = 'firefox'
PREVIEW_GRACE_SECONDS = 2.0

LOG_FORMAT = '%(levelname)s %(name)s: %(message)s'


def _truthy_env(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def todo_file_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Resolve the todo storage path once, at startup."""
    env = os.environ if environ is None else environ
    override = env.get(TODO_FILE_ENV)
    if override:
        return Path(override)
    return Path(DEFAULT_TODO_FILE)


def configure_logging(environ: Optional[Mapping[str, str]] = None) -> None:
    env = os.environ if environ is None else environ
    level = logging.DEBUG if _truthy_env(env.get(DEBUG_ENV)) else logging.WARNING
    root = logging.getLogger('cmdtools')
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
