"""
Runtime configuration: where class files live and how much to log.

Resolution order for the classes folder:
    1. explicit path (CLI option --classes-dir, or tests)
    2. CLASSROLL_HOME environment variable
    3. the platform's per-user data directory + "Classes"
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

ENV_HOME = "CLASSROLL_HOME"
ENV_LOG_LEVEL = "CLASSROLL_LOG_LEVEL"


def _platform_data_dir() -> Path:
    if sys.platform.startswith("win"):
        local = os.environ.get("LOCALAPPDATA")
        if local:
            return Path(local)
        return Path.home() / "AppData" / "Local"

    xdg = os.environ.get("XDG_DATA_HOME", "").strip()
    base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / "classroll"


def default_classes_dir() -> Path:
    """
    Return the folder that holds the class files.

    Using a function instead of a constant makes testing easier,
    because tests can override the environment.
    """
    home = os.environ.get(ENV_HOME, "").strip()
    if home:
        return Path(home).expanduser()
    return _platform_data_dir() / "Classes"


def resolve_classes_dir(path: str | Path | None = None) -> Path:
    return Path(path).expanduser() if path is not None else default_classes_dir()


def setup_logging(verbose: int = 0) -> None:
    """
    Configure the root logger once for the CLI.

    Default level is WARNING so normal command output stays clean;
    -v gives INFO, -vv gives DEBUG. CLASSROLL_LOG_LEVEL wins if set.
    """
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG

    env_level = os.environ.get(ENV_LOG_LEVEL, "").strip().upper()
    if isinstance(getattr(logging, env_level, None), int):
        level = getattr(logging, env_level)

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]
