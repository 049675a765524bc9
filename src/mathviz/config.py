"""Application configuration for the math visualizer.

Provides the persisted-state location, the persistence key and the
navigation history bound, with environment variable overrides.

Usage:
    from mathviz.config import get_config

    cfg = get_config()
    cfg.state_dir           # Directory of the navigation position store
    cfg.app_name            # Key the position is stored under
    cfg.max_history_length  # Navigation history bound

Environment variable overrides:
    MATHVIZ_PROJECT_ROOT  Override project root (state_dir default resolves from this)
    MATHVIZ_STATE_DIR     Override the persisted state directory
    MATHVIZ_APP_NAME      Override the persistence key
    MATHVIZ_MAX_HISTORY   Override the history bound (positive integer)
    MATHVIZ_LOG_LEVEL     Override the log level
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from mathviz.navigation.controller import DEFAULT_MAX_HISTORY_LENGTH

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = "math-viz-navigation"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    project_root: Path
    state_dir: Path
    app_name: str = DEFAULT_APP_NAME
    max_history_length: int = DEFAULT_MAX_HISTORY_LENGTH
    log_level: str = DEFAULT_LOG_LEVEL


def get_config() -> AppConfig:
    """Get application configuration.

    Resolves each setting in this order:
    1. Environment variable override (MATHVIZ_STATE_DIR, etc.)
    2. Default, relative to the project root for paths

    Returns:
        AppConfig with resolved settings
    """
    project_root = _resolve_project_root()

    state_dir = Path(os.environ.get("MATHVIZ_STATE_DIR", str(project_root / ".mathviz")))

    return AppConfig(
        project_root=project_root,
        state_dir=state_dir,
        app_name=os.environ.get("MATHVIZ_APP_NAME", DEFAULT_APP_NAME),
        max_history_length=_resolve_max_history(),
        log_level=os.environ.get("MATHVIZ_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )


def _resolve_max_history() -> int:
    """Read MATHVIZ_MAX_HISTORY, falling back to the default on bad values."""
    raw = os.environ.get("MATHVIZ_MAX_HISTORY")
    if raw is None:
        return DEFAULT_MAX_HISTORY_LENGTH
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        logger.warning(
            "Ignoring MATHVIZ_MAX_HISTORY=%r; using default %d", raw, DEFAULT_MAX_HISTORY_LENGTH
        )
        return DEFAULT_MAX_HISTORY_LENGTH
    return value


def _resolve_project_root() -> Path:
    """Resolve the project root directory.

    Strategy:
    1. MATHVIZ_PROJECT_ROOT environment variable (explicit override)
    2. Walk up from this file looking for pyproject.toml
    3. Fall back to current working directory
    """
    env_root = os.environ.get("MATHVIZ_PROJECT_ROOT")
    if env_root:
        return Path(env_root).resolve()

    # Walk up from src/mathviz/config.py to find pyproject.toml
    current = Path(__file__).resolve().parent.parent.parent
    for ancestor in [current, *current.parents]:
        if (ancestor / "pyproject.toml").exists():
            return ancestor

    return Path.cwd()
