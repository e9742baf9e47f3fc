"""Configuration path resolution.

A router configuration can come from two TOML files:
1. User-level: `<user config dir>/<config file>` (META_ROUTER_USER_CONFIG_DIR)
2. Project-level: `<project dir>/<config file>` (META_ROUTER_PROJECT_DIR)

The project file is merged over the user file.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from meta_router.models.settings import Settings


def get_user_config_path(settings: Settings) -> Path:
    """Return the user-level config file path (may not exist)."""
    return Path(settings.user_config_dir).expanduser() / settings.config_file


def get_project_config_path(settings: Settings, project_dir: str | Path | None = None) -> Path:
    """Return the project-level config file path (may not exist).

    Args:
        settings: Settings providing the default project dir and file name.
        project_dir: Optional explicit project directory overriding settings.
    """
    base = Path(project_dir) if project_dir is not None else Path(settings.project_dir)
    return base.expanduser() / settings.config_file


def get_config_paths(settings: Settings, project_dir: str | Path | None = None) -> list[Path]:
    """Return existing config files in merge order (user first, project last)."""
    paths = [get_user_config_path(settings), get_project_config_path(settings, project_dir)]
    return [path for path in paths if path.exists()]
