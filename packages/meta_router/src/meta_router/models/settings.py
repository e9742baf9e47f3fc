"""Pydantic models for application settings."""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_USER_CONFIG_DIR = "~/.config/meta_router"
DEFAULT_CONFIG_FILE = "meta_router.toml"


class Settings(BaseModel, frozen=True):
    """Runtime configuration loaded from environment variables."""

    user_config_dir: str = DEFAULT_USER_CONFIG_DIR
    project_dir: str = "."
    config_file: str = DEFAULT_CONFIG_FILE
    validate_config: bool = True
    check_circular_dependencies: bool = True
    check_agent_references: bool = True
    check_regex_performance: bool = True


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def load_settings() -> Settings:
    """Load settings from environment variables with defaults."""
    load_dotenv()

    config_file = os.getenv("META_ROUTER_CONFIG_FILE", DEFAULT_CONFIG_FILE)
    if not config_file.endswith(".toml"):
        msg = f"META_ROUTER_CONFIG_FILE must name a .toml file, got '{config_file}'"
        raise ValueError(msg)

    return Settings(
        user_config_dir=os.getenv("META_ROUTER_USER_CONFIG_DIR", DEFAULT_USER_CONFIG_DIR),
        project_dir=os.getenv("META_ROUTER_PROJECT_DIR", "."),
        config_file=config_file,
        validate_config=_parse_bool(os.getenv("META_ROUTER_VALIDATE", "true")),
        check_circular_dependencies=_parse_bool(os.getenv("META_ROUTER_CHECK_CIRCULAR", "true")),
        check_agent_references=_parse_bool(os.getenv("META_ROUTER_CHECK_REFERENCES", "true")),
        check_regex_performance=_parse_bool(os.getenv("META_ROUTER_CHECK_REGEX", "true")),
    )
