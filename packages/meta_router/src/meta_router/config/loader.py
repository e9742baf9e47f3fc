"""Configuration loader: merge TOML sources, check structure, validate semantics."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path  # noqa: TC003 - needed at runtime for file operations
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from meta_router.config.config_paths import get_config_paths
from meta_router.config.validator import ConfigValidator, format_validation_failure
from meta_router.exceptions import ConfigValidationError
from meta_router.models.config import RouterConfig
from meta_router.models.settings import Settings, load_settings
from meta_router.models.validation import SchemaValidationError, ValidationResult

logger = logging.getLogger(__name__)


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load TOML file, return empty dict if not found."""
    if not path.exists():
        return {}
    with path.open("rb") as file:
        try:
            return tomllib.load(file)
        except tomllib.TOMLDecodeError as exc:
            result = ValidationResult(
                valid=False,
                errors=[SchemaValidationError(message=f"TOML parse error: {exc}", path=[str(path)])],
            )
            raise ConfigValidationError(result, format_validation_failure(result)) from exc


def deep_merge(target: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge `source` over `target`. Tables merge recursively; anything else is replaced."""
    merged = dict(target)
    for key, value in source.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def parse_config(data: dict[str, Any]) -> RouterConfig:
    """Parse raw configuration data into a `RouterConfig`.

    Raises:
        ConfigValidationError: With one `schema_validation` error per issue.
    """
    try:
        return RouterConfig.model_validate(data)
    except PydanticValidationError as exc:
        errors = [
            SchemaValidationError(
                message=issue["msg"],
                path=[str(part) for part in issue["loc"]],
                details={"type": issue["type"]},
            )
            for issue in exc.errors()
        ]
        result = ValidationResult(valid=False, errors=errors)
        raise ConfigValidationError(result, format_validation_failure(result)) from exc


class ConfigLoader:
    """Load router configuration from user and project TOML files."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or load_settings()

    def read(self, project_dir: str | Path | None = None) -> dict[str, Any]:
        """Read and merge the raw configuration sources."""
        data: dict[str, Any] = {}
        for path in get_config_paths(self.settings, project_dir):
            logger.debug("Loading router config from %s", path)
            data = deep_merge(data, _load_toml_file(path))
        return data

    def validator(self) -> ConfigValidator:
        """Return the validator the settings ask for; every check is off when validation is."""
        enabled = self.settings.validate_config
        return ConfigValidator(
            check_circular_dependencies=enabled and self.settings.check_circular_dependencies,
            check_agent_references=enabled and self.settings.check_agent_references,
            check_regex_performance=enabled and self.settings.check_regex_performance,
        )

    def load(self, project_dir: str | Path | None = None) -> tuple[RouterConfig, ValidationResult]:
        """Load, parse, and validate configuration.

        Structural problems raise `ConfigValidationError`. Semantic problems
        are reported in the returned `ValidationResult`.
        """
        config = parse_config(self.read(project_dir))

        if not self.settings.validate_config:
            return config, ValidationResult(valid=True)

        validation = self.validator().validate(config)

        for error in validation.errors:
            logger.error("Config validation error: %s", error.message)
        for warning in validation.warnings:
            logger.warning("Config validation warning: %s", warning.message)

        return config, validation
