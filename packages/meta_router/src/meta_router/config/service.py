"""Router service.

Centralizes loading and validation of router configuration and builds the
meta-agent registry from it. A configuration that fails validation never
reaches a registry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from meta_router.config.loader import ConfigLoader
from meta_router.config.validator import ConfigValidator, format_validation_failure
from meta_router.exceptions import ConfigValidationError
from meta_router.models.settings import load_settings
from meta_router.registry import MetaAgentRegistry
from meta_router.routing.logger import RoutingLogger

if TYPE_CHECKING:
    from pathlib import Path

    from meta_router.models.config import RouterConfig
    from meta_router.models.routing import AgentConfig, RoutingContext
    from meta_router.models.settings import Settings
    from meta_router.models.validation import ValidationResult
    from meta_router.routing.logger import RoutingObserver


@dataclass(frozen=True)
class ConfigSnapshot:
    """Immutable snapshot of loaded configuration."""

    settings: Settings
    config: RouterConfig
    validation: ValidationResult


def create_registry(
    config: RouterConfig,
    *,
    validator: ConfigValidator | None = None,
    observer: RoutingObserver | None = None,
) -> MetaAgentRegistry:
    """Validate `config` and register every meta-agent into a fresh registry.

    Raises:
        ConfigValidationError: If validation reports any error. No registry
            is created in that case.
    """
    validation = (validator or ConfigValidator()).validate(config)
    if not validation.valid:
        raise ConfigValidationError(validation, format_validation_failure(validation))

    if observer is None:
        observer = RoutingLogger(config.settings.routing_logger)
    registry = MetaAgentRegistry(
        max_depth=config.settings.max_delegation_depth,
        observer=observer,
    )
    for name, definition in config.meta_agents.items():
        registry.register(name, definition)
    return registry


class RouterService:
    """Load, validate, and serve router configuration and resolution."""

    def __init__(self, project_dir: str | Path | None = None) -> None:
        self._project_dir = project_dir
        self._snapshot: ConfigSnapshot | None = None
        self._registry: MetaAgentRegistry | None = None
        self._config_key: tuple[object, ...] | None = None

    def load_snapshot(self, *, force: bool = False) -> ConfigSnapshot:
        """Load a configuration snapshot, optionally forcing reload."""
        settings = load_settings()
        project_dir = str(self._project_dir or settings.project_dir)
        current_key = (project_dir, *settings.model_dump().values())
        if self._snapshot is not None and not force and current_key == self._config_key:
            return self._snapshot

        loader = ConfigLoader(settings)
        config, validation = loader.load(project_dir)
        self._snapshot = ConfigSnapshot(settings=settings, config=config, validation=validation)
        self._registry = None
        self._config_key = current_key
        return self._snapshot

    def get_config(self) -> RouterConfig:
        """Return validated configuration."""
        snapshot = self.load_snapshot()
        if not snapshot.validation.valid:
            raise ConfigValidationError(
                snapshot.validation, format_validation_failure(snapshot.validation)
            )
        return snapshot.config

    def get_settings(self) -> Settings:
        """Return settings from the cached snapshot."""
        return self.load_snapshot().settings

    def build_registry(self) -> MetaAgentRegistry:
        """Return the registry for the current snapshot, building it on first use."""
        config = self.get_config()
        if self._registry is None:
            validator = ConfigLoader(self.get_settings()).validator()
            self._registry = create_registry(config, validator=validator)
        return self._registry

    def resolve(self, meta_agent: str, context: RoutingContext) -> AgentConfig:
        """Resolve a request against a configured meta-agent."""
        return self.build_registry().resolve(meta_agent, context)


_router_service: RouterService | None = None


def get_router_service() -> RouterService:
    """Return the shared RouterService instance."""
    global _router_service  # noqa: PLW0603
    if _router_service is None:
        _router_service = RouterService()
    return _router_service
