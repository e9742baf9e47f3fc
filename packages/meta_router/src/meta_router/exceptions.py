"""Exceptions raised by meta_router."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from meta_router.models.validation import ValidationResult


class MetaRouterError(Exception):
    """Base class for meta_router errors."""


class AgentNotRegisteredError(MetaRouterError, LookupError):
    """Resolution was requested for a meta-agent that is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        msg = f'Meta-agent "{name}" not registered'
        super().__init__(msg)


class CircularDelegationError(MetaRouterError, ValueError):
    """Registering a delegation would close a cycle within the depth bound."""

    def __init__(self, from_agent: str, to_agent: str, path: list[str]) -> None:
        self.from_agent = from_agent
        self.to_agent = to_agent
        self.path = path
        msg = (
            f'Delegation "{from_agent}" -> "{to_agent}" would create a cycle: '
            f"{' -> '.join(path)}"
        )
        super().__init__(msg)


class ConfigValidationError(MetaRouterError, ValueError):
    """Configuration failed schema or semantic validation."""

    def __init__(self, result: ValidationResult, message: str) -> None:
        self.result = result
        super().__init__(message)
