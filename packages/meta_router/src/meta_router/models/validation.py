"""Pydantic models for configuration validation results."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field


class CircularDependencyError(BaseModel, frozen=True):
    """Two meta-agents can delegate back to each other within the depth bound."""

    type: Literal["circular_dependency"] = "circular_dependency"
    message: str
    path: list[str] = Field(default_factory=list)
    agents: list[str] = Field(default_factory=list)


class InvalidAgentReferenceError(BaseModel, frozen=True):
    """A delegation target is neither built in nor declared."""

    type: Literal["invalid_agent_reference"] = "invalid_agent_reference"
    message: str
    path: list[str] = Field(default_factory=list)
    reference: str


class SchemaValidationError(BaseModel, frozen=True):
    """Structural problem found while parsing the configuration."""

    type: Literal["schema_validation"] = "schema_validation"
    message: str
    path: list[str] = Field(default_factory=list)
    details: dict[str, Any] | None = None


ValidationIssue = Annotated[
    CircularDependencyError | InvalidAgentReferenceError | SchemaValidationError,
    Field(discriminator="type"),
]


class RegexPerformanceWarning(BaseModel, frozen=True):
    """Advisory: a regex matcher pattern looks expensive to evaluate."""

    type: Literal["regex_performance"] = "regex_performance"
    message: str
    path: list[str] = Field(default_factory=list)
    pattern: str
    reason: str


ValidationWarning = RegexPerformanceWarning


class ValidationResult(BaseModel, frozen=True):
    """Result of configuration validation."""

    valid: bool
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationWarning] = Field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0
