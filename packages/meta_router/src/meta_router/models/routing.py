"""Per-request routing models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from meta_router.models.config import ConfigOverrides, Matcher


@dataclass(frozen=True)
class RoutingContext:
    """Request input for a single resolution call.

    The host gathers `project_files` and `project_deps`; routing never
    touches the file system.
    """

    prompt: str
    project_files: list[str] = field(default_factory=list)
    project_deps: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ResolvedRoute:
    """First matching rule of a meta-agent."""

    target_agent: str
    config_overrides: ConfigOverrides | None = None
    matcher_type: str = ""
    matched_content: str = ""


@dataclass(frozen=True)
class MatcherEvaluation:
    """Outcome of evaluating one rule's matcher."""

    matcher_type: str
    matcher: Matcher
    matched: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "matcher_type": self.matcher_type,
            "matcher": self.matcher.model_dump(exclude_none=True),
            "matched": self.matched,
        }


@dataclass(frozen=True)
class RoutingTrace:
    """Route plus the per-rule evaluations that produced it."""

    route: ResolvedRoute | None
    evaluations: list[MatcherEvaluation] = field(default_factory=list)


@dataclass(frozen=True)
class AgentConfig:
    """Final agent configuration handed to the host translator."""

    model: str
    temperature: float | None = None
    prompt: str | None = None
    variant: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return only the fields that are set."""
        data: dict[str, Any] = {"model": self.model}
        if self.temperature is not None:
            data["temperature"] = self.temperature
        if self.prompt is not None:
            data["prompt"] = self.prompt
        if self.variant is not None:
            data["variant"] = self.variant
        return data
