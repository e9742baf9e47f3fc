"""Pydantic models for meta-agent routing configuration."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field


class KeywordMatcher(BaseModel, frozen=True):
    """Substring match on any or all keywords, case-insensitive."""

    type: Literal["keyword"] = "keyword"
    keywords: list[str] = Field(min_length=1)
    mode: Literal["any", "all"]


class ComplexityMatcher(BaseModel, frozen=True):
    """Match when the heuristic complexity score reaches a threshold."""

    type: Literal["complexity"] = "complexity"
    threshold: Literal["low", "medium", "high"]


class RegexMatcher(BaseModel, frozen=True):
    """Regular expression search over the prompt."""

    type: Literal["regex"] = "regex"
    pattern: str = Field(min_length=1)
    flags: str | None = None


class ProjectContextMatcher(BaseModel, frozen=True):
    """Match on files and dependencies present in the project."""

    type: Literal["project_context"] = "project_context"
    has_files: list[str] | None = None
    has_deps: list[str] | None = None


class AlwaysMatcher(BaseModel, frozen=True):
    """Unconditional fallback matcher."""

    type: Literal["always"] = "always"


Matcher = Annotated[
    KeywordMatcher | ComplexityMatcher | RegexMatcher | ProjectContextMatcher | AlwaysMatcher,
    Field(discriminator="type"),
]


class ConfigOverrides(BaseModel, frozen=True):
    """Per-rule overrides applied on top of a meta-agent's base config."""

    model: str | None = None
    temperature: float | None = None
    prompt: str | None = None
    variant: str | None = None


class RoutingRule(BaseModel, frozen=True):
    """A matcher, the agent it routes to, and optional overrides."""

    matcher: Matcher
    target_agent: str
    config_overrides: ConfigOverrides | None = None


class MetaAgentDefinition(BaseModel, frozen=True):
    """Meta-agent definition - base config plus ordered routing rules."""

    base_model: str
    delegates_to: list[str] = Field(default_factory=list)
    routing_rules: list[RoutingRule] = Field(default_factory=list)
    temperature: float | None = None
    prompt_template: str | None = None
    # Display-only
    description: str | None = None
    color: str | None = None
    hidden: bool | None = None

    def delegation_targets(self) -> list[str]:
        """Return every agent this definition may hand off to, in declaration order."""
        targets: list[str] = []
        for name in [*self.delegates_to, *(rule.target_agent for rule in self.routing_rules)]:
            if name not in targets:
                targets.append(name)
        return targets


class RoutingLoggerConfig(BaseModel, frozen=True):
    """Routing decision logger configuration."""

    enabled: bool = True
    output: Literal["console", "file", "disabled"] = "console"
    log_file: str = "routing.log"
    debug_mode: bool = False


class RouterSettings(BaseModel, frozen=True):
    """The `[settings]` table of a router configuration file."""

    namespace_prefix: str = "meta"
    max_delegation_depth: int = Field(default=3, ge=1)
    routing_logger: RoutingLoggerConfig = Field(default_factory=RoutingLoggerConfig)


class RouterConfig(BaseModel, frozen=True):
    """Complete router configuration."""

    meta_agents: dict[str, MetaAgentDefinition] = Field(default_factory=dict)
    settings: RouterSettings = Field(default_factory=RouterSettings)
