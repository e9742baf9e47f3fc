"""Pydantic models for router configuration, routing, and validation."""

from meta_router.models.config import (
    AlwaysMatcher,
    ComplexityMatcher,
    ConfigOverrides,
    KeywordMatcher,
    Matcher,
    MetaAgentDefinition,
    ProjectContextMatcher,
    RegexMatcher,
    RouterConfig,
    RouterSettings,
    RoutingLoggerConfig,
    RoutingRule,
)
from meta_router.models.routing import (
    AgentConfig,
    MatcherEvaluation,
    ResolvedRoute,
    RoutingContext,
    RoutingTrace,
)
from meta_router.models.settings import Settings, load_settings
from meta_router.models.validation import (
    CircularDependencyError,
    InvalidAgentReferenceError,
    RegexPerformanceWarning,
    SchemaValidationError,
    ValidationIssue,
    ValidationResult,
    ValidationWarning,
)

__all__ = [
    "AgentConfig",
    "AlwaysMatcher",
    "CircularDependencyError",
    "ComplexityMatcher",
    "ConfigOverrides",
    "InvalidAgentReferenceError",
    "KeywordMatcher",
    "Matcher",
    "MatcherEvaluation",
    "MetaAgentDefinition",
    "ProjectContextMatcher",
    "RegexMatcher",
    "RegexPerformanceWarning",
    "ResolvedRoute",
    "RouterConfig",
    "RouterSettings",
    "RoutingContext",
    "RoutingLoggerConfig",
    "RoutingRule",
    "RoutingTrace",
    "SchemaValidationError",
    "Settings",
    "ValidationIssue",
    "ValidationResult",
    "ValidationWarning",
    "load_settings",
]
