"""Rule-based meta-agent routing with delegation cycle validation."""

from meta_router.config import ConfigValidator, RouterService, create_registry
from meta_router.exceptions import (
    AgentNotRegisteredError,
    CircularDelegationError,
    ConfigValidationError,
    MetaRouterError,
)
from meta_router.graph import DelegationGraph
from meta_router.models import (
    AgentConfig,
    MetaAgentDefinition,
    ResolvedRoute,
    RouterConfig,
    RoutingContext,
    RoutingRule,
    ValidationResult,
)
from meta_router.registry import MetaAgentRegistry
from meta_router.routing import RoutingLogger, evaluate_matcher, evaluate_routing_rules

__all__ = [
    "AgentConfig",
    "AgentNotRegisteredError",
    "CircularDelegationError",
    "ConfigValidationError",
    "ConfigValidator",
    "DelegationGraph",
    "MetaAgentDefinition",
    "MetaAgentRegistry",
    "MetaRouterError",
    "ResolvedRoute",
    "RouterConfig",
    "RouterService",
    "RoutingContext",
    "RoutingLogger",
    "RoutingRule",
    "ValidationResult",
    "create_registry",
    "evaluate_matcher",
    "evaluate_routing_rules",
]
