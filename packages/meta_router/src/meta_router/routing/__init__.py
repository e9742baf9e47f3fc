"""Matcher evaluation, rule resolution, and routing decision logging."""

from meta_router.routing.logger import RoutingLogger, RoutingObserver
from meta_router.routing.matchers import (
    COMPLEXITY_THRESHOLDS,
    TECHNICAL_KEYWORDS,
    calculate_complexity,
    describe_match,
    evaluate_matcher,
)
from meta_router.routing.rules import evaluate_routing_rules

__all__ = [
    "COMPLEXITY_THRESHOLDS",
    "TECHNICAL_KEYWORDS",
    "RoutingLogger",
    "RoutingObserver",
    "calculate_complexity",
    "describe_match",
    "evaluate_matcher",
    "evaluate_routing_rules",
]
