"""First-match-wins evaluation of ordered routing rules."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal, overload

from meta_router.models.routing import MatcherEvaluation, ResolvedRoute, RoutingTrace
from meta_router.routing.matchers import describe_match, evaluate_matcher

if TYPE_CHECKING:
    from collections.abc import Sequence

    from meta_router.models.config import RoutingRule
    from meta_router.models.routing import RoutingContext
    from meta_router.routing.logger import RoutingObserver

logger = logging.getLogger(__name__)


@overload
def evaluate_routing_rules(
    rules: Sequence[RoutingRule],
    context: RoutingContext,
    observer: RoutingObserver | None = None,
    *,
    capture_evaluations: Literal[False] = False,
) -> ResolvedRoute | None: ...


@overload
def evaluate_routing_rules(
    rules: Sequence[RoutingRule],
    context: RoutingContext,
    observer: RoutingObserver | None = None,
    *,
    capture_evaluations: Literal[True],
) -> RoutingTrace: ...


def evaluate_routing_rules(
    rules: Sequence[RoutingRule],
    context: RoutingContext,
    observer: RoutingObserver | None = None,
    *,
    capture_evaluations: bool = False,
) -> ResolvedRoute | RoutingTrace | None:
    """Return the route of the first rule whose matcher is true, or None.

    Rules are evaluated in declaration order. Without a debug observer or
    `capture_evaluations`, evaluation stops at the first match. With
    either, every rule is evaluated to build the trace but the first match
    is still the result.
    """
    debug_mode = observer is not None and _debug_enabled(observer)
    capture = capture_evaluations or debug_mode
    evaluations: list[MatcherEvaluation] = []
    first_match: ResolvedRoute | None = None

    for rule in rules:
        matched = evaluate_matcher(rule.matcher, context)
        if capture:
            evaluations.append(
                MatcherEvaluation(
                    matcher_type=rule.matcher.type,
                    matcher=rule.matcher,
                    matched=matched,
                )
            )
        if matched and first_match is None:
            first_match = ResolvedRoute(
                target_agent=rule.target_agent,
                config_overrides=rule.config_overrides,
                matcher_type=rule.matcher.type,
                matched_content=describe_match(rule.matcher, context),
            )
            if not capture:
                break

    if first_match is not None and observer is not None:
        _notify(observer, first_match, evaluations if debug_mode else None)

    if capture_evaluations:
        return RoutingTrace(route=first_match, evaluations=evaluations)
    return first_match


def _debug_enabled(observer: RoutingObserver) -> bool:
    try:
        return bool(observer.is_debug_mode())
    except Exception:  # noqa: BLE001 - observer errors must not affect routing
        logger.warning("Routing observer debug check failed", exc_info=True)
        return False


def _notify(
    observer: RoutingObserver,
    route: ResolvedRoute,
    evaluations: list[MatcherEvaluation] | None,
) -> None:
    try:
        if not observer.is_enabled():
            return
        observer.log_routing_decision(
            route.target_agent,
            route.matcher_type,
            route.matched_content,
            route.config_overrides,
            evaluations,
        )
    except Exception:  # noqa: BLE001 - observer errors must not affect routing
        logger.warning("Routing observer failed for target '%s'", route.target_agent, exc_info=True)
