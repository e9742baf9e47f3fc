"""Registry of meta-agents with delegation tracking and cycle refusal."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from meta_router.exceptions import AgentNotRegisteredError, CircularDelegationError
from meta_router.graph import DEFAULT_MAX_DEPTH, DelegationGraph
from meta_router.models.routing import AgentConfig
from meta_router.routing.rules import evaluate_routing_rules

if TYPE_CHECKING:
    from meta_router.models.config import MetaAgentDefinition
    from meta_router.models.routing import ResolvedRoute, RoutingContext
    from meta_router.routing.logger import RoutingObserver

logger = logging.getLogger(__name__)


class MetaAgentRegistry:
    """Map meta-agent names to definitions and resolve requests against their rules."""

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        observer: RoutingObserver | None = None,
    ) -> None:
        if max_depth < 1:
            msg = f"max_depth must be a positive integer, got {max_depth}"
            raise ValueError(msg)
        self.max_depth = max_depth
        self._observer = observer
        self._definitions: dict[str, MetaAgentDefinition] = {}
        self._graph = DelegationGraph()

    def register(self, name: str, definition: MetaAgentDefinition) -> None:
        """Insert or replace a definition and its delegation edges.

        Raises:
            CircularDelegationError: If any of the definition's edges would
                close a cycle within `max_depth`. The registry is unchanged.
        """
        candidate = self._graph.copy()
        candidate.remove_edges_from(name)
        for target in definition.delegation_targets():
            self._add_checked(candidate, name, target)

        self._definitions[name] = definition
        self._graph = candidate
        logger.debug("Registered meta-agent '%s' -> %s", name, definition.delegation_targets())

    def update(self, name: str, definition: MetaAgentDefinition) -> None:
        """Replace an existing definition."""
        if name not in self._definitions:
            raise AgentNotRegisteredError(name)
        self.register(name, definition)

    def add_delegation(self, from_agent: str, to_agent: str) -> None:
        """Track one runtime delegation edge, refusing it if it closes a cycle."""
        candidate = self._graph.copy()
        self._add_checked(candidate, from_agent, to_agent)
        self._graph = candidate

    def check_circular(self, from_agent: str, target: str, max_depth: int | None = None) -> bool:
        """Return True if `target` is reachable from `from_agent` within the depth bound."""
        depth = self.max_depth if max_depth is None else max_depth
        return self._graph.check_circular(from_agent, target, depth)

    def max_tracked_depth(self) -> int:
        """Return the length of the longest acyclic delegation chain registered."""
        return self._graph.longest_chain()

    def get(self, name: str) -> MetaAgentDefinition | None:
        return self._definitions.get(name)

    def get_all(self) -> dict[str, MetaAgentDefinition]:
        return dict(self._definitions)

    def names(self) -> list[str]:
        return list(self._definitions)

    def route(self, name: str, context: RoutingContext) -> ResolvedRoute | None:
        """Return the first matching route of a meta-agent, or None."""
        definition = self._require(name)
        return evaluate_routing_rules(definition.routing_rules, context, self._observer)

    def resolve(self, name: str, context: RoutingContext) -> AgentConfig:
        """Resolve a meta-agent to its final agent configuration.

        The matched rule's overrides replace the base fields they set. When
        no rule matches, the base configuration is returned unchanged.
        """
        definition = self._require(name)
        base = AgentConfig(
            model=definition.base_model,
            temperature=definition.temperature,
            prompt=definition.prompt_template,
        )
        route = evaluate_routing_rules(definition.routing_rules, context, self._observer)
        if route is None or route.config_overrides is None:
            return base

        overrides = route.config_overrides
        return AgentConfig(
            model=overrides.model if overrides.model is not None else base.model,
            temperature=(
                overrides.temperature if overrides.temperature is not None else base.temperature
            ),
            prompt=overrides.prompt if overrides.prompt is not None else base.prompt,
            variant=overrides.variant,
        )

    def _require(self, name: str) -> MetaAgentDefinition:
        definition = self._definitions.get(name)
        if definition is None:
            raise AgentNotRegisteredError(name)
        return definition

    def _add_checked(self, graph: DelegationGraph, from_agent: str, to_agent: str) -> None:
        path = graph.find_cycle_path(to_agent, from_agent, self.max_depth)
        if path is not None:
            raise CircularDelegationError(from_agent, to_agent, [from_agent, *path])
        graph.add_edge(from_agent, to_agent)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)
