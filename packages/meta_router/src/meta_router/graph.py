"""Delegation graph shared by the live registry and the config validator.

Edges are declared "X may hand off to Y" relations. Both call sites use
the same depth-bounded search, so a configuration the validator accepts
is exactly one the registry will register.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from meta_router.models.config import MetaAgentDefinition

DEFAULT_MAX_DEPTH = 3


class DelegationGraph:
    """Adjacency list of delegation edges with a bounded cycle search."""

    def __init__(self) -> None:
        self._edges: dict[str, list[str]] = {}

    @classmethod
    def from_definitions(cls, definitions: Mapping[str, MetaAgentDefinition]) -> DelegationGraph:
        """Build a graph from every agent's `delegates_to` and rule targets."""
        graph = cls()
        for name, definition in definitions.items():
            graph.add_edges(name, definition.delegation_targets())
        return graph

    def add_edge(self, from_agent: str, to_agent: str) -> None:
        targets = self._edges.setdefault(from_agent, [])
        if to_agent not in targets:
            targets.append(to_agent)

    def add_edges(self, from_agent: str, to_agents: Iterable[str]) -> None:
        for to_agent in to_agents:
            self.add_edge(from_agent, to_agent)

    def remove_edges_from(self, from_agent: str) -> None:
        self._edges.pop(from_agent, None)

    def successors(self, agent: str) -> list[str]:
        return list(self._edges.get(agent, []))

    def edges(self) -> list[tuple[str, str]]:
        return [(src, dst) for src, targets in self._edges.items() for dst in targets]

    def copy(self) -> DelegationGraph:
        clone = DelegationGraph()
        clone._edges = {src: list(targets) for src, targets in self._edges.items()}
        return clone

    def find_cycle_path(
        self, from_agent: str, target: str, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> list[str] | None:
        """Return the first path from `from_agent` that reaches `target` or repeats a node.

        The search is depth-first and visits at most `max_depth` nodes per
        branch. Returns None when every branch is exhausted or runs out of
        depth without reaching `target` or revisiting a node.
        """
        return self._search(from_agent, target, max_depth, ())

    def check_circular(
        self, from_agent: str, target: str, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> bool:
        """Return True if `target` is reachable within `max_depth` or a loop is hit."""
        return self.find_cycle_path(from_agent, target, max_depth) is not None

    def _search(
        self, current: str, target: str, depth: int, trail: tuple[str, ...]
    ) -> list[str] | None:
        if depth <= 0:
            return None
        if current in trail or current == target:
            return [*trail, current]
        for next_agent in self._edges.get(current, []):
            found = self._search(next_agent, target, depth - 1, (*trail, current))
            if found is not None:
                return found
        return None

    def longest_chain(self) -> int:
        """Return the number of edges in the longest acyclic delegation chain."""
        longest = 0
        for start in self._edges:
            longest = max(longest, self._chain_length(start, frozenset()))
        return longest

    def _chain_length(self, current: str, seen: frozenset[str]) -> int:
        seen = seen | {current}
        best = 0
        for next_agent in self._edges.get(current, []):
            if next_agent in seen:
                continue
            best = max(best, 1 + self._chain_length(next_agent, seen))
        return best

    def __len__(self) -> int:
        return sum(len(targets) for targets in self._edges.values())
