"""Semantic validation of a parsed router configuration.

Three independent checks run over the meta-agent definitions:

1. Circular dependencies, using the same `DelegationGraph` search the
   registry applies at registration time.
2. Agent references, against built-in names plus declared meta-agents.
3. Regex performance heuristics. These are advisory and only produce
   warnings; they never rewrite or reject a pattern.

Errors and warnings are collected exhaustively in one pass.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from meta_router.graph import DEFAULT_MAX_DEPTH, DelegationGraph
from meta_router.models.config import RegexMatcher
from meta_router.models.validation import (
    CircularDependencyError,
    InvalidAgentReferenceError,
    RegexPerformanceWarning,
    ValidationIssue,
    ValidationResult,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from meta_router.models.config import MetaAgentDefinition, RouterConfig

logger = logging.getLogger(__name__)

BUILTIN_AGENT_NAMES = (
    "sisyphus",
    "hephaestus",
    "oracle",
    "librarian",
    "explore",
    "multimodal-looker",
    "metis",
    "momus",
    "atlas",
    "prometheus",
)

MAX_ALTERNATIONS = 8

# Checked in order; the first hit is reported.
_REGEX_HEURISTICS: tuple[tuple[re.Pattern[str], str], ...] = (
    (
        re.compile(r"\(\?[=!][^)]*[+*?]\)|\(\?<[=!][^)]*[+*?]\)"),
        "Complex lookaheads/lookbehinds with quantifiers can be slow",
    ),
    (
        re.compile(r"(\([^)]*[+*?][^)]*\)[+*?]|([+*?][+*?]))"),
        "Nested quantifiers can cause catastrophic backtracking",
    ),
    (
        re.compile(r"(\w+)\|\1"),
        "Overlapping alternation can cause inefficient backtracking",
    ),
    (
        re.compile(r"\^\.\*|\.\*\$|\.\*$|\.\*\.\*"),
        "Unbounded .* patterns can match excessively and cause performance issues",
    ),
    (
        re.compile(r"\[[^\]]+\][+*?]*\{\d{2,}"),
        "Large repetition quantifiers can cause excessive backtracking",
    ),
    (
        re.compile(r"\\\d"),
        "Backreferences prevent efficient regex compilation and can be slow",
    ),
)


def _edge_path(definition: MetaAgentDefinition, name: str, target: str) -> list[str]:
    if target in definition.delegates_to:
        return ["meta_agents", name, "delegates_to", str(definition.delegates_to.index(target))]
    for index, rule in enumerate(definition.routing_rules):
        if rule.target_agent == target:
            return ["meta_agents", name, "routing_rules", str(index), "target_agent"]
    return ["meta_agents", name]


def check_circular_dependencies(
    meta_agents: Mapping[str, MetaAgentDefinition],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[CircularDependencyError]:
    """Report each pair of meta-agents that can delegate back to one another.

    For every declared edge (name, target) the graph is searched from
    `target` back to `name`. A cycle between the same two agents is
    reported once, from the first edge that reveals it.
    """
    errors: list[CircularDependencyError] = []
    if not meta_agents:
        return errors

    graph = DelegationGraph.from_definitions(meta_agents)
    reported: set[frozenset[str]] = set()

    for name, definition in meta_agents.items():
        for target in definition.delegation_targets():
            pair = frozenset((name, target))
            if pair in reported:
                continue
            cycle = graph.find_cycle_path(target, name, max_depth)
            if cycle is None:
                continue
            reported.add(pair)
            errors.append(
                CircularDependencyError(
                    message=(
                        f'Circular dependency detected: "{name}" delegates to "{target}" '
                        f"which can route back: {' -> '.join([name, *cycle])}"
                    ),
                    path=_edge_path(definition, name, target),
                    agents=[name, target],
                )
            )
    return errors


def check_agent_references(
    meta_agents: Mapping[str, MetaAgentDefinition],
    builtin_agents: Iterable[str] = BUILTIN_AGENT_NAMES,
) -> list[InvalidAgentReferenceError]:
    """Report every delegation target that is neither built in nor declared."""
    errors: list[InvalidAgentReferenceError] = []
    if not meta_agents:
        return errors

    builtin = list(builtin_agents)
    valid_agents = {*builtin, *meta_agents.keys()}

    def _error(reference: str, path: list[str]) -> InvalidAgentReferenceError:
        return InvalidAgentReferenceError(
            message=(
                f'Invalid agent reference: "{reference}" is not a recognized agent. '
                f"Valid agents are: {', '.join(builtin)}"
            ),
            path=path,
            reference=reference,
        )

    for name, definition in meta_agents.items():
        for index, delegate in enumerate(definition.delegates_to):
            if delegate not in valid_agents:
                errors.append(_error(delegate, ["meta_agents", name, "delegates_to", str(index)]))
        for index, rule in enumerate(definition.routing_rules):
            if rule.target_agent not in valid_agents:
                errors.append(
                    _error(
                        rule.target_agent,
                        ["meta_agents", name, "routing_rules", str(index), "target_agent"],
                    )
                )
    return errors


def analyze_regex_pattern(pattern: str) -> str | None:
    """Return the reason a pattern looks risky, or None.

    These are approximations over the pattern text; there is no general
    way to decide catastrophic backtracking.
    """
    for heuristic, reason in _REGEX_HEURISTICS:
        if heuristic.search(pattern):
            return reason
    if pattern.count("|") > MAX_ALTERNATIONS:
        return "Many alternations can cause the regex engine to try many paths"
    return None


def check_regex_performance(
    meta_agents: Mapping[str, MetaAgentDefinition],
) -> list[RegexPerformanceWarning]:
    """Warn about regex matcher patterns that may backtrack badly."""
    warnings: list[RegexPerformanceWarning] = []
    for name, definition in meta_agents.items():
        for index, rule in enumerate(definition.routing_rules):
            if not isinstance(rule.matcher, RegexMatcher):
                continue
            pattern = rule.matcher.pattern
            reason = analyze_regex_pattern(pattern)
            if reason is None:
                continue
            warnings.append(
                RegexPerformanceWarning(
                    message=f"Regex pattern may cause performance issues: {reason}",
                    path=["meta_agents", name, "routing_rules", str(index), "matcher", "pattern"],
                    pattern=pattern,
                    reason=reason,
                )
            )
    return warnings


class ConfigValidator:
    """Run the semantic checks over a complete configuration."""

    def __init__(
        self,
        *,
        max_depth: int | None = None,
        builtin_agents: Iterable[str] = BUILTIN_AGENT_NAMES,
        check_circular_dependencies: bool = True,
        check_agent_references: bool = True,
        check_regex_performance: bool = True,
    ) -> None:
        if max_depth is not None and max_depth < 1:
            msg = f"max_depth must be a positive integer, got {max_depth}"
            raise ValueError(msg)
        self.max_depth = max_depth
        self.builtin_agents = tuple(builtin_agents)
        self.check_circular_dependencies = check_circular_dependencies
        self.check_agent_references = check_agent_references
        self.check_regex_performance = check_regex_performance

    def validate(self, config: RouterConfig) -> ValidationResult:
        """Validate `config`; it is valid when no check produced an error."""
        errors: list[ValidationIssue] = []
        warnings: list[RegexPerformanceWarning] = []
        max_depth = (
            config.settings.max_delegation_depth if self.max_depth is None else self.max_depth
        )

        if self.check_circular_dependencies:
            errors.extend(check_circular_dependencies(config.meta_agents, max_depth))
        if self.check_agent_references:
            errors.extend(check_agent_references(config.meta_agents, self.builtin_agents))
        if self.check_regex_performance:
            warnings.extend(check_regex_performance(config.meta_agents))

        return ValidationResult(valid=len(errors) == 0, errors=errors, warnings=warnings)


def _path_str(path: list[str]) -> str:
    return ".".join(path) if path else "root"


def get_validation_summary(result: ValidationResult) -> str:
    """Return a one-line count of errors and warnings."""
    error_count = len(result.errors)
    warning_count = len(result.warnings)
    if error_count == 0 and warning_count == 0:
        return "Configuration is valid. No errors or warnings found."

    parts = []
    if error_count:
        parts.append(f"{error_count} error{'' if error_count == 1 else 's'}")
    if warning_count:
        parts.append(f"{warning_count} warning{'' if warning_count == 1 else 's'}")
    return f"{', '.join(parts)} found."


def format_errors(result: ValidationResult) -> list[str]:
    return [f"[ERROR] {_path_str(error.path)}: {error.message}" for error in result.errors]


def format_warnings(result: ValidationResult) -> list[str]:
    return [f"[WARNING] {_path_str(warning.path)}: {warning.message}" for warning in result.warnings]


def format_validation_failure(result: ValidationResult) -> str:
    """Build the aggregated multi-line message for a rejected configuration."""
    message = "Configuration validation failed:\n" + "\n".join(format_errors(result))
    warnings = format_warnings(result)
    if warnings:
        message += "\n\nWarnings:\n" + "\n".join(warnings)
    return message
