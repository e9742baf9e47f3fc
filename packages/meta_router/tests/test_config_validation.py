"""Unit tests for semantic configuration validation."""

from __future__ import annotations

import pytest

from meta_router.config.validator import (
    BUILTIN_AGENT_NAMES,
    ConfigValidator,
    analyze_regex_pattern,
    check_agent_references,
    check_circular_dependencies,
    check_regex_performance,
    format_errors,
    format_validation_failure,
    format_warnings,
    get_validation_summary,
)
from meta_router.models.config import (
    AlwaysMatcher,
    MetaAgentDefinition,
    RegexMatcher,
    RouterConfig,
    RouterSettings,
    RoutingRule,
)
from meta_router.models.validation import (
    CircularDependencyError,
    InvalidAgentReferenceError,
    ValidationResult,
)


def _agent(delegates: list[str], targets: list[str] | None = None, **kwargs) -> MetaAgentDefinition:
    rules = [RoutingRule(matcher=AlwaysMatcher(), target_agent=t) for t in (targets or [])]
    return MetaAgentDefinition(base_model="m", delegates_to=delegates, routing_rules=rules, **kwargs)


def _regex_agent(*patterns: str) -> MetaAgentDefinition:
    rules = [RoutingRule(matcher=RegexMatcher(pattern=p), target_agent="oracle") for p in patterns]
    return MetaAgentDefinition(base_model="m", delegates_to=["oracle"], routing_rules=rules)


class TestCircularDependencies:
    """Circular dependency detection over the whole configuration."""

    def test_mutual_delegation_reports_one_error(self):
        meta_agents = {"a": _agent(["b"], ["b"]), "b": _agent(["a"], ["a"])}
        errors = check_circular_dependencies(meta_agents, max_depth=3)
        assert len(errors) == 1
        assert isinstance(errors[0], CircularDependencyError)
        assert set(errors[0].agents) == {"a", "b"}
        assert errors[0].path == ["meta_agents", "a", "delegates_to", "0"]
        assert "a -> b -> a" in errors[0].message

    def test_acyclic_configuration_passes(self):
        meta_agents = {"a": _agent(["b", "oracle"]), "b": _agent(["explore"], ["explore"])}
        assert check_circular_dependencies(meta_agents) == []

    def test_self_delegation_reported(self):
        errors = check_circular_dependencies({"a": _agent(["a"])})
        assert len(errors) == 1
        assert errors[0].agents == ["a", "a"]

    def test_cycle_through_rule_target_has_rule_path(self):
        meta_agents = {"a": _agent(["oracle"], ["b"]), "b": _agent(["a"])}
        errors = check_circular_dependencies(meta_agents)
        assert len(errors) == 1
        assert errors[0].path == ["meta_agents", "a", "routing_rules", "0", "target_agent"]

    def test_cycle_longer_than_depth_is_accepted(self):
        meta_agents = {
            "a": _agent(["b"]),
            "b": _agent(["c"]),
            "c": _agent(["d"]),
            "d": _agent(["a"]),
        }
        assert check_circular_dependencies(meta_agents, max_depth=3) == []
        assert len(check_circular_dependencies(meta_agents, max_depth=4)) > 0

    def test_empty_configuration(self):
        assert check_circular_dependencies({}) == []


class TestAgentReferences:
    def test_unknown_delegate_reported_once(self):
        errors = check_agent_references({"r": _agent(["ghost"])})
        assert len(errors) == 1
        assert isinstance(errors[0], InvalidAgentReferenceError)
        assert errors[0].reference == "ghost"
        assert errors[0].path == ["meta_agents", "r", "delegates_to", "0"]

    def test_unknown_rule_target_reported(self):
        errors = check_agent_references({"r": _agent(["oracle"], ["oracle", "phantom"])})
        assert [e.reference for e in errors] == ["phantom"]
        assert errors[0].path == ["meta_agents", "r", "routing_rules", "1", "target_agent"]

    def test_declared_meta_agents_are_valid_targets(self):
        meta_agents = {"a": _agent(["b"], ["b"]), "b": _agent(["oracle"])}
        assert check_agent_references(meta_agents) == []

    def test_all_builtin_names_are_valid(self):
        assert check_agent_references({"a": _agent(list(BUILTIN_AGENT_NAMES))}) == []

    def test_custom_builtin_names(self):
        errors = check_agent_references({"a": _agent(["oracle"])}, builtin_agents=["coder"])
        assert [e.reference for e in errors] == ["oracle"]


class TestRegexPerformance:
    @pytest.mark.parametrize(
        ("pattern", "fragment"),
        [
            (r"(?=\w+)foo", "lookaheads"),
            (r"(a+)+b", "Nested quantifiers"),
            (r"foo|foo", "Overlapping alternation"),
            (r"^.*error", "Unbounded"),
            (r"[a-z]{20,}", "Large repetition"),
            (r"(a)\1", "Backreferences"),
            (r"a|b|c|d|e|f|g|h|i|j", "Many alternations"),
        ],
    )
    def test_heuristics(self, pattern, fragment):
        reason = analyze_regex_pattern(pattern)
        assert reason is not None
        assert fragment in reason

    @pytest.mark.parametrize("pattern", [r"bug\s#\d+", r"^deploy", r"(api|sdk) docs"])
    def test_safe_patterns(self, pattern):
        assert analyze_regex_pattern(pattern) is None

    def test_one_warning_per_flagged_pattern(self):
        warnings = check_regex_performance({"a": _regex_agent(r"(a+)+", r"^deploy", r"x.*.*y")})
        assert len(warnings) == 2
        assert warnings[0].path == ["meta_agents", "a", "routing_rules", "0", "matcher", "pattern"]
        assert warnings[1].pattern == r"x.*.*y"


class TestConfigValidator:
    """Aggregated validation results."""

    def test_empty_configuration_is_valid(self):
        result = ConfigValidator().validate(RouterConfig())
        assert result.valid
        assert result.errors == []
        assert result.warnings == []

    def test_errors_are_collected_from_all_checks(self):
        config = RouterConfig(
            meta_agents={
                "a": _agent(["b"], ["b"]),
                "b": _agent(["a", "ghost"], ["a"]),
            }
        )
        result = ConfigValidator().validate(config)
        assert not result.valid
        assert sorted(error.type for error in result.errors) == [
            "circular_dependency",
            "invalid_agent_reference",
        ]

    def test_warnings_do_not_affect_validity(self):
        config = RouterConfig(meta_agents={"a": _regex_agent(r"(a+)+b")})
        result = ConfigValidator().validate(config)
        assert result.valid
        assert result.has_warnings

    def test_uses_configured_max_depth(self):
        meta_agents = {
            "a": _agent(["b"]),
            "b": _agent(["c"]),
            "c": _agent(["d"]),
            "d": _agent(["a"]),
        }
        shallow = RouterConfig(meta_agents=meta_agents)
        deep = RouterConfig(
            meta_agents=meta_agents, settings=RouterSettings(max_delegation_depth=5)
        )
        assert ConfigValidator().validate(shallow).valid
        assert not ConfigValidator().validate(deep).valid
        assert not ConfigValidator(max_depth=4).validate(shallow).valid

    @pytest.mark.parametrize("max_depth", [0, -1])
    def test_non_positive_max_depth_rejected(self, max_depth):
        with pytest.raises(ValueError, match="max_depth must be a positive integer"):
            ConfigValidator(max_depth=max_depth)

    def test_checks_can_be_disabled(self):
        config = RouterConfig(meta_agents={"a": _agent(["ghost"]), "b": _regex_agent(r"(a+)+")})
        validator = ConfigValidator(check_agent_references=False, check_regex_performance=False)
        result = validator.validate(config)
        assert result.valid
        assert result.warnings == []


class TestFormatting:
    def _result(self) -> ValidationResult:
        config = RouterConfig(meta_agents={"r": _agent(["ghost"]), "s": _regex_agent(r"(a+)+")})
        return ConfigValidator().validate(config)

    def test_summary(self):
        assert get_validation_summary(self._result()) == "1 error, 1 warning found."
        assert get_validation_summary(ValidationResult(valid=True)).startswith(
            "Configuration is valid"
        )

    def test_format_errors_and_warnings(self):
        result = self._result()
        assert format_errors(result)[0].startswith("[ERROR] meta_agents.r.delegates_to.0: ")
        assert format_warnings(result)[0].startswith("[WARNING] meta_agents.s.routing_rules.0")

    def test_failure_message_lists_errors_then_warnings(self):
        message = format_validation_failure(self._result())
        assert message.startswith("Configuration validation failed:\n[ERROR]")
        assert "\n\nWarnings:\n[WARNING]" in message

    def test_empty_path_formats_as_root(self):
        result = ValidationResult(
            valid=False,
            errors=[InvalidAgentReferenceError(message="bad", reference="x")],
        )
        assert format_errors(result) == ["[ERROR] root: bad"]
