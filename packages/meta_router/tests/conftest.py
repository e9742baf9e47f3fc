from __future__ import annotations

from pathlib import Path

import pytest

from meta_router.models.config import (
    AlwaysMatcher,
    ConfigOverrides,
    KeywordMatcher,
    MetaAgentDefinition,
    RoutingRule,
)


@pytest.fixture(autouse=True)
def _set_required_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("META_ROUTER_USER_CONFIG_DIR", str(tmp_path / "user"))
    monkeypatch.setenv("META_ROUTER_PROJECT_DIR", str(tmp_path / "project"))
    monkeypatch.setenv("META_ROUTER_CONFIG_FILE", "meta_router.toml")
    for name in (
        "META_ROUTER_VALIDATE",
        "META_ROUTER_CHECK_CIRCULAR",
        "META_ROUTER_CHECK_REFERENCES",
        "META_ROUTER_CHECK_REGEX",
    ):
        monkeypatch.setenv(name, "true")


@pytest.fixture
def atenea() -> MetaAgentDefinition:
    """Planner meta-agent routing to built-in agents."""
    return MetaAgentDefinition(
        base_model="claude-3-5-sonnet",
        delegates_to=["oracle", "prometheus", "explore"],
        temperature=0.3,
        prompt_template="You coordinate planning work.",
        routing_rules=[
            RoutingRule(
                matcher=KeywordMatcher(keywords=["plan", "roadmap"], mode="any"),
                target_agent="prometheus",
                config_overrides=ConfigOverrides(model="claude-opus", temperature=0.0),
            ),
            RoutingRule(
                matcher=KeywordMatcher(keywords=["search", "find"], mode="any"),
                target_agent="explore",
                config_overrides=ConfigOverrides(variant="fast"),
            ),
            RoutingRule(matcher=AlwaysMatcher(), target_agent="oracle"),
        ],
    )
