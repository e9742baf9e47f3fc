"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from meta_router.config.config_paths import (
    get_config_paths,
    get_project_config_path,
    get_user_config_path,
)
from meta_router.models.settings import Settings, load_settings


def test_settings_defaults():
    settings = Settings()
    assert settings.user_config_dir == "~/.config/meta_router"
    assert settings.config_file == "meta_router.toml"
    assert settings.validate_config


def test_load_settings_reads_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("META_ROUTER_CHECK_REGEX", "false")
    settings = load_settings()
    assert settings.user_config_dir == str(tmp_path / "user")
    assert settings.project_dir == str(tmp_path / "project")
    assert not settings.check_regex_performance
    assert settings.check_circular_dependencies


def test_config_file_must_be_toml(monkeypatch):
    monkeypatch.setenv("META_ROUTER_CONFIG_FILE", "meta_router.json")
    with pytest.raises(ValueError, match=r"\.toml"):
        load_settings()


def test_config_paths(tmp_path):
    settings = load_settings()
    user = get_user_config_path(settings)
    project = get_project_config_path(settings)
    assert user == tmp_path / "user" / "meta_router.toml"
    assert project == tmp_path / "project" / "meta_router.toml"
    assert get_config_paths(settings) == []

    project.parent.mkdir(parents=True)
    project.write_text("", encoding="utf-8")
    user.parent.mkdir(parents=True)
    user.write_text("", encoding="utf-8")
    assert get_config_paths(settings) == [user, project]
    assert get_project_config_path(settings, tmp_path / "elsewhere") == (
        tmp_path / "elsewhere" / "meta_router.toml"
    )
