"""Tests for gitorg.config."""

from __future__ import annotations

import os
from unittest.mock import patch

from gitorg.config import DEFAULT_BASE_URL, DEFAULT_PER_PAGE, Config

ENV_KEYS = [
    "GITORG_GITHUB_TOKEN",
    "GITORG_ORGANIZATION",
    "GITORG_ALL_PAGES",
    "GITORG_PER_PAGE",
    "GITORG_BASE_URL",
]


def _clean_env() -> dict[str, str]:
    return {k: v for k, v in os.environ.items() if k not in ENV_KEYS}


class TestConfigDefaults:
    def test_default_values(self):
        config = Config()
        assert config.github_token == ""
        assert config.organization == ""
        assert config.all_pages is False
        assert config.per_page == DEFAULT_PER_PAGE
        assert config.base_url == DEFAULT_BASE_URL


class TestConfigLoad:
    def test_load_from_env(self):
        env = {
            "GITORG_GITHUB_TOKEN": "ghp_test123",
            "GITORG_ORGANIZATION": "acme",
            "GITORG_ALL_PAGES": "true",
            "GITORG_PER_PAGE": "100",
        }
        with patch.dict(os.environ, env, clear=False):
            config = Config.load()
        assert config.github_token == "ghp_test123"
        assert config.organization == "acme"
        assert config.all_pages is True
        assert config.per_page == 100

    def test_load_defaults_when_env_empty(self):
        with patch.dict(os.environ, _clean_env(), clear=True):
            config = Config.load()
        assert config.github_token == ""
        assert config.organization == ""
        assert config.all_pages is False
        assert config.per_page == DEFAULT_PER_PAGE

    def test_all_pages_accepts_common_truthy_spellings(self):
        for value in ("1", "yes", "ON", " True "):
            env = _clean_env() | {"GITORG_ALL_PAGES": value}
            with patch.dict(os.environ, env, clear=True):
                assert Config.load().all_pages is True

    def test_all_pages_falsy_values(self):
        for value in ("0", "no", "false", ""):
            env = _clean_env() | {"GITORG_ALL_PAGES": value}
            with patch.dict(os.environ, env, clear=True):
                assert Config.load().all_pages is False

    def test_invalid_per_page_falls_back_to_default(self):
        for value in ("abc", "0", "-5"):
            env = _clean_env() | {"GITORG_PER_PAGE": value}
            with patch.dict(os.environ, env, clear=True):
                assert Config.load().per_page == DEFAULT_PER_PAGE

    def test_per_page_tolerates_surrounding_whitespace(self):
        env = _clean_env() | {"GITORG_PER_PAGE": " 50 "}
        with patch.dict(os.environ, env, clear=True):
            assert Config.load().per_page == 50

    def test_base_url_for_enterprise(self):
        env = _clean_env() | {"GITORG_BASE_URL": "https://ghe.example.com/api/v3"}
        with patch.dict(os.environ, env, clear=True):
            assert Config.load().base_url == "https://ghe.example.com/api/v3"

    def test_blank_base_url_uses_public_api(self):
        env = _clean_env() | {"GITORG_BASE_URL": "  "}
        with patch.dict(os.environ, env, clear=True):
            assert Config.load().base_url == DEFAULT_BASE_URL


class TestConfigValidate:
    def test_validate_all_missing(self):
        issues = Config().validate()
        assert len(issues) == 2
        assert any("GitHub token" in i for i in issues)
        assert any("Organization" in i for i in issues)

    def test_validate_all_present(self):
        config = Config(github_token="ghp_xxx", organization="acme")
        assert config.validate() == []

    def test_validate_partial(self):
        issues = Config(github_token="ghp_xxx").validate()
        assert len(issues) == 1
        assert "Organization" in issues[0]
