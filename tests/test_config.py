"""Tests for Settings.from_env."""

from __future__ import annotations

import logging

import pytest

from coding_agent.config import DEFAULT_BASE_URL, DEFAULT_MODEL, Settings
from coding_agent.errors import ConfigError


class TestSettings:
    def test_missing_key(self):
        with pytest.raises(ConfigError, match="GEMINI_API_KEY"):
            Settings.from_env({})

    def test_blank_key(self):
        with pytest.raises(ConfigError):
            Settings.from_env({"GEMINI_API_KEY": "   "})

    def test_defaults(self):
        s = Settings.from_env({"GEMINI_API_KEY": "k"})
        assert s.api_key == "k"
        assert s.model == DEFAULT_MODEL
        assert s.base_url == DEFAULT_BASE_URL
        assert s.timeout is None
        assert s.log_level == logging.WARNING

    def test_overrides(self):
        s = Settings.from_env({
            "GEMINI_API_KEY": "k",
            "GEMINI_MODEL": "gemini-1.5-pro",
            "GEMINI_BASE_URL": "http://local/v1/",
            "GEMINI_TIMEOUT": "2.5",
            "CODING_AGENT_LOG_LEVEL": "debug",
        })
        assert s.model == "gemini-1.5-pro"
        assert s.base_url == "http://local/v1"
        assert s.timeout == 2.5
        assert s.log_level == logging.DEBUG

    @pytest.mark.parametrize("timeout", ["soon", "0", "-1"])
    def test_bad_timeout(self, timeout):
        with pytest.raises(ConfigError, match="GEMINI_TIMEOUT"):
            Settings.from_env({"GEMINI_API_KEY": "k", "GEMINI_TIMEOUT": timeout})

    def test_bad_log_level(self):
        with pytest.raises(ConfigError, match="CODING_AGENT_LOG_LEVEL"):
            Settings.from_env({"GEMINI_API_KEY": "k", "CODING_AGENT_LOG_LEVEL": "loud"})

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        assert Settings.from_env().api_key == "from-env"
