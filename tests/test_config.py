"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest

from agent_state.config.loader import load_config
from agent_state.validation import ConfigurationError


class TestLoadConfig:
    """Tests for environment-based configuration."""

    def test_defaults(self):
        config = load_config({})

        assert config.root == Path("/etc/tedge")
        assert config.log_level == "INFO"
        assert config.log_format == "text"

    def test_root_from_env(self, tmp_path):
        config = load_config({"AGENT_STATE_ROOT": str(tmp_path)})
        assert config.root == tmp_path

    def test_empty_root_uses_default(self):
        config = load_config({"AGENT_STATE_ROOT": ""})
        assert config.root == Path("/etc/tedge")

    def test_log_settings_normalized(self):
        config = load_config({"LOG_LEVEL": "debug", "LOG_FORMAT": "JSON"})

        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_invalid_log_format(self):
        with pytest.raises(ConfigurationError):
            load_config({"LOG_FORMAT": "xml"})

    def test_reads_os_environ(self, monkeypatch, tmp_path):
        monkeypatch.setenv("AGENT_STATE_ROOT", str(tmp_path))
        assert load_config().root == tmp_path
