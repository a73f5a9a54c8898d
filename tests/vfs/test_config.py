"""Tests for Settings."""

import pytest
from pydantic import ValidationError

from vfs.config import Settings
from vfs.executor import DEFAULT_SHELL
from vfs.transport import DEFAULT_EVENTS_KEY


class TestDefaults:
    def test_defaults(self):
        settings = Settings()

        assert settings.redis_url is None
        assert settings.events_key == DEFAULT_EVENTS_KEY
        assert settings.log_level == "INFO"
        assert settings.allow_exec is False
        assert settings.exec_shell == DEFAULT_SHELL


class TestValidation:
    def test_log_level_is_normalised(self):
        assert Settings(log_level=" debug ").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_empty_events_key_rejected(self):
        with pytest.raises(ValidationError):
            Settings(events_key="  ")


class TestFromEnv:
    """Tests for Settings.from_env()."""

    def test_empty_environment_gives_defaults(self):
        assert Settings.from_env({}) == Settings()

    def test_reads_all_variables(self):
        settings = Settings.from_env(
            {
                "VFS_REDIS_URL": "redis://cache:6379/2",
                "VFS_EVENTS_KEY": "team:events",
                "VFS_LOG_LEVEL": "warning",
                "VFS_ALLOW_EXEC": "true",
                "VFS_EXEC_SHELL": "/bin/bash",
            }
        )

        assert settings.redis_url == "redis://cache:6379/2"
        assert settings.events_key == "team:events"
        assert settings.log_level == "WARNING"
        assert settings.allow_exec is True
        assert settings.exec_shell == "/bin/bash"

    @pytest.mark.parametrize("value", ["1", "TRUE", "yes", " on "])
    def test_truthy_allow_exec(self, value):
        assert Settings.from_env({"VFS_ALLOW_EXEC": value}).allow_exec is True

    @pytest.mark.parametrize("value", ["0", "false", "no", "", "maybe"])
    def test_falsy_allow_exec(self, value):
        assert Settings.from_env({"VFS_ALLOW_EXEC": value}).allow_exec is False

    def test_blank_values_are_ignored(self):
        settings = Settings.from_env({"VFS_REDIS_URL": "", "VFS_EVENTS_KEY": ""})

        assert settings.redis_url is None
        assert settings.events_key == DEFAULT_EVENTS_KEY

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("VFS_EVENTS_KEY", "from:process")

        assert Settings.from_env().events_key == "from:process"
