"""Tests for settings loading."""

from pathlib import Path

import pytest

from eduplatform.config import DEFAULT_DB_PATH, Settings, load_settings
from eduplatform.errors import ValidationError


class TestLoadSettings:

    def test_defaults(self):
        settings = load_settings(environ={})
        assert settings.storage == "sqlite"
        assert settings.db_path == DEFAULT_DB_PATH
        assert settings.log_level == "INFO"
        assert settings.seed_file is None

    def test_from_environ(self, tmp_path):
        settings = load_settings(environ={
            "EDUPLATFORM_STORAGE": "memory",
            "EDUPLATFORM_DB_PATH": str(tmp_path / "x.db"),
            "EDUPLATFORM_LOG_LEVEL": "debug",
            "UNRELATED": "1",
        })
        assert settings.storage == "memory"
        assert settings.db_path == tmp_path / "x.db"
        assert settings.log_level == "DEBUG"

    def test_env_file_loses_to_environ(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("EDUPLATFORM_STORAGE=memory\nEDUPLATFORM_LOG_LEVEL=WARNING\n")
        settings = load_settings(env_file=env_file, environ={"EDUPLATFORM_LOG_LEVEL": "ERROR"})
        assert settings.storage == "memory"
        assert settings.log_level == "ERROR"

    def test_invalid_storage(self):
        with pytest.raises(ValidationError):
            load_settings(environ={"EDUPLATFORM_STORAGE": "redis"})

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            load_settings(environ={"EDUPLATFORM_LOG_LEVEL": "LOUD"})

    def test_db_path_expands_user(self):
        assert Settings(db_path=Path("~/x.db")).db_path == Path.home() / "x.db"
