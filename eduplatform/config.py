"""
Configuration for EduPlatform.

Settings come from environment variables, with a ``.env`` file in the
project root loaded first (existing environment variables win):

    EDUPLATFORM_STORAGE     sqlite | memory (default: sqlite)
    EDUPLATFORM_DB_PATH     SQLite file (default: ~/.eduplatform/platform.db)
    EDUPLATFORM_LOG_LEVEL   logging level name (default: INFO)
    EDUPLATFORM_SEED_FILE   optional YAML catalog loaded into an empty store
"""

import logging
import os
from pathlib import Path
from typing import Literal, Mapping, Optional

import pydantic
from dotenv import dotenv_values, load_dotenv
from pydantic import BaseModel, field_validator

from eduplatform.errors import ValidationError


PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_DATA_DIR = Path.home() / ".eduplatform"
DEFAULT_DB_PATH = DEFAULT_DATA_DIR / "platform.db"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

ENV_PREFIX = "EDUPLATFORM_"


class Settings(BaseModel):
    storage: Literal["sqlite", "memory"] = "sqlite"
    db_path: Path = DEFAULT_DB_PATH
    log_level: str = "INFO"
    seed_file: Optional[Path] = None

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level

    @field_validator("db_path")
    @classmethod
    def expand_db_path(cls, v: Path) -> Path:
        return v.expanduser()


def load_settings(
    env_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Build Settings from the environment.

    Args:
        env_file: .env file to read (default: PROJECT_ROOT/.env)
        environ: Explicit variables instead of os.environ; the env file is
            then read without touching os.environ

    Raises:
        ValidationError: a variable has an invalid value
    """
    if environ is None:
        load_dotenv(env_file or PROJECT_ROOT / ".env")
        environ = os.environ
    elif env_file:
        environ = {**dotenv_values(env_file), **environ}

    values = {
        key[len(ENV_PREFIX):].lower(): value
        for key, value in environ.items()
        if key.startswith(ENV_PREFIX) and value not in (None, "")
    }
    try:
        return Settings(**{k: v for k, v in values.items() if k in Settings.model_fields})
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid configuration: {e}") from e


def configure_logging(level: str = "INFO"):
    """Set up root logging the same way for the app and scripts."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
