"""Service configuration loaded from environment variables.

``main.py`` calls ``load_dotenv()`` before the settings are read, so values may
come from the process environment or a local ``.env`` file.
"""

import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from engine.seed import (
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_HOME,
    DEFAULT_PATH,
    DEFAULT_USER,
)

ENV_PREFIX = "VSHELL_"


class ServiceSettings(BaseModel):
    """Settings for the vshell service.

    Attributes:
        home: Home directory and initial working directory of new sessions.
        user: ``$USER`` of new sessions.
        path: ``$PATH`` of new sessions.
        max_sessions: Maximum number of live sessions.
        history_limit: History entries kept per session.
        log_level: Root logging level name.
    """

    home: str = Field(default=DEFAULT_HOME, description="Home directory")
    user: str = Field(default=DEFAULT_USER, description="Value of $USER")
    path: str = Field(default=DEFAULT_PATH, description="Value of $PATH")
    max_sessions: int = Field(default=100, ge=1, description="Session limit")
    history_limit: int = Field(
        default=DEFAULT_HISTORY_LIMIT, ge=1, description="History entries kept"
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    class Config:
        frozen = True

    @field_validator("home")
    @classmethod
    def validate_home(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"home must be an absolute path, got '{value}'")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level '{value}'")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServiceSettings":
        """Build settings from ``VSHELL_*`` variables.

        Args:
            environ: Mapping to read (defaults to ``os.environ``).

        Returns:
            The parsed settings; unset variables keep their defaults.

        Raises:
            ValueError: If any variable holds an invalid value.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw != "":
                values[name] = raw

        try:
            return cls(**values)
        except ValidationError as e:
            raise ValueError(f"Invalid vshell configuration: {e}") from e
