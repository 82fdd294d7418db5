"""
Runtime settings, read from the environment.

    NIM_MASTERS_LOG_LEVEL          Root log level for the CLI (default WARNING)
    NIM_MASTERS_MOVE_ANIMATION_MS  Input freeze after a move (default 430)
    NIM_MASTERS_CPU_DELAY_MS       Pause before a CPU move is applied (default 1080)
    NIM_MASTERS_FRAME_MS           Tick length of the text front-end (default 16)

Game tables (board sizes, time controls, difficulties) are not settings;
they live in engine_core.state.
"""

from __future__ import annotations
import logging
import os

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError

ENV_PREFIX = "NIM_MASTERS_"

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Driver pacing and logging settings."""
    log_level: str = "WARNING"
    move_animation_ms: int = Field(default=430, ge=0)
    cpu_delay_ms: int = Field(default=1080, ge=0)
    frame_ms: int = Field(default=16, gt=0)

    model_config = {"frozen": True}

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """
        Build settings from NIM_MASTERS_* variables.

        Unset variables keep their defaults. Invalid values raise
        ConfigurationError.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is not None:
                values[name] = raw.strip()

        try:
            settings = cls(**values)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid environment settings",
                context={"errors": "; ".join(err["msg"] for err in e.errors())},
            ) from e

        logger.debug(f"Loaded settings: {settings.model_dump()}")
        return settings


def configure_logging(settings: Settings) -> None:
    """Configure the root logger for command-line use."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
