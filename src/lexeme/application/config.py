from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from lexeme.domain import constants
from lexeme.domain.models import SchedulerConfig


def config_files() -> list[Path]:
    return [
        Path.home() / ".config/lexeme/config.toml",
        Path.home() / ".lexeme.toml",
    ]


class SchedulerSettings(BaseSettings):
    """
    Configuration model for the lexeme scheduler.
    Supports loading from:
    1. Environment variables (LEXEME_*)
    2. Config file (~/.config/lexeme/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="LEXEME_",
        extra="ignore",
    )

    # Quotas
    daily_new: int = Field(default=constants.DAILY_NEW, ge=0)
    daily_reviews: int = Field(default=constants.DAILY_REVIEWS, ge=0)

    # Learning steps in minutes
    learning_steps: list[float] = Field(default_factory=lambda: list(constants.LEARNING_STEPS_MIN))

    # Ease factor
    initial_ease: float = constants.INITIAL_EASE
    min_ease: float = Field(default=constants.MIN_EASE, gt=0)

    # Leeches
    leech_threshold: int = Field(default=constants.LEECH_THRESHOLD, ge=1)
    leech_suspend_days: int = Field(default=constants.LEECH_SUSPEND_DAYS, ge=0)

    # Legacy, informational only
    retrievability_targets: dict[str, float] = Field(
        default_factory=lambda: dict(constants.R_TARGET)
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # Find the first existing file
        toml_file = None
        for f in config_files():
            if f.exists():
                toml_file = f
                break

        # Earlier sources win: init > env > toml
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        else:
            return (
                init_settings,
                env_settings,
            )

    @field_validator("learning_steps")
    @classmethod
    def check_learning_steps(cls, v: list[float]) -> list[float]:
        if not v:
            raise ValueError("at least one learning step is required")
        if any(step <= 0 for step in v):
            raise ValueError("learning steps must be positive")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v

    @model_validator(mode="after")
    def check_ease_bounds(self) -> "SchedulerSettings":
        if self.initial_ease < self.min_ease:
            raise ValueError("initial_ease must not be below min_ease")
        return self

    def to_scheduler_config(self) -> SchedulerConfig:
        return SchedulerConfig(
            daily_new=self.daily_new,
            daily_reviews=self.daily_reviews,
            learning_steps=tuple(self.learning_steps),
            initial_ease=self.initial_ease,
            min_ease=self.min_ease,
            leech_threshold=self.leech_threshold,
            leech_suspend_days=self.leech_suspend_days,
            retrievability_targets=dict(self.retrievability_targets),
        )


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> SchedulerSettings:
    """
    Multi-layered configuration resolution.
    1. Defaults in SchedulerSettings
    2. ~/.config/lexeme/config.toml (if exists)
    3. Environment variables (LEXEME_*)
    4. cli_overrides (passed from Typer)
    """
    # Typer passes None for options the user did not set
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return SchedulerSettings(**overrides)
