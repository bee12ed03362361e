"""Settings for contact-curator.

Configuration is read from ``CURATOR_*`` environment variables and an
optional ``.env`` file, validated once by pydantic and cached.

Examples:
    >>> from contact_curator.core.settings import get_settings
    >>> settings = get_settings()
    >>> settings.related_heading
    'Related'

Tags:
    settings, configuration, pydantic, environment, contact-curator

Doc-Types:
    api-reference
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from contact_curator.core.errors import ConfigError


class CuratorSettings(BaseSettings):
    """Settings shared by the curator pipeline, processors and CLI.

    Fields
    ──────
    log_level           : Structlog log level
    log_format          : ``console`` or ``json`` renderer
    failure_policy      : ``stop`` halts a contact's remaining processors
                          after a failure, ``continue`` runs them anyway
    uid_field           : Structured field holding the contact identifier
    gender_field        : Structured field holding the contact's gender
    related_heading     : Heading text of the relationship list section
    disabled_processors : Processor names the runner skips
    """

    model_config = SettingsConfigDict(
        env_prefix="CURATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"

    # ── Pipeline ─────────────────────────────────────────────────
    failure_policy: Literal["stop", "continue"] = "stop"
    disabled_processors: list[str] = Field(default_factory=list)

    # ── Contact layout ───────────────────────────────────────────
    uid_field: str = "UID"
    gender_field: str = "GENDER"
    related_heading: str = "Related"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("log_format", "failure_policy", mode="before")
    @classmethod
    def _lower_choice(cls, value: object) -> object:
        if isinstance(value, str):
            return value.lower()
        return value

    @field_validator("uid_field", "gender_field", "related_heading")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


@lru_cache(maxsize=1)
def _cached_settings() -> CuratorSettings:
    return load_settings()


def load_settings(**overrides: object) -> CuratorSettings:
    """Build a fresh, uncached settings object.

    Raises:
        ConfigError: If environment values or overrides fail validation.
    """
    try:
        return CuratorSettings(**overrides)
    except ValidationError as exc:
        raise ConfigError(f"Invalid curator settings: {exc}", cause=exc) from exc


def get_settings(*, _force_reload: bool = False) -> CuratorSettings:
    """Return the cached process-wide settings (reload for tests)."""
    if _force_reload:
        _cached_settings.cache_clear()
    return _cached_settings()


__all__ = ["CuratorSettings", "get_settings", "load_settings"]
