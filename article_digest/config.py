"""
Configuration for article-digest.

Provides environment-based configuration with Pydantic settings. Settings are
read once and handed to the factories in ``article_digest.pipeline``; no
component reads the environment on its own.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from pydantic import AliasChoices, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUMMARY_STYLES = ("brief", "balanced", "detailed", "bulletpoints")
LOG_FORMATS = ("json", "text")


class ProviderSettings(BaseModel):
    """Remote provider endpoints.

    Override with nested variables, e.g. ``PROVIDERS__TIMEOUT=30``.
    """

    extractor_base_url: str = "https://article-extractor-and-summarizer.p.rapidapi.com"
    chat_base_url: str = "https://open-ai21.p.rapidapi.com"
    openai_base_url: str = "https://api.openai.com"
    openai_model: str = "gpt-4o-mini"
    timeout: float = 60.0

    @field_validator("extractor_base_url", "chat_base_url", "openai_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @staticmethod
    def host_of(base_url: str) -> str:
        """Host name used for the ``X-RapidAPI-Host`` header."""
        return urlparse(base_url).hostname or ""


class DigestSettings(BaseSettings):
    """Settings for the article processing pipeline."""

    # Credentials
    rapidapi_key: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices(
            "rapidapi_key",
            "RAPIDAPI_KEY",
            "RAPID_API_ARTICLE_KEY",
            "VITE_RAPID_API_ARTICLE_KEY",
        ),
        description="Primary credential; gates chat-completion features",
    )
    openai_api_key: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices(
            "openai_api_key", "OPENAI_API_KEY", "VITE_OPENAI_API_KEY"
        ),
        description="Optional secondary chat-completion credential",
    )

    # Defaults for processing requests
    default_style: str = Field(
        default="balanced",
        validation_alias=AliasChoices("default_style", "SUMMARY_STYLE"),
    )
    default_language: str = Field(
        default="en",
        validation_alias=AliasChoices("default_language", "SUMMARY_LANGUAGE"),
    )

    # Local history
    data_dir: Path = Field(
        default=Path.home() / ".article-digest",
        validation_alias=AliasChoices("data_dir", "DATA_DIR"),
    )
    history_limit: int = Field(
        default=20,
        ge=1,
        validation_alias=AliasChoices("history_limit", "HISTORY_LIMIT"),
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("log_level", "LOG_LEVEL"),
    )
    log_format: str = Field(
        default="text",
        validation_alias=AliasChoices("log_format", "LOG_FORMAT"),
        description="Log format: 'json' or 'text'",
    )

    providers: ProviderSettings = Field(default_factory=ProviderSettings)

    @field_validator("rapidapi_key", "openai_api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("default_style")
    @classmethod
    def _check_style(cls, v: str) -> str:
        style = v.strip().lower()
        if style not in SUMMARY_STYLES:
            raise ValueError(f"style must be one of {', '.join(SUMMARY_STYLES)}")
        return style

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, v: str) -> str:
        fmt = v.strip().lower()
        if fmt not in LOG_FORMATS:
            raise ValueError("log_format must be 'json' or 'text'")
        return fmt

    @property
    def has_credential(self) -> bool:
        """True when the primary provider credential is configured."""
        return self.rapidapi_key is not None

    @property
    def has_secondary_credential(self) -> bool:
        return self.openai_api_key is not None

    @property
    def history_path(self) -> Path:
        """Location of the local JSON history file."""
        return self.data_dir / "history.json"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
        populate_by_name=True,
    )


@lru_cache
def get_settings() -> DigestSettings:
    """Get cached settings instance."""
    return DigestSettings()


def configure_logging(settings: Optional[DigestSettings] = None) -> None:
    """Configure logging based on settings.

    Args:
        settings: Optional settings instance, uses cached settings if not provided
    """
    import logging
    import sys

    if settings is None:
        settings = get_settings()

    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if settings.log_format == "json":
        import json

        reserved = set(vars(logging.makeLogRecord({})))

        class JSONFormatter(logging.Formatter):
            def format(self, record):
                log_record = {
                    "timestamp": self.formatTime(record),
                    "level": record.levelname,
                    "logger": record.name,
                    "message": record.getMessage(),
                }
                # Fields passed through ``extra=``
                for key, value in vars(record).items():
                    if key not in reserved and key not in log_record:
                        log_record[key] = value
                if record.exc_info:
                    log_record["exception"] = self.formatException(record.exc_info)
                return json.dumps(log_record, default=str)

        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    root_logger.addHandler(handler)

    # Third-party loggers are noisy at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
