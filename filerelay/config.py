"""
FileRelay: Application Configuration
======================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; the API key is checked before the
       server starts accepting requests.

The only required value is the Google Generative AI key. It is accepted
under either GOOGLE_GENERATIVE_AI_KEY or GEMINI_API_KEY.
"""

from typing import List

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

from filerelay.exceptions import ConfigurationError


DEFAULT_PROMPT = "What's in this file? Explain in 10 points."


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Everything except the API key has a usable default.
    """

    # ── Google Gemini ─────────────────────────────────────────────────────
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("GOOGLE_GENERATIVE_AI_KEY", "GEMINI_API_KEY"),
        description="Google Generative AI API key",
    )

    # Options: gemini-1.5-flash (faster, cheaper), gemini-1.5-pro (higher quality)
    gemini_model: str = Field(default="gemini-1.5-flash")

    # Instruction sent alongside every uploaded file. Fixed for the lifetime
    # of the process; callers cannot override it per request.
    relay_prompt: str = Field(default=DEFAULT_PROMPT, min_length=1)

    # ── Uploads ───────────────────────────────────────────────────────────
    # 10MB = 10 * 1024 * 1024 = 10485760 (inclusive)
    max_file_size: int = Field(default=10_485_760, ge=1)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins, "*" allows any
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def has_api_key(self) -> bool:
        return bool(self.gemini_api_key.strip())

    def validate_required(self) -> None:
        """
        What:  Validates that the API key is configured.
        When:  Called by the process entry point and the app lifespan.
        Raises: ConfigurationError naming the missing variable.
        """
        if not self.has_api_key:
            raise ConfigurationError(
                "Google Generative AI API key is missing. "
                "Set GOOGLE_GENERATIVE_AI_KEY (or GEMINI_API_KEY) in the environment.",
                context={"setting": "gemini_api_key"},
            )


# Singleton instance, imported throughout the application
settings = Settings()
