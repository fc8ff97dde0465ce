"""
Notes Functions Backend - Application Configuration
=====================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads environment variables (or a .env file),
       validates types, and exposes a frozen `settings` snapshot.
Who:   Reached by handlers through the `get_settings` dependency, so tests
       can swap in their own `Settings` instance.
When:  Built once per process (cold start); never mutated afterwards.

Environment contract:
    OPENAI_API_KEY / openai_key     Summarization API key (first one set wins)
    USE_MOCK_OPENAI                 "1" (or true/yes/on) forces the mock summarizer
    FUNCTIONS_EMULATOR              "true" when running under the local emulator
    FIREBASE_AUTH_EMULATOR_HOST     set by the emulator suite
    FIRESTORE_EMULATOR_HOST         set by the emulator suite
"""

from typing import Any, List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MOCK_FLAG_ON_VALUES = {"1", "true", "yes", "on"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development. A deployment
    that should call the live summarization API MUST provide OPENAI_API_KEY.

    Attributes are grouped by concern for readability.
    """

    # ── Summarization backend ─────────────────────────────────────────────
    # Two names are accepted: the secret name used by the hosting platform
    # and the lowercase name used by older local .env files.
    openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("openai_api_key", "OPENAI_API_KEY", "openai_key"),
        description="API key for the chat completions endpoint",
    )

    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL of the OpenAI-compatible API",
    )

    # Lenient: unrecognised values read as False instead of failing startup
    use_mock_openai: bool = Field(
        default=False,
        description="Always use the local mock summarizer, never the live API",
    )

    @field_validator("use_mock_openai", mode="before")
    @classmethod
    def parse_mock_flag(cls, v: Any) -> bool:
        """Only 1/true/yes/on enable the mock; any other value means off."""
        if isinstance(v, bool):
            return v
        return str(v).strip().lower() in MOCK_FLAG_ON_VALUES

    # ── Emulator detection ────────────────────────────────────────────────
    functions_emulator: str = Field(default="")
    firebase_auth_emulator_host: str = Field(default="")
    firestore_emulator_host: str = Field(default="")

    # ── Firebase ──────────────────────────────────────────────────────────
    # What: Service account JSON for the Admin SDK
    # None: fall back to Application Default Credentials (the hosted default)
    firebase_service_account: Optional[str] = Field(default=None)
    firebase_project_id: Optional[str] = Field(default=None)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated origins, "*" for any
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(
        default=8080,
        ge=1024,
        le=65535,
        validation_alias=AliasChoices("backend_port", "PORT"),
    )

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
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_ignore_empty=True,  # VAR= behaves like VAR unset
        extra="ignore",
        frozen=True,
    )

    # ── Derived flags ─────────────────────────────────────────────────────

    @property
    def is_emulator(self) -> bool:
        """True when any of the three emulator variables is set."""
        return (
            self.functions_emulator.strip().lower() == "true"
            or bool(self.firebase_auth_emulator_host)
            or bool(self.firestore_emulator_host)
        )

    @property
    def has_openai_key(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def should_mock_summaries(self) -> bool:
        """
        Whether summaries come from the local mock instead of the live API.

        Forced by USE_MOCK_OPENAI, or implied when running under the emulator
        without a key.
        """
        return self.use_mock_openai or (self.is_emulator and not self.has_openai_key)

    def describe_problems(self) -> List[str]:
        """
        What:  Lists configuration problems worth reporting at startup.
        When:  Called during app startup (lifespan).
        How:   Returns human-readable messages; an empty list means all good.
               The service keeps running either way: /helloWorld, /getUserNotes
               and the mock path do not need the key.
        """
        problems = []
        if not self.has_openai_key and not self.should_mock_summaries:
            problems.append(
                "OPENAI_API_KEY is not set; /summarizeNote will answer 500 "
                "until a key is configured or USE_MOCK_OPENAI=1."
            )
        return problems


# Singleton instance, built at cold start
settings = Settings()
