"""
Configuration module for the Essay Scoring Service.

Settings are loaded from .env files and environment variables. Every field
accepts the ``ESSAY_SCORING_`` prefix; the deployment's historical unprefixed
names (GEMINI_API_KEY, DB_HOST, PORT, ...) are accepted as aliases.
"""

from __future__ import annotations

from datetime import timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from corretor_service_libs.config import SecureServiceSettings, build_database_url
from dotenv import find_dotenv, load_dotenv
from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import SettingsConfigDict

# Load .env file from repository root, regardless of current working directory
load_dotenv(find_dotenv(".env"))


def _aliases(name: str) -> AliasChoices:
    return AliasChoices(f"ESSAY_SCORING_{name}", name)


class Settings(SecureServiceSettings):
    """Configuration settings for the Essay Scoring Service."""

    SERVICE_NAME: str = "essay-scoring-service"
    SERVICE_VERSION: str = "1.0.0"
    LOG_LEVEL: str = Field(default="INFO", validation_alias=_aliases("LOG_LEVEL"))

    # Quart app.run() / hypercorn parameters
    DEBUG: bool = False
    HTTP_HOST: str = Field(default="0.0.0.0", validation_alias=_aliases("HTTP_HOST"))
    HTTP_PORT: int = Field(
        default=3000,
        validation_alias=AliasChoices("ESSAY_SCORING_HTTP_PORT", "HTTP_PORT", "PORT"),
    )
    WEB_CONCURRENCY: int = 1
    CORS_ALLOW_ORIGIN: str = "*"

    # Generative model
    GEMINI_API_KEY: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=_aliases("GEMINI_API_KEY"),
        description="Google Gemini API key",
    )
    GEMINI_MODEL: str = Field(
        default="gemini-2.5-flash", validation_alias=_aliases("GEMINI_MODEL")
    )
    GEMINI_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_TIMEOUT_SECONDS: Optional[float] = Field(
        default=None,
        validation_alias=_aliases("GEMINI_TIMEOUT_SECONDS"),
        description="Total timeout for one scoring call; unset means wait indefinitely",
    )
    USE_MOCK_SCORING_CLIENT: bool = Field(
        default=False,
        validation_alias=_aliases("USE_MOCK_SCORING_CLIENT"),
        description="Score with a deterministic local stub instead of calling Gemini",
    )

    # Database
    DB_HOST: str = Field(default="localhost", validation_alias=_aliases("DB_HOST"))
    DB_PORT: int = Field(default=5432, validation_alias=_aliases("DB_PORT"))
    DB_USER: str = Field(default="", validation_alias=_aliases("DB_USER"))
    DB_PASSWORD: SecretStr = Field(default=SecretStr(""), validation_alias=_aliases("DB_PASSWORD"))
    DB_NAME: str = Field(default="corretor_redacao", validation_alias=_aliases("DB_NAME"))
    DATABASE_POOL_SIZE: int = 5
    DATABASE_MAX_OVERFLOW: int = 10
    DATABASE_POOL_PRE_PING: bool = True

    # Identity
    DEFAULT_USER_ID: int = Field(default=1, validation_alias=_aliases("DEFAULT_USER_ID"))
    DEFAULT_USER_NAME: str = "Aluno Teste"
    DEFAULT_USER_EMAIL: str = "aluno@app.com"
    TRUST_PATH_USER_ID: bool = Field(
        default=False,
        validation_alias=_aliases("TRUST_PATH_USER_ID"),
        description="Use the user id from the request path instead of DEFAULT_USER_ID",
    )

    # Dashboard dates are rendered in this timezone
    DISPLAY_TIMEZONE: str = Field(default="UTC", validation_alias=_aliases("DISPLAY_TIMEZONE"))

    @property
    def display_tzinfo(self) -> tzinfo:
        if self.DISPLAY_TIMEZONE.upper() == "UTC":
            return timezone.utc
        return ZoneInfo(self.DISPLAY_TIMEZONE)

    @property
    def DATABASE_URL(self) -> str:
        """Return the database URL; ESSAY_SCORING_DATABASE_URL overrides the parts."""
        return build_database_url(
            database_name=self.DB_NAME,
            user=self.DB_USER,
            password=self.DB_PASSWORD.get_secret_value(),
            host=self.DB_HOST,
            port=self.DB_PORT,
            override_env_var="ESSAY_SCORING_DATABASE_URL",
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="ESSAY_SCORING_",
        populate_by_name=True,
    )


# Create a single instance for the application to use
settings = Settings()
