"""Base settings class shared by all services."""

from __future__ import annotations

from corretor_core.config_enums import Environment
from pydantic import Field
from pydantic_settings import BaseSettings


class SecureServiceSettings(BaseSettings):
    """Common settings every service inherits.

    ENVIRONMENT is read from the global, unprefixed variable so one value
    drives every service in a deployment.
    """

    SERVICE_NAME: str = "unknown-service"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        validation_alias="ENVIRONMENT",
        description="Runtime environment for the service",
    )

    def is_production(self) -> bool:
        return self.ENVIRONMENT == Environment.PRODUCTION

    def is_development(self) -> bool:
        return self.ENVIRONMENT == Environment.DEVELOPMENT
