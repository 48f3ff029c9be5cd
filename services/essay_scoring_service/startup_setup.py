"""Startup and shutdown logic for the Essay Scoring Service."""

from __future__ import annotations

from uuid import uuid4

from corretor_service_libs.error_handling import (
    raise_configuration_error,
    raise_connection_error,
)
from corretor_service_libs.logging_utils import create_service_logger
from dishka import AsyncContainer, make_async_container
from prometheus_client import CollectorRegistry, Counter, Histogram
from quart import Quart

from services.essay_scoring_service.config import Settings
from services.essay_scoring_service.di import EssayScoringServiceProvider
from services.essay_scoring_service.protocols import EssayRepositoryProtocol

SERVICE_NAME = "essay_scoring_service"

# Global reference for DI container, managed by app.py
_app_container_ref: AsyncContainer | None = None


def create_di_container() -> AsyncContainer:
    """Creates and returns the DI AsyncContainer."""
    global _app_container_ref
    logger = create_service_logger("essay_scoring.startup")
    container = make_async_container(EssayScoringServiceProvider())
    _app_container_ref = container  # Keep a reference for shutdown
    logger.info("DI AsyncContainer created.")
    return container


def validate_settings(settings: Settings) -> None:
    """Fail fast on configuration the service cannot run without."""
    if not settings.USE_MOCK_SCORING_CLIENT and not settings.GEMINI_API_KEY.get_secret_value():
        raise_configuration_error(
            service=SERVICE_NAME,
            operation="validate_settings",
            config_key="GEMINI_API_KEY",
            message="GEMINI_API_KEY is not defined in the environment",
            correlation_id=uuid4(),
        )

    try:
        _ = settings.DATABASE_URL
    except ValueError as e:
        raise_configuration_error(
            service=SERVICE_NAME,
            operation="validate_settings",
            config_key="DB_USER",
            message=str(e),
            correlation_id=uuid4(),
        )


async def initialize_services(app: Quart, settings: Settings, container: AsyncContainer) -> None:
    """Validate configuration, verify the database and seed the default user.

    Any failure here is fatal: the exception propagates out of before_serving
    and the server process stops.
    """
    logger = create_service_logger("essay_scoring.startup")

    try:
        validate_settings(settings)

        registry = await container.get(CollectorRegistry)
        app.extensions = getattr(app, "extensions", {})
        app.extensions["metrics"] = _create_metrics(registry)

        repository = await container.get(EssayRepositoryProtocol)
        try:
            await repository.check_connectivity()
        except Exception as e:
            raise_connection_error(
                service=SERVICE_NAME,
                operation="initialize_services",
                target="database",
                message=f"Could not connect to the database: {e}",
                correlation_id=uuid4(),
            )
        logger.info("Database connection established")

        await repository.ensure_user(
            settings.DEFAULT_USER_ID,
            settings.DEFAULT_USER_NAME,
            settings.DEFAULT_USER_EMAIL,
        )
        logger.info("Essay Scoring Service initialized successfully.")
    except Exception as e:
        logger.critical(f"Failed to initialize Essay Scoring Service: {e}", exc_info=True)
        raise


async def shutdown_services() -> None:
    """Gracefully shutdown the service's DI container."""
    global _app_container_ref
    logger = create_service_logger("essay_scoring.startup")

    try:
        if _app_container_ref:
            await _app_container_ref.close()
            logger.info("Essay Scoring Service DI container closed")

        logger.info("Essay Scoring Service shutdown completed")
    except Exception as e:
        logger.error(f"Error during Essay Scoring Service shutdown: {e}", exc_info=True)


def _create_metrics(registry: CollectorRegistry) -> dict:
    """Create Prometheus metrics instances for HTTP middleware."""
    return {
        "http_requests_total": Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status_code"],
            registry=registry,
        ),
        "http_request_duration_seconds": Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            registry=registry,
        ),
    }
