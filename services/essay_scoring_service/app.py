"""
Corretor de Redação Essay Scoring Service Application.
"""

from __future__ import annotations

from corretor_service_libs.logging_utils import configure_service_logging, create_service_logger
from corretor_service_libs.metrics_middleware import setup_metrics_middleware
from corretor_service_libs.quart_app import CorretorApp
from quart_cors import cors
from quart_dishka import QuartDishka

from services.essay_scoring_service import startup_setup
from services.essay_scoring_service.api.dashboard_routes import dashboard_bp
from services.essay_scoring_service.api.essay_routes import essay_bp
from services.essay_scoring_service.api.health_routes import health_bp
from services.essay_scoring_service.config import settings
from services.essay_scoring_service.startup_setup import create_di_container

# Configure structured logging
configure_service_logging(
    "essay-scoring-service",
    environment=settings.ENVIRONMENT.value,
    log_level=settings.LOG_LEVEL,
)
logger = create_service_logger("essay_scoring.app")

app = CorretorApp(__name__)
cors(app, allow_origin=settings.CORS_ALLOW_ORIGIN)

# Create DI container and setup QuartDishka integration before registering blueprints
_di_container = create_di_container()
app.container = _di_container
QuartDishka(app=app, container=_di_container)


@app.before_serving
async def startup() -> None:
    """Initialize services and middleware."""
    try:
        await startup_setup.initialize_services(app, settings, _di_container)
        setup_metrics_middleware(app, logger_name="essay_scoring.metrics")
        logger.info(
            f"Essay Scoring Service listening on {settings.HTTP_HOST}:{settings.HTTP_PORT}"
        )
    except Exception as e:
        logger.critical(f"Failed to start Essay Scoring Service: {e}", exc_info=True)
        raise


@app.after_serving
async def shutdown() -> None:
    """Gracefully shutdown all services."""
    try:
        await startup_setup.shutdown_services()
        logger.info("Essay Scoring Service shutdown completed")
    except Exception as e:
        logger.error(f"Error during service shutdown: {e}", exc_info=True)


# Register Blueprints
app.register_blueprint(essay_bp)
app.register_blueprint(dashboard_bp)
app.register_blueprint(health_bp)


if __name__ == "__main__":
    app.run(debug=settings.DEBUG, host=settings.HTTP_HOST, port=settings.HTTP_PORT)
