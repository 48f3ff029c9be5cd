"""
Essay Scoring Service dependency injection configuration.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import aiohttp
from dishka import Provider, Scope, provide
from prometheus_client import CollectorRegistry, Counter
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from services.essay_scoring_service.config import Settings, settings
from services.essay_scoring_service.implementations.dashboard_aggregator_impl import (
    DashboardAggregator,
)
from services.essay_scoring_service.implementations.draft_saver_impl import DraftSaver
from services.essay_scoring_service.implementations.essay_repository_impl import (
    EssayRepository,
)
from services.essay_scoring_service.implementations.gemini_scoring_client_impl import (
    GeminiScoringClient,
)
from services.essay_scoring_service.implementations.identity_provider_impl import (
    ConfiguredIdentityProvider,
)
from services.essay_scoring_service.implementations.mock_scoring_client_impl import (
    MockScoringClient,
)
from services.essay_scoring_service.implementations.prometheus_essay_metrics import (
    PrometheusEssayMetrics,
)
from services.essay_scoring_service.implementations.scoring_orchestrator_impl import (
    ScoringOrchestrator,
)
from services.essay_scoring_service.protocols import (
    DashboardAggregatorProtocol,
    DraftSaverProtocol,
    EssayMetricsProtocol,
    EssayRepositoryProtocol,
    IdentityProviderProtocol,
    ScoringClientProtocol,
    ScoringOrchestratorProtocol,
)


class EssayScoringServiceProvider(Provider):
    """DI provider for Essay Scoring Service dependencies."""

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide service settings."""
        return settings

    @provide(scope=Scope.APP)
    def provide_collector_registry(self) -> CollectorRegistry:
        """Provide Prometheus collector registry."""
        return CollectorRegistry()

    @provide(scope=Scope.APP)
    def provide_essay_metrics(self, registry: CollectorRegistry) -> EssayMetricsProtocol:
        """Provide essay metrics implementation."""
        essay_operations = Counter(
            "essay_operations_total",
            "Total essay operations",
            ["operation", "status"],
            registry=registry,
        )
        return PrometheusEssayMetrics(essay_operations)

    @provide(scope=Scope.APP)
    async def provide_database_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide the pooled async database engine, disposed on container close."""
        engine = create_async_engine(
            settings.DATABASE_URL,
            echo=False,
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            pool_pre_ping=settings.DATABASE_POOL_PRE_PING,
        )
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    async def provide_http_session(
        self, settings: Settings
    ) -> AsyncIterator[aiohttp.ClientSession]:
        """Provide the shared HTTP client session for the scoring client."""
        timeout = aiohttp.ClientTimeout(total=settings.GEMINI_TIMEOUT_SECONDS)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            yield session

    @provide(scope=Scope.APP)
    def provide_scoring_client(
        self,
        settings: Settings,
        session: aiohttp.ClientSession,
    ) -> ScoringClientProtocol:
        """Provide the Gemini client, or the deterministic stub when configured."""
        if settings.USE_MOCK_SCORING_CLIENT:
            return MockScoringClient()
        return GeminiScoringClient(session=session, settings=settings)

    @provide(scope=Scope.APP)
    def provide_essay_repository(self, engine: AsyncEngine) -> EssayRepositoryProtocol:
        """Provide database-backed essay repository implementation."""
        return EssayRepository(engine)

    @provide(scope=Scope.APP)
    def provide_identity_provider(self, settings: Settings) -> IdentityProviderProtocol:
        return ConfiguredIdentityProvider(
            default_user_id=settings.DEFAULT_USER_ID,
            trust_requested_id=settings.TRUST_PATH_USER_ID,
        )

    @provide(scope=Scope.APP)
    def provide_scoring_orchestrator(
        self,
        scoring_client: ScoringClientProtocol,
        repository: EssayRepositoryProtocol,
        identity_provider: IdentityProviderProtocol,
        metrics: EssayMetricsProtocol,
    ) -> ScoringOrchestratorProtocol:
        return ScoringOrchestrator(
            scoring_client=scoring_client,
            repository=repository,
            identity_provider=identity_provider,
            metrics=metrics,
        )

    @provide(scope=Scope.APP)
    def provide_draft_saver(
        self,
        repository: EssayRepositoryProtocol,
        identity_provider: IdentityProviderProtocol,
        metrics: EssayMetricsProtocol,
    ) -> DraftSaverProtocol:
        return DraftSaver(
            repository=repository,
            identity_provider=identity_provider,
            metrics=metrics,
        )

    @provide(scope=Scope.APP)
    def provide_dashboard_aggregator(
        self,
        settings: Settings,
        repository: EssayRepositoryProtocol,
        identity_provider: IdentityProviderProtocol,
        metrics: EssayMetricsProtocol,
    ) -> DashboardAggregatorProtocol:
        return DashboardAggregator(
            repository=repository,
            identity_provider=identity_provider,
            metrics=metrics,
            display_tz=settings.display_tzinfo,
        )
