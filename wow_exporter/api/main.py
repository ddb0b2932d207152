"""FastAPI application entry point."""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from wow_exporter.api.metrics import build_exposition_registry
from wow_exporter.api.routes import router
from wow_exporter.collectors.orchestrator import CollectionOrchestrator
from wow_exporter.config import Settings, get_settings
from wow_exporter.db.session import DataSource
from wow_exporter.metric_store.registry import MetricRegistry
from wow_exporter.models.metrics import ALL_DEFINITIONS


def create_app(settings: Settings | None = None, source: DataSource | None = None) -> FastAPI:
    """
    Build the exporter app. The registry and the database pools are created
    when the app starts and released when it stops.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        cfg = settings or get_settings()
        data_source = source or DataSource.from_settings(cfg)
        try:
            # Unreachable database → DataSourceUnavailable, the server never starts
            await data_source.ping()

            registry = MetricRegistry(ALL_DEFINITIONS)
            exposition_registry, instruments = build_exposition_registry(registry)
            app.state.metric_registry = registry
            app.state.exposition_registry = exposition_registry
            app.state.orchestrator = CollectionOrchestrator(
                data_source,
                registry,
                timeout=cfg.query_timeout_seconds,
                realm_id=cfg.realm_id,
                instruments=instruments,
            )
            yield
        finally:
            await data_source.dispose()

    app = FastAPI(
        title="WoW Private Server Exporter",
        description="Prometheus exporter for AzerothCore character, auth and world databases.",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.include_router(router)
    return app


app = create_app()
