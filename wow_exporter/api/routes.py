"""
HTTP routes of the exporter.

GET /metrics  run one collection cycle, return the text exposition
GET /*        static landing page, on every other path
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from wow_exporter.collectors.orchestrator import CollectionOrchestrator

router = APIRouter()

LANDING_PAGE = """<html>
<head><title>WoW Private Server Exporter</title></head>
<body>
    <h1>WoW Private Server Exporter</h1>
    <p><a href="/metrics">Metrics</a></p>
</body>
</html>
"""


def get_orchestrator(request: Request) -> CollectionOrchestrator:
    return request.app.state.orchestrator


def get_exposition_registry(request: Request) -> CollectorRegistry:
    return request.app.state.exposition_registry


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index() -> HTMLResponse:
    return HTMLResponse(LANDING_PAGE)


@router.get("/metrics", include_in_schema=False)
async def metrics(
    orchestrator: CollectionOrchestrator = Depends(get_orchestrator),
    registry: CollectorRegistry = Depends(get_exposition_registry),
) -> Response:
    """
    Fresh collection on every scrape, nothing cached between requests.

    Group failures are logged by the orchestrator and never surface here:
    the response is always the current best-effort snapshot.
    """
    await orchestrator.run_cycle()
    return Response(content=generate_latest(registry), media_type=CONTENT_TYPE_LATEST)


# Registered last so /metrics keeps precedence
@router.get("/{path:path}", response_class=HTMLResponse, include_in_schema=False)
async def fallback(path: str) -> HTMLResponse:
    """Any other path serves the landing page."""
    return HTMLResponse(LANDING_PAGE)
