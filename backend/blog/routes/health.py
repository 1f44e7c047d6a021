"""
Blog API — Liveness & Health Routes
=====================================

What:  `GET /` answers with a plain-text liveness string; `GET /health` also
       pings the document store.
Who:   Called by humans, Docker health checks and load balancers.

Status levels for /health:
    - healthy:   store answers a ping (HTTP 200)
    - unhealthy: store unreachable or never connected (HTTP 503)
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from blog import __version__
from blog.schemas.post import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

LIVENESS_TEXT = "✅ Server is running!"


@router.get("/", response_class=PlainTextResponse, summary="Liveness check")
async def root() -> str:
    return LIVENESS_TEXT


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request):
    """
    Pings the document store and reports the result.

    The store is read from app.state rather than through `get_store` so an
    unconnected store reports "disconnected" instead of raising.
    """
    store = getattr(request.app.state, "store", None)
    connected = store is not None and await store.ping()
    if not connected:
        logger.warning("Health check: document store unreachable")

    body = HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
    )
    if not connected:
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
