"""
cep_weather.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) reporting whether required settings are present.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from cep_weather.api.errors import error_response

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    # Liveness only; says nothing about providers or downstream.
    return {"status": "ok"}


@router.get("/readyz", response_model=None)
async def readyz(request: Request) -> dict[str, str] | JSONResponse:
    # Readiness: the service-specific setting (resolver URL / weather API key) is present.
    if not getattr(request.app.state, "configured", False):
        return error_response(503, "not configured")
    return {"status": "ready"}


# --- Module Notes -----------------------------------------------------------
# Neither probe calls ViaCEP, WeatherAPI or the resolver service.
