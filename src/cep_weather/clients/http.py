"""
cep_weather.clients.http

Shared outbound HTTP pool.

Responsibilities:
- Build the single `httpx.AsyncClient` each process uses for every outbound hop.
"""

from __future__ import annotations

import httpx

from cep_weather import __version__
from cep_weather.settings import ServiceSettings

DEFAULT_TIMEOUT_S = 5.0


def build_http_client(settings: ServiceSettings) -> httpx.AsyncClient:
    # Per-call timeouts override this default; it only guards calls that forget one.
    return httpx.AsyncClient(
        timeout=settings.request_timeout_s,
        headers={"user-agent": f"cep-weather/{__version__} ({settings.service_name})"},
    )


# --- Module Notes -----------------------------------------------------------
# The pool is created by the app factory and closed on lifespan shutdown.
