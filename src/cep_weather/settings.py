"""
cep_weather.settings

Central configuration models (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the gateway and resolver services.
- Hide secrets from repr/logging (e.g., weather provider API key).
- Offer cached settings instances for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    """
    Settings shared by both services.
    Env names carry no prefix so existing deployments (PORT, ZIPKIN_ENDPOINT, ...) keep working.
    """

    model_config = SettingsConfigDict(case_sensitive=False)

    service_name: str = "cep-weather"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    port: int = 8080

    # Tracing
    zipkin_endpoint: str = "http://zipkin:9411/api/v2/spans"
    trace_sampled: bool = True

    # Single attempt per hop, bounded by this timeout.
    request_timeout_s: float = 5.0


class GatewaySettings(ServiceSettings):
    service_name: str = "service-a"
    port: int = 8081

    resolver_service_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("resolver_service_url", "service_b_url"),
    )


class ResolverSettings(ServiceSettings):
    service_name: str = "service-b"
    port: int = 8080

    weather_api_key: str = Field(default="", repr=False)
    viacep_base_url: str = "https://viacep.com.br"
    weather_api_base_url: str = "https://api.weatherapi.com"


@lru_cache(maxsize=1)
def get_gateway_settings() -> GatewaySettings:
    # Cache avoids re-parsing env vars for each request dependency.
    return GatewaySettings()


@lru_cache(maxsize=1)
def get_resolver_settings() -> ResolverSettings:
    return ResolverSettings()


# --- Module Notes -----------------------------------------------------------
# Both services read the same env namespace; each only declares the settings it consumes.
