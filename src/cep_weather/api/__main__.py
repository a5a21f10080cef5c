"""
cep_weather.api.__main__

Entrypoint for running either service via `python -m cep_weather.api {gateway,resolver}`.

Responsibilities:
- Load settings for the selected service.
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import argparse

import uvicorn
from fastapi import FastAPI

from cep_weather.api.app import create_gateway_app, create_resolver_app
from cep_weather.settings import ServiceSettings, get_gateway_settings, get_resolver_settings


def _serve(app: FastAPI, settings: ServiceSettings) -> None:
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.port,
        log_config=None,  # structlog
    )


def gateway() -> None:
    settings = get_gateway_settings()
    _serve(create_gateway_app(settings=settings), settings)


def resolver() -> None:
    settings = get_resolver_settings()
    _serve(create_resolver_app(settings=settings), settings)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="cep_weather.api")
    parser.add_argument("service", choices=("gateway", "resolver"))
    args = parser.parse_args(argv)

    if args.service == "gateway":
        gateway()
    else:
        resolver()


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# Each service is deployed as its own process; `cep-gateway` / `cep-resolver` console
# scripts call the functions above directly.
