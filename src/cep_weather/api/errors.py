"""
cep_weather.api.errors

Single mapping from tagged pipeline errors to wire-level outcomes.

Responsibilities:
- Hold the explicit policy table (error type, kind) -> (status code, message).
- Render every user-visible failure as `{"error": "<message>"}`.
- Register the FastAPI exception handlers that apply the table.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cep_weather.errors import (
    DownstreamError,
    ErrorKind,
    InvalidZipcodeError,
    MalformedRequestError,
    PipelineError,
    ResolveError,
    WeatherError,
)
from cep_weather.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ErrorOutcome:
    status_code: int
    message: str

    def to_response(self) -> JSONResponse:
        return error_response(self.status_code, self.message)


INVALID_REQUEST_BODY = ErrorOutcome(400, "invalid request body")
INVALID_ZIPCODE = ErrorOutcome(422, "invalid zipcode")
ZIPCODE_NOT_FOUND = ErrorOutcome(404, "can not find zipcode")
TEMPERATURE_UNAVAILABLE = ErrorOutcome(500, "failed to fetch temperature")
DOWNSTREAM_NOT_CONFIGURED = ErrorOutcome(500, "downstream service not configured")
DOWNSTREAM_UNREACHABLE = ErrorOutcome(500, "failed to contact downstream")
INTERNAL_ERROR = ErrorOutcome(500, "internal error")


ERROR_POLICY: Mapping[tuple[type[PipelineError], ErrorKind], ErrorOutcome] = {
    (MalformedRequestError, ErrorKind.validation): INVALID_REQUEST_BODY,
    (InvalidZipcodeError, ErrorKind.validation): INVALID_ZIPCODE,
    # All postal lookup failures collapse to "not found" for callers.
    (ResolveError, ErrorKind.transport): ZIPCODE_NOT_FOUND,
    (ResolveError, ErrorKind.not_found): ZIPCODE_NOT_FOUND,
    (ResolveError, ErrorKind.decode): ZIPCODE_NOT_FOUND,
    (WeatherError, ErrorKind.configuration): TEMPERATURE_UNAVAILABLE,
    (WeatherError, ErrorKind.transport): TEMPERATURE_UNAVAILABLE,
    (WeatherError, ErrorKind.upstream): TEMPERATURE_UNAVAILABLE,
    (WeatherError, ErrorKind.decode): TEMPERATURE_UNAVAILABLE,
    (DownstreamError, ErrorKind.configuration): DOWNSTREAM_NOT_CONFIGURED,
    (DownstreamError, ErrorKind.transport): DOWNSTREAM_UNREACHABLE,
}


def outcome_for(error: PipelineError) -> ErrorOutcome:
    for cls in type(error).__mro__:
        outcome = ERROR_POLICY.get((cls, error.kind))  # type: ignore[arg-type]
        if outcome is not None:
            return outcome
    return INTERNAL_ERROR


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
    outcome = outcome_for(exc)
    log.warning(
        "request_failed",
        error_type=type(exc).__name__,
        error_kind=exc.kind.value,
        error=exc.message,
        status_code=outcome.status_code,
    )
    return outcome.to_response()


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    # Router-level failures (unknown path, wrong method) use the same {"error": ...} shape.
    response = error_response(exc.status_code, str(exc.detail).lower())
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PipelineError, pipeline_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)


# --- Module Notes -----------------------------------------------------------
# Variant detail (transport vs decode vs not_found) stays in logs and spans; callers only
# ever see the message from the table.
