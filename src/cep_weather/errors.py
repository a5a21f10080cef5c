"""
cep_weather.errors

Tagged error taxonomy shared by both services.

Responsibilities:
- Classify every failure point by `ErrorKind` (validation, not found, configuration, ...).
- Give each component its own error type so the HTTP boundary can map (type, kind)
  to a wire outcome in one place (see `cep_weather.api.errors`).
"""

from __future__ import annotations

import enum


class ErrorKind(enum.StrEnum):
    validation = "validation"
    not_found = "not_found"
    configuration = "configuration"
    transport = "transport"
    upstream = "upstream"
    decode = "decode"


class PipelineError(Exception):
    """
    Base error for the request pipeline.
    `kind` is the observability-level classification; user-facing mapping lives at the boundary.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class InvalidZipcodeError(PipelineError):
    def __init__(self, code: object) -> None:
        super().__init__(ErrorKind.validation, f"invalid zipcode: {code!r}")
        self.code = code


class MalformedRequestError(PipelineError):
    def __init__(self, message: str = "request body is not a valid postal code request") -> None:
        super().__init__(ErrorKind.validation, message)


class ResolveError(PipelineError):
    # Postal-code-to-city lookup: transport, not_found, decode.
    pass


class WeatherError(PipelineError):
    # City-to-temperature lookup: configuration, transport, upstream, decode.
    pass


class DownstreamError(PipelineError):
    # Gateway -> resolver service hop: configuration, transport.
    pass


# --- Module Notes -----------------------------------------------------------
# The HTTP boundary only reads `type(err)` and `err.kind`; `message` is for logs and spans.
