"""
cep_weather.domain.zipcode

Postal code (CEP) validation.

Responsibilities:
- Decide whether a string is an acceptable 8-digit CEP.
- Parse the gateway request body into a typed request.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, ValidationError

from cep_weather.errors import MalformedRequestError

# ASCII digits only; `\d` would also accept other Unicode decimal digits.
_ZIPCODE_RE = re.compile(r"[0-9]{8}")


def is_valid_zipcode(code: object) -> bool:
    if not isinstance(code, str):
        return False
    return _ZIPCODE_RE.fullmatch(code) is not None


class PostalCodeRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    # Absent field decodes to "" and is then rejected by validation (422), not parsing (400).
    cep: str = ""

    @classmethod
    def parse(cls, raw: bytes | str) -> PostalCodeRequest:
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise MalformedRequestError() from e


# --- Module Notes -----------------------------------------------------------
# `fullmatch` is used instead of `^...$` because `$` also matches before a trailing newline.
