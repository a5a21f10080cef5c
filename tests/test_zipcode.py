from __future__ import annotations

import pytest

from cep_weather.domain.zipcode import PostalCodeRequest, is_valid_zipcode
from cep_weather.errors import ErrorKind, MalformedRequestError


@pytest.mark.parametrize("code", ["01310930", "00000000", "99999999"])
def test_accepts_eight_ascii_digits(code: str) -> None:
    assert is_valid_zipcode(code)


@pytest.mark.parametrize(
    "code",
    [
        "",
        "123",
        "abcdefgh",
        "0131093",
        "013109300",
        "01310-930",
        "+1310930",
        " 01310930",
        "01310930 ",
        "01310930\n",
        "٠١٣١٠٩٣٠",  # Arabic-Indic digits
    ],
)
def test_rejects_everything_else(code: str) -> None:
    assert not is_valid_zipcode(code)


def test_non_string_is_invalid() -> None:
    assert not is_valid_zipcode(1310930)
    assert not is_valid_zipcode(None)


def test_parse_body() -> None:
    assert PostalCodeRequest.parse(b'{"cep": "01310930"}').cep == "01310930"
    # Missing field is a validation concern, not a parse failure.
    assert PostalCodeRequest.parse(b"{}").cep == ""


@pytest.mark.parametrize("raw", [b"", b"not json", b'{"cep": 1310930}', b"[]", b'{"cep": "0131'])
def test_parse_rejects_malformed_body(raw: bytes) -> None:
    with pytest.raises(MalformedRequestError) as ei:
        PostalCodeRequest.parse(raw)
    assert ei.value.kind is ErrorKind.validation
