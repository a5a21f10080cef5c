"""
cep_weather.domain.temperature

Temperature conversion and the composed weather response.

Responsibilities:
- Convert Celsius into Celsius/Fahrenheit/Kelvin.
- Build the resolver's success payload with derived (never independently set) scales.
"""

from __future__ import annotations

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field


class Temperatures(NamedTuple):
    celsius: float
    fahrenheit: float
    kelvin: float


def convert(celsius: float) -> Temperatures:
    # No physical bound checks (below absolute zero passes through unchanged).
    return Temperatures(
        celsius=celsius,
        fahrenheit=celsius * 1.8 + 32,
        kelvin=celsius + 273,
    )


class WeatherResponse(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    city: str
    temp_c: float = Field(alias="temp_C")
    temp_f: float = Field(alias="temp_F")
    temp_k: float = Field(alias="temp_K")

    @classmethod
    def from_celsius(cls, *, city: str, celsius: float) -> WeatherResponse:
        t = convert(celsius)
        return cls(city=city, temp_c=t.celsius, temp_f=t.fahrenheit, temp_k=t.kelvin)

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


# --- Module Notes -----------------------------------------------------------
# Wire field names keep the capitalised unit suffix (temp_C/temp_F/temp_K) expected by clients.
