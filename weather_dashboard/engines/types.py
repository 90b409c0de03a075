from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

IconStyle = Literal["animated", "emoji"]


@dataclass(frozen=True)
class City:
    name: str
    lat: float
    lon: float


@dataclass(frozen=True)
class CityWeather:
    temperature: int
    windspeed: float
    code: int


@dataclass(frozen=True)
class WeatherSnapshot:
    """Result of one batched fetch cycle, keyed by city name.

    `upstream_ok` is False only when the upstream call itself failed
    (transport error, non-2xx status or an unreadable body).
    """

    cities: dict[str, CityWeather] = field(default_factory=dict)
    upstream_ok: bool = True

    @classmethod
    def failed(cls) -> WeatherSnapshot:
        return cls(cities={}, upstream_ok=False)

    def get(self, name: str) -> CityWeather | None:
        return self.cities.get(name)

    def is_empty(self) -> bool:
        return not self.cities
