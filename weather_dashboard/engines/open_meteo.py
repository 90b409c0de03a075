from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

import httpx

from ..metrics import (
    weather_dashboard_upstream_latency_seconds,
    weather_dashboard_upstream_requests_total,
)
from .base import WeatherFetcher
from .types import City, CityWeather, WeatherSnapshot

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.open-meteo.com/v1/forecast"


class OpenMeteoBatchFetcher(WeatherFetcher):
    """Open-Meteo current-weather fetcher for a whole city list.

    All coordinates go out in a single `/v1/forecast` request; the response
    is correlated back to cities by position.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url: str = base_url or DEFAULT_BASE_URL
        self.timeout = timeout
        self.transport = transport

    async def fetch(self, cities: Sequence[City]) -> WeatherSnapshot:
        if not cities:
            return WeatherSnapshot()

        params = self.build_params(cities)
        start_time = time.perf_counter()
        try:
            payload = await self._request(params)
        except (httpx.HTTPError, ValueError) as exc:
            weather_dashboard_upstream_requests_total.labels(
                outcome="error"
            ).inc()
            logger.warning(
                "weather_dashboard.upstream.failed cities=%s err=%s",
                len(cities),
                exc,
            )
            return WeatherSnapshot.failed()
        finally:
            weather_dashboard_upstream_latency_seconds.observe(
                time.perf_counter() - start_time
            )

        locations = self._normalize_locations(payload)
        if locations is None:
            weather_dashboard_upstream_requests_total.labels(
                outcome="error"
            ).inc()
            logger.warning(
                "weather_dashboard.upstream.bad_shape type=%s",
                type(payload).__name__,
            )
            return WeatherSnapshot.failed()

        weather_dashboard_upstream_requests_total.labels(outcome="ok").inc()
        if len(locations) != len(cities):
            logger.warning(
                "weather_dashboard.upstream.count_mismatch "
                "requested=%s received=%s",
                len(cities),
                len(locations),
            )

        results: dict[str, CityWeather] = {}
        for city, location in zip(cities, locations):
            weather = self._parse_location(location)
            if weather is None:
                logger.debug(
                    "weather_dashboard.upstream.skipped city=%s", city.name
                )
                continue
            results[city.name] = weather
        return WeatherSnapshot(cities=results)

    def build_params(self, cities: Sequence[City]) -> dict[str, str]:
        return {
            "latitude": ",".join(str(city.lat) for city in cities),
            "longitude": ",".join(str(city.lon) for city in cities),
            "current_weather": "true",
            "temperature_unit": "fahrenheit",
            "windspeed_unit": "mph",
        }

    async def _request(self, params: dict[str, str]) -> Any:
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self.transport
        ) as client:
            response = await client.get(self.base_url, params=params)
        response.raise_for_status()
        return response.json()

    def _normalize_locations(self, payload: Any) -> list[Any] | None:
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict):
            return [payload]
        return None

    def _parse_location(self, location: Any) -> CityWeather | None:
        if not isinstance(location, dict):
            return None
        current = location.get("current_weather")
        if not isinstance(current, dict):
            return None
        temperature = self._round_temperature(current.get("temperature"))
        windspeed = self._to_float(current.get("windspeed"))
        code = self._to_int(current.get("weathercode"))
        if temperature is None or windspeed is None or code is None:
            return None
        return CityWeather(
            temperature=temperature, windspeed=windspeed, code=code
        )

    def _round_temperature(self, value: Any) -> int | None:
        if value is None or isinstance(value, bool):
            return None
        try:
            rounded = Decimal(str(value)).quantize(
                Decimal("1"), rounding=ROUND_HALF_UP
            )
        except (InvalidOperation, ValueError):
            return None
        if not rounded.is_finite():
            return None
        return int(rounded)

    def _to_float(self, value: Any) -> float | None:
        try:
            if value is None or isinstance(value, bool):
                return None
            return float(value)
        except (TypeError, ValueError):
            return None

    def _to_int(self, value: Any) -> int | None:
        number = self._to_float(value)
        if number is None or not number.is_integer():
            return None
        return int(number)
