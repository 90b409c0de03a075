"""City list parsing.

The list is plain text, one `name|lat|lon` record per line. Order matters:
it is the order coordinates are sent upstream and the order results come
back in.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from .engines.types import City

DEFAULT_CITIES: tuple[City, ...] = (
    City(name="Mission", lat=26.2159, lon=-98.3253),
    City(name="El Paso", lat=31.7619, lon=-106.4850),
    City(name="San Antonio", lat=29.4241, lon=-98.4936),
    City(name="Eagle Pass", lat=28.7091, lon=-100.4995),
    City(name="Austin", lat=30.2672, lon=-97.7431),
    City(name="Corpus Christi", lat=27.8006, lon=-97.3964),
    City(name="Presidio", lat=29.5607, lon=-104.3730),
    City(name="Laredo", lat=27.5306, lon=-99.4803),
)


def _to_coordinate(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def parse_cities(raw: str | None) -> tuple[City, ...]:
    """Return the configured cities, or the defaults if none parse."""

    if not raw or not raw.strip():
        return DEFAULT_CITIES

    # Keyed by name: a repeated name keeps its first position but takes the
    # later coordinates.
    parsed: dict[str, City] = {}
    for line in raw.splitlines():
        parts = [part.strip() for part in line.split("|")]
        if len(parts) < 3:
            continue
        name = parts[0]
        if not name:
            continue
        parsed[name] = City(
            name=name,
            lat=_to_coordinate(parts[1]),
            lon=_to_coordinate(parts[2]),
        )

    if not parsed:
        return DEFAULT_CITIES
    return tuple(parsed.values())


def format_cities(cities: Iterable[City]) -> str:
    return "\n".join(f"{city.name}|{city.lat}|{city.lon}" for city in cities)
