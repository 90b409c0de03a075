from __future__ import annotations

# ruff: noqa: S101
import pytest

from weather_dashboard.cities import (
    DEFAULT_CITIES,
    format_cities,
    parse_cities,
)
from weather_dashboard.engines.types import City


def test_parse_cities_keeps_well_formed_lines_in_order() -> None:
    raw = "\n".join(
        [
            "Austin|30.2672|-97.7431",
            "broken line",
            "  Laredo | 27.5306 | -99.4803  ",
            "Only|1.0",
            "El Paso|31.7619|-106.4850|extra",
        ]
    )

    cities = parse_cities(raw)

    assert cities == (
        City(name="Austin", lat=30.2672, lon=-97.7431),
        City(name="Laredo", lat=27.5306, lon=-99.4803),
        City(name="El Paso", lat=31.7619, lon=-106.4850),
    )


@pytest.mark.parametrize(
    "raw",
    [None, "", "   \n  ", "no pipes here\nstill|none", "|1.0|2.0"],
)
def test_parse_cities_falls_back_to_defaults(raw: str | None) -> None:
    cities = parse_cities(raw)
    assert cities == DEFAULT_CITIES
    assert len(cities) == 8
    assert cities[0].name == "Mission"


def test_parse_cities_bad_coordinates_become_zero() -> None:
    cities = parse_cities("Nowhere|north|-12.5\r\nSomewhere|1.5|")
    assert cities == (
        City(name="Nowhere", lat=0.0, lon=-12.5),
        City(name="Somewhere", lat=1.5, lon=0.0),
    )


@pytest.mark.parametrize("bad", ["nan", "inf", "-inf", "1e999", "NaN"])
def test_parse_cities_non_finite_coordinates_become_zero(bad: str) -> None:
    cities = parse_cities(f"Austin|30.2672|-97.7431\nTypo|{bad}|{bad}")
    assert cities == (
        City(name="Austin", lat=30.2672, lon=-97.7431),
        City(name="Typo", lat=0.0, lon=0.0),
    )


def test_parse_cities_duplicate_name_keeps_first_position() -> None:
    cities = parse_cities("A|1|1\nB|2|2\nA|3|3")
    assert [city.name for city in cities] == ["A", "B"]
    assert cities[0].lat == 3.0


def test_parse_cities_is_stable_for_fixed_input() -> None:
    raw = "X|1|2\nY|3|4\nZ|5|6"
    assert parse_cities(raw) == parse_cities(raw)


def test_format_cities_round_trips_defaults() -> None:
    text = format_cities(DEFAULT_CITIES)
    assert text.splitlines()[0] == "Mission|26.2159|-98.3253"
    assert parse_cities(text) == DEFAULT_CITIES
