"""WMO weather code catalog used by the dashboard cards."""

from __future__ import annotations

from typing import NamedTuple


class Condition(NamedTuple):
    label: str
    emoji: str
    icon: str


UNKNOWN_CONDITION = Condition("Unknown", "🌡️", "clear-day.svg")

CONDITIONS: dict[int, Condition] = {
    0: Condition("Clear Sky", "☀️", "clear-day.svg"),
    1: Condition("Mainly Clear", "🌤️", "cloudy-1-day.svg"),
    2: Condition("Partly Cloudy", "⛅", "cloudy-2-day.svg"),
    3: Condition("Overcast", "☁️", "cloudy.svg"),
    45: Condition("Foggy", "🌫️", "fog.svg"),
    48: Condition("Rime Fog", "🌫️", "frost.svg"),
    51: Condition("Light Drizzle", "🌦️", "rainy-1.svg"),
    53: Condition("Drizzle", "🌦️", "rainy-1.svg"),
    55: Condition("Heavy Drizzle", "🌧️", "rainy-2.svg"),
    56: Condition("Freezing Drizzle", "🌧️", "rain-and-sleet-mix.svg"),
    57: Condition(
        "Heavy Freezing Drizzle", "🌧️", "rain-and-sleet-mix.svg"
    ),
    61: Condition("Slight Rain", "🌧️", "rainy-1.svg"),
    63: Condition("Rain", "🌧️", "rainy-2.svg"),
    65: Condition("Heavy Rain", "⛈️", "rainy-3.svg"),
    66: Condition("Freezing Rain", "🌧️", "rain-and-snow-mix.svg"),
    67: Condition("Heavy Freezing Rain", "⛈️", "rain-and-snow-mix.svg"),
    71: Condition("Slight Snow", "🌨️", "snowy-1.svg"),
    73: Condition("Snow", "❄️", "snowy-2.svg"),
    75: Condition("Heavy Snow", "❄️", "snowy-3.svg"),
    77: Condition("Snow Grains", "🌨️", "hail.svg"),
    80: Condition("Rain Showers", "🌦️", "rainy-1.svg"),
    81: Condition("Rain Showers", "🌦️", "rainy-2.svg"),
    82: Condition("Violent Showers", "⛈️", "rainy-3.svg"),
    85: Condition("Snow Showers", "🌨️", "snowy-1.svg"),
    86: Condition("Heavy Snow Showers", "❄️", "snowy-3.svg"),
    95: Condition("Thunderstorm", "⚡", "thunderstorms.svg"),
    96: Condition("Thunderstorm", "⛈️", "scattered-thunderstorms.svg"),
    99: Condition("Heavy Hail", "⛈️", "severe-thunderstorm.svg"),
}

# Icons worth preloading; they cover the most common conditions.
PRELOAD_ICONS = (
    "clear-day.svg",
    "cloudy.svg",
    "rainy-2.svg",
    "thunderstorms.svg",
)


def resolve_condition(code: int) -> Condition:
    return CONDITIONS.get(code, UNKNOWN_CONDITION)
