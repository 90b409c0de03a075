"""Markup builders for the weather dashboard fragment.

All functions are pure: they return `SafeString` markup built from Django
templates (autoescaped) and never write to a response themselves.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from django.template.loader import render_to_string
from django.utils.safestring import SafeString

from .conditions import PRELOAD_ICONS, resolve_condition
from .engines.types import City, IconStyle, WeatherSnapshot

if TYPE_CHECKING:
    from .conf import DashboardOptions

CONTAINER_ID = "wxd-weather-container"


@dataclass(frozen=True)
class CityCard:
    name: str
    temperature: int
    label: str
    emoji: str
    icon_url: str


def build_cards(
    snapshot: WeatherSnapshot,
    cities: Sequence[City],
    *,
    icon_base_url: str,
) -> list[CityCard]:
    cards: list[CityCard] = []
    for city in cities:
        weather = snapshot.get(city.name)
        if weather is None:
            continue
        condition = resolve_condition(weather.code)
        cards.append(
            CityCard(
                name=city.name,
                temperature=weather.temperature,
                label=condition.label,
                emoji=condition.emoji,
                icon_url=f"{icon_base_url}{condition.icon}",
            )
        )
    return cards


def render_weather(
    snapshot: WeatherSnapshot,
    cities: Sequence[City],
    *,
    icon_style: IconStyle,
    icon_base_url: str,
) -> SafeString:
    """Render one card per city present in the snapshot, in city order."""

    cards = build_cards(snapshot, cities, icon_base_url=icon_base_url)
    return render_to_string(
        "weather_dashboard/cards.html",
        {"cards": cards, "animated": icon_style == "animated"},
    )


def render_skeleton(cities: Sequence[City]) -> SafeString:
    return render_to_string(
        "weather_dashboard/skeleton.html", {"cities": cities}
    )


def render_styles(options: DashboardOptions) -> SafeString:
    return render_to_string(
        "weather_dashboard/styles.html", {"options": options}
    )


def render_refresh_script(refresh_url: str) -> SafeString:
    return render_to_string(
        "weather_dashboard/refresh_script.html",
        {"refresh_url": refresh_url, "container_id": CONTAINER_ID},
    )


def render_resource_hints(icon_base_url: str) -> SafeString:
    parts = urlsplit(icon_base_url)
    origin = f"{parts.scheme}://{parts.netloc}" if parts.netloc else ""
    return render_to_string(
        "weather_dashboard/resource_hints.html",
        {
            "icon_urls": [f"{icon_base_url}{icon}" for icon in PRELOAD_ICONS],
            "origin": origin,
        },
    )


def render_embed(
    options: DashboardOptions,
    content: SafeString,
    *,
    refresh_url: str | None = None,
) -> SafeString:
    """Wrap content in the styled container; add the refill script if asked."""

    script = render_refresh_script(refresh_url) if refresh_url else ""
    return render_to_string(
        "weather_dashboard/embed.html",
        {
            "styles": render_styles(options),
            "content": content,
            "script": script,
            "container_id": CONTAINER_ID,
        },
    )
