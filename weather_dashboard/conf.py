"""Weather dashboard configuration loader.

Reads the `WEATHER_DASHBOARD` settings dict into a validated
`DashboardOptions`. Every recognised option is listed in `DEFAULTS`.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, cast

from django.conf import settings

from .cities import parse_cities
from .engines.open_meteo import DEFAULT_BASE_URL
from .engines.types import City, IconStyle

DEFAULT_UPDATE_MINUTES = 60
DEFAULT_ICON_BASE_URL = (
    "https://cdn.jsdelivr.net/gh/Makin-Things/weather-icons/animated/"
)

DEFAULTS: dict[str, Any] = {
    "UPDATE_MINUTES": DEFAULT_UPDATE_MINUTES,
    "ICON_STYLE": "animated",
    "CITIES": "",
    "CACHE_ALIAS": "default",
    "CACHE_KEY": "weather_dashboard:snapshot:v1",
    "UPSTREAM_URL": DEFAULT_BASE_URL,
    "UPSTREAM_TIMEOUT": 10.0,
    "ICON_BASE_URL": DEFAULT_ICON_BASE_URL,
    "BG_COLOR": "#ffffff",
    "TEXT_COLOR": "#333333",
    "FONT_SIZE": "16px",
    "TEMP_FONT_SIZE": "1.6em",
    "ICON_SIZE": "3.5rem",
    "CARD_GAP": "12px",
    "MIN_CARD_WIDTH": "85px",
}

_COLOR_OPTIONS = ("BG_COLOR", "TEXT_COLOR")
_SIZE_OPTIONS = (
    "FONT_SIZE",
    "TEMP_FONT_SIZE",
    "ICON_SIZE",
    "CARD_GAP",
    "MIN_CARD_WIDTH",
)
_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_SIZE_RE = re.compile(r"^\d+(?:\.\d+)?(?:px|em|rem|%|vw|vh)?$")


class DashboardConfigError(Exception):
    """Raised when WEATHER_DASHBOARD contains an invalid option."""

    def __init__(self, message: str, *, code: str) -> None:
        super().__init__(message)
        self.code = code


@dataclass(frozen=True)
class DashboardOptions:
    update_minutes: int
    icon_style: IconStyle
    cities: tuple[City, ...]
    cache_alias: str
    cache_key: str
    upstream_url: str
    upstream_timeout: float
    icon_base_url: str
    bg_color: str
    text_color: str
    font_size: str
    temp_font_size: str
    icon_size: str
    card_gap: str
    min_card_width: str

    @property
    def ttl_seconds(self) -> int:
        return self.update_minutes * 60


def coerce_update_minutes(raw: object) -> int:
    """Return the refresh interval in minutes; anything below 1 means 60."""

    try:
        minutes = int(cast(Any, raw))
    except (TypeError, ValueError):
        return DEFAULT_UPDATE_MINUTES
    if minutes < 1:
        return DEFAULT_UPDATE_MINUTES
    return minutes


def _require_str(options: Mapping[str, Any], key: str) -> str:
    value = options[key]
    if not isinstance(value, str):
        raise DashboardConfigError(
            f"WEATHER_DASHBOARD['{key}'] must be a string.",
            code="bad_type",
        )
    return value.strip()


def _icon_style(options: Mapping[str, Any]) -> IconStyle:
    raw = options["ICON_STYLE"]
    if isinstance(raw, bool):
        # Checkbox-style settings: True means animated icons.
        return "animated" if raw else "emoji"
    style = _require_str(options, "ICON_STYLE").lower()
    if style not in ("animated", "emoji"):
        raise DashboardConfigError(
            "WEATHER_DASHBOARD['ICON_STYLE'] must be 'animated' or 'emoji'.",
            code="bad_icon_style",
        )
    return cast(IconStyle, style)


def _timeout(options: Mapping[str, Any]) -> float:
    raw = options["UPSTREAM_TIMEOUT"]
    try:
        timeout = float(raw)
    except (TypeError, ValueError) as exc:
        raise DashboardConfigError(
            "WEATHER_DASHBOARD['UPSTREAM_TIMEOUT'] must be a number.",
            code="bad_type",
        ) from exc
    if timeout <= 0:
        raise DashboardConfigError(
            "WEATHER_DASHBOARD['UPSTREAM_TIMEOUT'] must be positive.",
            code="bad_timeout",
        )
    return timeout


def load_dashboard_options(
    overrides: Mapping[str, Any] | None = None,
) -> DashboardOptions:
    """Return validated options from settings, with optional overrides."""

    configured = getattr(settings, "WEATHER_DASHBOARD", None) or {}
    if not isinstance(configured, Mapping):
        raise DashboardConfigError(
            "WEATHER_DASHBOARD must be a dict.", code="bad_type"
        )

    options: dict[str, Any] = {**DEFAULTS, **configured, **(overrides or {})}
    unknown = sorted(set(options) - set(DEFAULTS))
    if unknown:
        raise DashboardConfigError(
            f"Unknown WEATHER_DASHBOARD options: {', '.join(unknown)}.",
            code="unknown_option",
        )

    for key in _COLOR_OPTIONS:
        if not _COLOR_RE.match(_require_str(options, key)):
            raise DashboardConfigError(
                f"WEATHER_DASHBOARD['{key}'] must be a hex colour.",
                code="bad_color",
            )
    for key in _SIZE_OPTIONS:
        if not _SIZE_RE.match(_require_str(options, key)):
            raise DashboardConfigError(
                f"WEATHER_DASHBOARD['{key}'] must be a CSS length.",
                code="bad_size",
            )

    cache_key = _require_str(options, "CACHE_KEY")
    if not cache_key:
        raise DashboardConfigError(
            "WEATHER_DASHBOARD['CACHE_KEY'] must not be empty.",
            code="bad_cache_key",
        )

    raw_cities = options["CITIES"]
    if raw_cities is not None and not isinstance(raw_cities, str):
        raise DashboardConfigError(
            "WEATHER_DASHBOARD['CITIES'] must be a string.", code="bad_type"
        )

    return DashboardOptions(
        update_minutes=coerce_update_minutes(options["UPDATE_MINUTES"]),
        icon_style=_icon_style(options),
        cities=parse_cities(raw_cities),
        cache_alias=_require_str(options, "CACHE_ALIAS"),
        cache_key=cache_key,
        upstream_url=_require_str(options, "UPSTREAM_URL"),
        upstream_timeout=_timeout(options),
        icon_base_url=_require_str(options, "ICON_BASE_URL"),
        bg_color=_require_str(options, "BG_COLOR"),
        text_color=_require_str(options, "TEXT_COLOR"),
        font_size=_require_str(options, "FONT_SIZE"),
        temp_font_size=_require_str(options, "TEMP_FONT_SIZE"),
        icon_size=_require_str(options, "ICON_SIZE"),
        card_gap=_require_str(options, "CARD_GAP"),
        min_card_width=_require_str(options, "MIN_CARD_WIDTH"),
    )
