"""System checks for the dashboard settings."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from django.apps import AppConfig
from django.core import checks

from .conf import DashboardConfigError, load_dashboard_options


@checks.register(checks.Tags.compatibility)
def check_dashboard_options(
    app_configs: Sequence[AppConfig] | None = None, **kwargs: Any
) -> list[checks.CheckMessage]:
    try:
        load_dashboard_options()
    except DashboardConfigError as exc:
        return [
            checks.Error(
                str(exc),
                hint=f"Fix settings.WEATHER_DASHBOARD ({exc.code}).",
                obj="settings.WEATHER_DASHBOARD",
                id="weather_dashboard.E001",
            )
        ]
    return []
