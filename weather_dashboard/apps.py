from __future__ import annotations

from django.apps import AppConfig


class WeatherDashboardConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "weather_dashboard"
    verbose_name = "Weather dashboard"

    def ready(self) -> None:
        # Registers the settings system check.
        from . import checks  # noqa: F401
