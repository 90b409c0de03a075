from __future__ import annotations

from django.urls import path

from .views import WeatherRefreshView, weather_embed

urlpatterns = [
    path(
        "weather/embed/",
        weather_embed,
        name="weather-dashboard-embed",
    ),
    path(
        "api/v1/weather-dashboard/data/",
        WeatherRefreshView.as_view(),
        name="weather-dashboard-data",
    ),
]
