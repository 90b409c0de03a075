from __future__ import annotations

# ruff: noqa: S101
import io
from collections.abc import Sequence

import pytest
from django.conf import LazySettings
from django.core.cache import caches
from django.core.management import call_command
from django.core.management.base import CommandError, SystemCheckError
from django.template import Context, Template
from django.test import Client
from rest_framework.test import APIRequestFactory

from weather_dashboard.checks import check_dashboard_options
from weather_dashboard.conf import DashboardConfigError
from weather_dashboard.engines.open_meteo import OpenMeteoBatchFetcher
from weather_dashboard.engines.types import City, CityWeather, WeatherSnapshot
from weather_dashboard.views import WeatherRefreshView

AUSTIN_SNAPSHOT = WeatherSnapshot(
    cities={"Austin": CityWeather(temperature=73, windspeed=5.0, code=0)}
)


@pytest.fixture(autouse=True)
def _single_city(settings: LazySettings) -> None:
    caches["default"].clear()
    settings.WEATHER_DASHBOARD = {
        "CITIES": "Austin|30.2672|-97.7431",
        "ICON_STYLE": "emoji",
        "UPDATE_MINUTES": 30,
    }


def _fake_fetch(
    monkeypatch: pytest.MonkeyPatch, snapshot: WeatherSnapshot
) -> list[tuple[City, ...]]:
    calls: list[tuple[City, ...]] = []

    async def fake_fetch(
        self: OpenMeteoBatchFetcher, cities: Sequence[City]
    ) -> WeatherSnapshot:
        calls.append(tuple(cities))
        return snapshot

    monkeypatch.setattr(OpenMeteoBatchFetcher, "fetch", fake_fetch)
    return calls


def test_refresh_view_success(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _fake_fetch(monkeypatch, AUSTIN_SNAPSHOT)
    factory = APIRequestFactory()

    resp = WeatherRefreshView.as_view()(
        factory.get("/api/v1/weather-dashboard/data/")
    )

    assert resp.status_code == 200
    assert resp.data["status"] == 0
    assert resp.data["errors"] is None
    html = resp.data["data"]["html"]
    assert "73°" in html
    assert "Clear Sky" in html
    assert len(calls) == 1


def test_refresh_view_empty_snapshot_is_success(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _fake_fetch(monkeypatch, WeatherSnapshot())
    factory = APIRequestFactory()

    resp = WeatherRefreshView.as_view()(
        factory.get("/api/v1/weather-dashboard/data/")
    )

    assert resp.status_code == 200
    assert "wxd-card" not in resp.data["data"]["html"]


def test_refresh_view_upstream_failure_is_404(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _fake_fetch(monkeypatch, WeatherSnapshot.failed())
    client = Client()

    resp = client.get("/api/v1/weather-dashboard/data/")

    assert resp.status_code == 404
    body = resp.json()
    assert body["status"] == 1
    assert body["message"] == "Weather data unavailable"
    assert body["data"] is None
    assert body["errors"] == {"code": "no_data"}


def test_embed_view_cold_then_warm(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _fake_fetch(monkeypatch, AUSTIN_SNAPSHOT)
    client = Client()

    cold = client.get("/weather/embed/")
    assert cold.status_code == 200
    assert cold["Content-Type"].startswith("text/html")
    cold_html = cold.content.decode()
    assert "wxd-card wxd-skeleton" in cold_html
    assert "fetch(\"/api/v1/weather\\u002Ddashboard/data/\"" in cold_html
    assert calls == []

    refreshed = client.get("/api/v1/weather-dashboard/data/")
    assert refreshed.status_code == 200
    assert len(calls) == 1

    warm_html = client.get("/weather/embed/").content.decode()
    assert "73°" in warm_html
    assert "<script>" not in warm_html
    assert len(calls) == 1


def test_embed_view_invalid_config_propagates(settings: LazySettings) -> None:
    settings.WEATHER_DASHBOARD = {"ICON_STYLE": "sparkly"}
    client = Client(raise_request_exception=True)
    with pytest.raises(DashboardConfigError):
        client.get("/weather/embed/")


def test_refresh_view_invalid_config_uses_error_envelope(
    settings: LazySettings,
) -> None:
    settings.WEATHER_DASHBOARD = {"BG_COLOR": "blue"}
    factory = APIRequestFactory()

    resp = WeatherRefreshView.as_view()(
        factory.get("/api/v1/weather-dashboard/data/")
    )

    assert resp.status_code == 500
    assert resp.data["errors"] == {"code": "bad_color"}


def test_template_tags_render_fragment_and_hints(
    monkeypatch: pytest.MonkeyPatch, settings: LazySettings
) -> None:
    _fake_fetch(monkeypatch, AUSTIN_SNAPSHOT)
    template = Template(
        "{% load weather_dashboard_tags %}"
        "{% weather_dashboard_resource_hints %}{% weather_dashboard %}"
    )

    emoji_html = template.render(Context())
    assert "wxd-skeleton" in emoji_html
    assert 'rel="preload"' not in emoji_html

    settings.WEATHER_DASHBOARD = {
        "CITIES": "Austin|30.2672|-97.7431",
        "ICON_STYLE": "animated",
    }
    animated_html = template.render(Context())
    assert 'rel="preload"' in animated_html
    assert 'rel="preconnect" href="https://cdn.jsdelivr.net"' in animated_html


def test_template_tags_render_nothing_for_invalid_config(
    settings: LazySettings,
) -> None:
    settings.WEATHER_DASHBOARD = {"ICON_STYLE": "sparkly"}
    template = Template(
        "{% load weather_dashboard_tags %}"
        "<p>host page</p>"
        "{% weather_dashboard_resource_hints %}{% weather_dashboard %}"
    )

    assert template.render(Context()) == "<p>host page</p>"


def test_system_check_reports_invalid_config(settings: LazySettings) -> None:
    assert check_dashboard_options() == []

    settings.WEATHER_DASHBOARD = {"BG_COLOR": "blue"}
    errors = check_dashboard_options()

    assert len(errors) == 1
    assert errors[0].id == "weather_dashboard.E001"
    assert "bad_color" in errors[0].hint

    stderr = io.StringIO()
    with pytest.raises(SystemCheckError):
        call_command("check", stderr=stderr)


def test_template_tag_hints_skip_preconnect_for_relative_icons(
    settings: LazySettings,
) -> None:
    settings.WEATHER_DASHBOARD = {
        "ICON_STYLE": "animated",
        "ICON_BASE_URL": "/static/icons/",
    }
    html = Template(
        "{% load weather_dashboard_tags %}"
        "{% weather_dashboard_resource_hints %}"
    ).render(Context())

    assert 'href="/static/icons/clear-day.svg"' in html
    assert "preconnect" not in html


def test_cache_command_refresh_status_clear(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _fake_fetch(monkeypatch, AUSTIN_SNAPSHOT)
    key = "weather_dashboard:snapshot:v1"

    out = io.StringIO()
    call_command("weather_dashboard_cache", stdout=out)
    status_lines = out.getvalue().splitlines()
    assert status_lines[0] == f"{key}: no fresh snapshot."
    assert status_lines[-1] == "Austin|30.2672|-97.7431"

    out = io.StringIO()
    call_command("weather_dashboard_cache", "--refresh", stdout=out)
    assert out.getvalue().strip() == (
        f"Stored 1/1 cities under {key} for 1800s."
    )

    out = io.StringIO()
    call_command("weather_dashboard_cache", stdout=out)
    first = out.getvalue().splitlines()[0]
    assert first.startswith(f"{key}: 1 cities, upstream_ok=True, expires in")

    out = io.StringIO()
    call_command("weather_dashboard_cache", "--clear", stdout=out)
    assert out.getvalue().strip() == f"Cleared {key}."
    assert caches["default"].get(key) is None


def test_cache_command_refresh_failure(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _fake_fetch(monkeypatch, WeatherSnapshot.failed())
    with pytest.raises(CommandError, match="Upstream request failed"):
        call_command("weather_dashboard_cache", "--refresh")
