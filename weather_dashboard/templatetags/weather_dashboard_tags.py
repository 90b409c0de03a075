"""Template tags for embedding the dashboard in any Django template.

    {% load weather_dashboard_tags %}
    <head>{% weather_dashboard_resource_hints %}</head>
    <body>{% weather_dashboard %}</body>

A broken ``WEATHER_DASHBOARD`` setting renders nothing here instead of
failing the host page; ``manage.py check`` reports it.
"""

from __future__ import annotations

import logging

from django import template
from django.urls import reverse
from django.utils.safestring import SafeString

from ..conf import (
    DashboardConfigError,
    DashboardOptions,
    load_dashboard_options,
)
from ..rendering import render_resource_hints
from ..services import embed_fragment

logger = logging.getLogger(__name__)

register = template.Library()


def _load_options(tag: str) -> DashboardOptions | None:
    try:
        return load_dashboard_options()
    except DashboardConfigError as exc:
        logger.error(
            "weather_dashboard.config.invalid tag=%s code=%s error=%s",
            tag,
            exc.code,
            exc,
        )
        return None


@register.simple_tag
def weather_dashboard() -> SafeString | str:
    options = _load_options("weather_dashboard")
    if options is None:
        return ""
    return embed_fragment(
        options, refresh_url=reverse("weather-dashboard-data")
    )


@register.simple_tag
def weather_dashboard_resource_hints() -> SafeString | str:
    options = _load_options("weather_dashboard_resource_hints")
    if options is None or options.icon_style != "animated":
        return ""
    return render_resource_hints(options.icon_base_url)
