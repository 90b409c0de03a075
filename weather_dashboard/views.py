"""Weather dashboard endpoints.

- `GET /weather/embed/`: the self-contained HTML fragment (styles +
  container). Never waits on the upstream API.
- `GET /api/v1/weather-dashboard/data/`: the refresh endpoint called by the
  fragment's script. Responses use `config.api.responses`
  (status/message/data/errors).
"""

from __future__ import annotations

import logging

from asgiref.sync import async_to_sync
from django.http import HttpRequest, HttpResponse
from django.urls import reverse
from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import serializers, status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from config.api.openapi import (
    error_envelope_serializer,
    success_envelope_serializer,
)
from config.api.responses import error_response, success_response

from .conf import load_dashboard_options
from .services import (
    WeatherUnavailableError,
    embed_fragment,
    refresh_fragment,
)

logger = logging.getLogger(__name__)

refresh_success_schema = success_envelope_serializer(
    "WeatherDashboardRefreshSuccess",
    data=inline_serializer(
        name="WeatherDashboardRefreshData",
        fields={"html": serializers.CharField()},
    ),
)
refresh_error_schema = error_envelope_serializer(
    "WeatherDashboardRefreshError"
)


def weather_embed(request: HttpRequest) -> HttpResponse:
    """Return the dashboard fragment for inclusion in a page."""

    options = load_dashboard_options()
    fragment = embed_fragment(
        options, refresh_url=reverse("weather-dashboard-data")
    )
    return HttpResponse(fragment, content_type="text/html; charset=utf-8")


class WeatherRefreshView(APIView):
    """Refill the shared snapshot from upstream and return rendered cards.

    Auth: none (AllowAny); the endpoint takes no parameters.
    Response: success envelope with `html`. An upstream transport failure
    returns 404 with `errors.code == "no_data"`; an empty but successful
    fetch is still a 200 with near-empty markup.
    """

    permission_classes = [AllowAny]
    authentication_classes: list[type] = []

    @extend_schema(
        responses={
            200: refresh_success_schema,
            404: refresh_error_schema,
        },
    )
    def get(self, request: Request) -> Response:
        options = load_dashboard_options()
        try:
            html = async_to_sync(refresh_fragment)(options)
        except WeatherUnavailableError as exc:
            logger.warning("weather_dashboard.refresh.unavailable")
            return error_response(
                str(exc),
                errors={"code": exc.code},
                status_code=status.HTTP_404_NOT_FOUND,
            )
        return success_response({"html": str(html)})
