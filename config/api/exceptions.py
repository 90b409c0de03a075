from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rest_framework.response import Response

    from .responses import JSONValue

logger = logging.getLogger(__name__)


def _to_json_value(value: object) -> JSONValue:
    if value is None or isinstance(value, str | int | float | bool):
        return value
    if isinstance(value, Mapping):
        return {str(k): _to_json_value(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_to_json_value(v) for v in value]
    return str(value)


def custom_exception_handler(
    exc: Exception,
    context: dict[str, Any],
) -> Response:
    # Lazy imports: safe even if settings aren't configured at import time.
    from rest_framework import status
    from rest_framework.response import Response
    from rest_framework.views import exception_handler as drf_exception_handler

    from weather_dashboard.conf import DashboardConfigError

    if isinstance(exc, DashboardConfigError):
        logger.error("weather_dashboard.config.invalid code=%s", exc.code)
        return Response(
            {
                "status": 1,
                "message": "Weather dashboard is misconfigured",
                "data": None,
                "errors": {"code": exc.code},
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    response = drf_exception_handler(exc, context)

    if response is None:
        return Response(
            {
                "status": 1,
                "message": "Internal server error",
                "data": None,
                "errors": None,
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    detail = _to_json_value(response.data)
    message = "Request failed"
    if isinstance(detail, dict):
        maybe = detail.get("detail")
        if isinstance(maybe, str):
            message = maybe

    response.data = {
        "status": 1,
        "message": message,
        "data": None,
        "errors": detail,
    }
    return response
