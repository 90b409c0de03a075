"""drf-spectacular helpers for the JSON response envelope.

`config.api.responses` and `config.api.exceptions.custom_exception_handler`
both answer with `{status, message, data, errors}`; these builders describe
that shape in the OpenAPI schema.
"""

from __future__ import annotations

from drf_spectacular.utils import inline_serializer
from rest_framework import serializers
from rest_framework.serializers import Serializer


def _envelope(name: str, data: serializers.Field) -> Serializer:
    return inline_serializer(
        name=name,
        fields={
            "status": serializers.IntegerField(),
            "message": serializers.CharField(),
            "data": data,
            "errors": serializers.JSONField(allow_null=True),
        },
    )


def success_envelope_serializer(
    name: str,
    *,
    data: serializers.Field,
) -> Serializer:
    """Schema for `success_response` payloads."""

    return _envelope(name, data)


def error_envelope_serializer(name: str) -> Serializer:
    """Schema for `error_response` and exception handler payloads."""

    return _envelope(name, serializers.JSONField(allow_null=True))
