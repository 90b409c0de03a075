"""JSON envelope used by every API response.

    {"status": 0 | 1, "message": str, "data": ..., "errors": ...}

`status` is 0 on success and 1 on failure.
"""

from __future__ import annotations

from typing import TypeAlias

from rest_framework import status
from rest_framework.response import Response

JSONScalar: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]


def _envelope(
    *,
    ok: bool,
    message: str,
    data: JSONValue | None,
    errors: JSONValue | None,
) -> dict[str, JSONValue]:
    return {
        "status": 0 if ok else 1,
        "message": message,
        "data": data,
        "errors": errors,
    }


def success_response(
    data: JSONValue | None,
    message: str = "OK",
    *,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    payload = _envelope(ok=True, message=message, data=data, errors=None)
    return Response(payload, status=status_code)


def error_response(
    message: str,
    *,
    errors: JSONValue | None = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> Response:
    payload = _envelope(ok=False, message=message, data=None, errors=errors)
    return Response(payload, status=status_code)
