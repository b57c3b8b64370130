"""Response envelope helpers for handlers."""

from typing import Any

from rest_framework import status as http_status
from rest_framework.response import Response


def success(data: Any = None, message: str | None = None, status: int = http_status.HTTP_200_OK) -> Response:
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return Response(body, status=status)


def failure(message: str, status: int, code: str | None = None, data: Any = None) -> Response:
    body: dict[str, Any] = {"success": False, "message": message}
    if code:
        body["code"] = code
    if data:
        body["data"] = data
    return Response(body, status=status)
