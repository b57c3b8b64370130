"""Project-level views: health check and JSON error pages."""

from django.db import connection
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from common.responses import success


class HealthView(APIView):
    """Handler for GET /health"""

    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_classes = []

    def get(self, request: Request) -> Response:
        connection.ensure_connection()
        return success({"status": "ok", "timestamp": timezone.now()}, "Eventful API is running")


def not_found(request: HttpRequest, exception: Exception | None = None) -> JsonResponse:
    return JsonResponse(
        {"success": False, "message": f"Route {request.path} not found", "code": "NOT_FOUND"}, status=404
    )


def server_error(request: HttpRequest) -> JsonResponse:
    return JsonResponse(
        {"success": False, "message": "Internal server error", "code": "INTERNAL_ERROR"}, status=500
    )
