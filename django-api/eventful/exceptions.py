"""Maps domain and framework errors to the JSON error envelope.

Handlers never build error responses themselves: services raise domain
errors and this handler turns them into ``{"success": false, ...}``.
"""

import logging
from typing import Any

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response

from common.domain.errors import DomainError, ErrorKind
from common.responses import failure

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTHENTICATION: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.PERMISSION: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # Business-rule conflicts are client-correctable and reported as 400.
    ErrorKind.CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.GATEWAY: status.HTTP_502_BAD_GATEWAY,
}


def _first_message(detail: Any) -> str:
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = _first_message(value)
            if field in ("non_field_errors", "detail"):
                return message
            return f"{field}: {message}"
    if isinstance(detail, (list, tuple)) and detail:
        return _first_message(detail[0])
    return str(detail)


def exception_handler(exc: Exception, context: dict[str, Any]) -> Response:
    if isinstance(exc, DomainError):
        return failure(exc.message, STATUS_BY_KIND[exc.kind], code=exc.code.value, data=exc.details)

    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, PermissionDenied):
        exc = exceptions.PermissionDenied()

    if isinstance(exc, exceptions.APIException):
        if isinstance(exc, exceptions.ValidationError):
            response = failure(
                _first_message(exc.detail),
                exc.status_code,
                code="VALIDATION_FAILED",
                data={"errors": exc.detail},
            )
        else:
            response = failure(_first_message(exc.detail), exc.status_code, code=exc.default_code.upper())
        auth_header = getattr(exc, "auth_header", None)
        if auth_header:
            response["WWW-Authenticate"] = auth_header
        wait = getattr(exc, "wait", None)
        if wait:
            response["Retry-After"] = str(int(wait))
        return response

    view = context.get("view")
    logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "view")
    message = str(exc) if settings.DEBUG else "Internal server error"
    return failure(message, status.HTTP_500_INTERNAL_SERVER_ERROR, code="INTERNAL_ERROR")
