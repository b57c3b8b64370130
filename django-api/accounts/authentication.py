"""DRF authentication for ``Authorization: Bearer <token>`` headers."""

from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.request import Request

from accounts.domain.errors import InvalidTokenError
from accounts.models import User
from accounts.services.tokens import TokenClaims, verify_token
from common.domain import UserId


class BearerTokenAuthentication(BaseAuthentication):
    keyword = b"bearer"

    def authenticate(self, request: Request) -> tuple[User, TokenClaims] | None:
        parts = get_authorization_header(request).split()
        if not parts or parts[0].lower() != self.keyword:
            return None
        if len(parts) != 2:
            raise exceptions.AuthenticationFailed("Invalid Authorization header")
        try:
            claims = verify_token(parts[1].decode("latin-1"))
        except InvalidTokenError as exc:
            raise exceptions.AuthenticationFailed(exc.message)
        user = User.objects.filter(pk=claims.user_id.value, is_active=True).first()
        if user is None:
            raise exceptions.AuthenticationFailed("User account not found")
        return user, claims

    def authenticate_header(self, request: Request) -> str:
        return 'Bearer realm="api"'


def current_user_id(request: Request) -> UserId:
    """Return the authenticated caller's id as a domain identifier."""
    return UserId(request.user.pk)
