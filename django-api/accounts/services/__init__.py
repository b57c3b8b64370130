from accounts.services.auth_service import AuthService
from accounts.stores import DjangoUserStore


def build_auth_service() -> AuthService:
    return AuthService(DjangoUserStore())


__all__ = ["AuthService", "build_auth_service"]
