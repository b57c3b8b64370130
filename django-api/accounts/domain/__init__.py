from accounts.domain.models import AuthResult, User

__all__ = ["AuthResult", "User"]
