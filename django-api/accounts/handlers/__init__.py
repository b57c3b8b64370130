from accounts.authentication import current_user_id
from accounts.handlers.permissions import IsCreator, IsEventee

__all__ = ["IsCreator", "IsEventee", "current_user_id"]
