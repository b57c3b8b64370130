"""Role-based permissions."""

from rest_framework.permissions import BasePermission

from accounts.models import Role


class IsCreator(BasePermission):
    message = "Forbidden: creator account required"

    def has_permission(self, request, view) -> bool:
        return bool(request.user and request.user.is_authenticated and request.user.role == Role.CREATOR)


class IsEventee(BasePermission):
    message = "Forbidden: attendee account required"

    def has_permission(self, request, view) -> bool:
        return bool(request.user and request.user.is_authenticated and request.user.role == Role.EVENTEE)
