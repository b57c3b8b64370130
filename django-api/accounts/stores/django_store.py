"""Django ORM implementation of the UserStore."""

from typing import Any

from django.db import IntegrityError, transaction

from accounts import models as orm
from accounts.domain import User
from accounts.domain.errors import EmailAlreadyRegisteredError
from accounts.stores.interfaces import UserStore
from common.domain import UserId


def to_domain(row: orm.User) -> User:
    return User(
        id=UserId(row.id),
        email=row.email,
        first_name=row.first_name,
        last_name=row.last_name,
        phone=row.phone,
        role=row.role,
        bio=row.bio,
        profile_image=row.profile_image,
        default_reminder=row.default_reminder,
        is_email_verified=row.is_email_verified,
        created_at=row.created_at,
    )


class DjangoUserStore(UserStore):
    """Relational user store using Django ORM."""

    def get_user(self, user_id: UserId) -> User | None:
        row = orm.User.objects.filter(pk=user_id.value, is_active=True).first()
        return to_domain(row) if row else None

    def email_exists(self, email: str) -> bool:
        return orm.User.objects.filter(email__iexact=email).exists()

    def create_user(self, *, email: str, password: str, **fields: Any) -> User:
        try:
            with transaction.atomic():
                row = orm.User.objects.create_user(email=email, password=password, **fields)
        except IntegrityError:
            raise EmailAlreadyRegisteredError()
        return to_domain(row)

    def authenticate(self, email: str, password: str) -> User | None:
        row = orm.User.objects.filter(email__iexact=email, is_active=True).first()
        if row is None or not row.check_password(password):
            return None
        return to_domain(row)

    def update_user(self, user_id: UserId, **fields: Any) -> User | None:
        row = orm.User.objects.filter(pk=user_id.value, is_active=True).first()
        if row is None:
            return None
        for name, value in fields.items():
            setattr(row, name, value)
        row.save(update_fields=[*fields.keys(), "updated_at"])
        return to_domain(row)
