"""Serializers for account requests and responses."""

from rest_framework import serializers

from accounts.models import Role
from common.reminders import ReminderOffset


class SignUpSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True, trim_whitespace=False)
    phone = serializers.RegexField(
        r"^[+]?[(]?[0-9]{3}[)]?[-\s.]?[0-9]{3}[-\s.]?[0-9]{4,6}$",
        required=False,
        allow_blank=True,
        error_messages={"invalid": "Please provide a valid phone number"},
    )
    role = serializers.ChoiceField(choices=Role.choices, default=Role.EVENTEE)


class SignInSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class ProfileUpdateSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=100, required=False)
    last_name = serializers.CharField(max_length=100, required=False)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    bio = serializers.CharField(max_length=500, required=False, allow_blank=True)
    profile_image = serializers.URLField(max_length=500, required=False, allow_null=True)
    default_reminder = serializers.ChoiceField(
        choices=ReminderOffset.choices, required=False, allow_null=True
    )


class UserSerializer(serializers.Serializer):
    """Serializer for the User domain model."""

    id = serializers.CharField(source="id.value")
    email = serializers.EmailField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    phone = serializers.CharField()
    role = serializers.CharField()
    bio = serializers.CharField()
    profile_image = serializers.CharField(allow_null=True)
    default_reminder = serializers.CharField(allow_null=True)
    is_email_verified = serializers.BooleanField()
    created_at = serializers.DateTimeField()
