"""HTTP handlers for sign-up, sign-in and the caller's profile."""

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.domain import AuthResult
from accounts.handlers.serializers import (
    ProfileUpdateSerializer,
    SignInSerializer,
    SignUpSerializer,
    UserSerializer,
)
from accounts.services import build_auth_service
from common.responses import success


def _auth_payload(result: AuthResult) -> dict:
    return {"user": UserSerializer(result.user).data, "token": result.token}


class SignUpView(APIView):
    """Handler for POST /api/auth/signup"""

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        serializer = SignUpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = build_auth_service().sign_up(**serializer.validated_data)
        return success(_auth_payload(result), "User registered successfully", status.HTTP_201_CREATED)


class SignInView(APIView):
    """Handler for POST /api/auth/signin"""

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        serializer = SignInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = build_auth_service().sign_in(**serializer.validated_data)
        return success(_auth_payload(result), "Signed in successfully")


class ProfileView(APIView):
    """Handler for GET/PATCH /api/auth/profile"""

    def get(self, request: Request) -> Response:
        user = build_auth_service().get_user(str(request.user.pk))
        return success(UserSerializer(user).data)

    def patch(self, request: Request) -> Response:
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = build_auth_service().update_profile(str(request.user.pk), serializer.validated_data)
        return success(UserSerializer(user).data, "Profile updated")
