"""
Authentication Views
====================

JWT login / refresh for the dashboard. Tokens are issued by
rest_framework_simplejwt; the response keys follow the dashboard client
(accessToken / refreshToken).
"""
import logging

from django.contrib.auth import authenticate
from rest_framework import permissions, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.tokens import RefreshToken

from utils.response_utils import api_response, error_response
from .serializers import LoginSerializer, RefreshTokenSerializer, UserSerializer

logger = logging.getLogger(__name__)


def generate_tokens(user):
    """
    Generate JWT tokens for a user.

    Returns:
        dict: accessToken, refreshToken
    """
    refresh = RefreshToken.for_user(user)
    return {
        "accessToken": str(refresh.access_token),
        "refreshToken": str(refresh),
    }


class LoginView(APIView):
    """Authenticate with email + password and return a token pair"""

    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(
                "Email and password are required",
                status.HTTP_400_BAD_REQUEST,
                serializer.errors,
            )

        email = serializer.validated_data['email']
        user = authenticate(request, email=email, password=serializer.validated_data['password'])
        if user is None:
            logger.warning(f"Failed login attempt for {email}")
            return error_response("Invalid credentials", status.HTTP_401_UNAUTHORIZED)

        tokens = generate_tokens(user)
        logger.info(f"User {user.id} logged in")
        return api_response(
            {**tokens, "user": UserSerializer(user).data},
            "Login successful",
        )


class RefreshTokenView(APIView):
    """Exchange a refresh token for a new token pair (refresh tokens rotate)"""

    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = RefreshTokenSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("refreshToken is required", status.HTTP_400_BAD_REQUEST, serializer.errors)

        refresh_serializer = TokenRefreshSerializer(data={"refresh": serializer.validated_data['refreshToken']})
        try:
            refresh_serializer.is_valid(raise_exception=True)
        except (TokenError, InvalidToken) as e:
            return error_response(f"Invalid refresh token: {str(e)}", status.HTTP_401_UNAUTHORIZED)

        data = refresh_serializer.validated_data
        return api_response(
            {
                "accessToken": data["access"],
                "refreshToken": data.get("refresh", serializer.validated_data['refreshToken']),
            },
            "Token refreshed",
        )


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return api_response(UserSerializer(request.user).data, "User fetched successfully")
