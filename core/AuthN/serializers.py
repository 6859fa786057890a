from rest_framework import serializers

from .models import BaseUserModel


class UserSerializer(serializers.ModelSerializer):
    """Signed-in user summary returned with tokens and by /auth/me"""

    class Meta:
        model = BaseUserModel
        fields = ['id', 'email', 'username', 'name', 'role', 'phone_number', 'is_active']
        read_only_fields = fields


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_email(self, value):
        value = value.strip().lower()
        if not value:
            raise serializers.ValidationError("Email is required.")
        return value


class RefreshTokenSerializer(serializers.Serializer):
    refreshToken = serializers.CharField()
