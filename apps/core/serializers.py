"""
Serializers for authentication and user management.

Input serializers only parse and type-check payloads; the business checks
(required fields, duplicate emails, allowed roles) live in the views so the
clients get the same plain-text reasons on every path.
"""

from django.contrib.auth import get_user_model

from rest_framework import serializers

User = get_user_model()


class UserSummarySerializer(serializers.ModelSerializer):
    """Public view of a user account as shown in the admin dashboard."""

    isActive = serializers.BooleanField(source="is_active", read_only=True)

    class Meta:
        model = User
        fields = ["id", "name", "email", "role", "isActive"]
        read_only_fields = fields


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField(required=False, allow_blank=True, default="")
    password = serializers.CharField(
        required=False, allow_blank=True, default="", trim_whitespace=False
    )


class UserCreateSerializer(serializers.Serializer):
    """Payload for both self-registration and admin user creation."""

    name = serializers.CharField(required=False, allow_blank=True, default="")
    email = serializers.CharField(required=False, allow_blank=True, default="")
    password = serializers.CharField(
        required=False, allow_blank=True, default="", trim_whitespace=False
    )
    role = serializers.CharField(required=False, allow_blank=True, default="")
