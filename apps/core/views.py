"""
Authentication and user administration views for the Odin POS API.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import NotFoundError, PosError, plain_text_response
from .serializers import LoginSerializer, UserCreateSerializer, UserSummarySerializer

logger = logging.getLogger(__name__)

User = get_user_model()

STAFF_ROLES = (User.ADMIN, User.SUPERVISOR, User.CASHIER)


def _toggle_user(email):
    email = (email or "").strip()
    user = User.objects.filter(email=email).first()
    if user is None:
        raise NotFoundError("User not found")

    user.is_active = not user.is_active
    user.save(update_fields=["is_active"])
    logger.info(f"User {email} active={user.is_active}")
    return Response({"email": user.email, "isActive": user.is_active})


# Authentication Views


class LoginView(APIView):
    """
    Check credentials and return the caller's profile.

    The client keeps the returned role and email and sends them back as
    ``X-User-Role`` and ``X-User-Email`` on every later request.
    """

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        email = serializer.validated_data["email"].strip()
        password = serializer.validated_data["password"]

        user = User.objects.filter(email=email).first()
        if user is None or not user.is_active or not user.check_password(password):
            logger.warning(f"Failed login for {email or '<blank>'}")
            return plain_text_response("Unauthorized", status.HTTP_401_UNAUTHORIZED)

        return Response(
            {"id": user.id, "name": user.name, "email": user.email, "role": user.role}
        )


class RegisterView(APIView):
    """Self-registration; only Admin and Cashier accounts can be created here."""

    def post(self, request):
        serializer = UserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        email = data["email"].strip()
        if not email or not data["password"].strip():
            raise PosError("Email and Password required")

        role = data["role"].strip() or User.CASHIER
        if role.lower() not in (User.ADMIN.lower(), User.CASHIER.lower()):
            raise PosError("Role must be Admin or Cashier")
        role = User.ADMIN if role.lower() == User.ADMIN.lower() else User.CASHIER

        with transaction.atomic():
            if User.objects.filter(email=email).exists():
                raise PosError("User already exists")
            user = User.objects.create_user(
                email=email, password=data["password"], name=data["name"], role=role
            )

        logger.info(f"Registered {role} account {email}")
        return Response(UserSummarySerializer(user).data)


# User Administration Views


class AdminUserListCreateView(APIView):
    """
    GET: list every account by name.
    POST: create an account with any staff role.
    """

    def get(self, request):
        users = User.objects.order_by("name")
        return Response(UserSummarySerializer(users, many=True).data)

    def post(self, request):
        serializer = UserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        for key in ("name", "email", "role"):
            data[key] = data[key].strip()

        if not data["name"]:
            raise PosError("Name is required")
        if not data["email"]:
            raise PosError("Email is required")
        if not data["password"].strip():
            raise PosError("Password is required")
        if data["role"] not in STAFF_ROLES:
            raise PosError("Role must be Admin, Supervisor or Cashier")

        with transaction.atomic():
            if User.objects.filter(email=data["email"]).exists():
                raise PosError("Email already exists")
            user = User.objects.create_user(
                email=data["email"],
                password=data["password"],
                name=data["name"],
                role=data["role"],
            )

        logger.info(f"{request.principal} created {user.role} account {user.email}")
        return Response(UserSummarySerializer(user).data)


class AdminUserToggleView(APIView):
    def put(self, request, email):
        return _toggle_user(email)


class LegacyUserListView(APIView):
    """Older admin screen listing; ordered by role, then name."""

    def get(self, request):
        users = User.objects.order_by("role", "name")
        return Response(UserSummarySerializer(users, many=True).data)


class LegacyUserToggleView(APIView):
    def put(self, request, email):
        return _toggle_user(email)
