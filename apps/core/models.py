"""
Core models for the Odin POS backend.
"""

import uuid

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models


class UserManager(BaseUserManager):
    """
    Manager for the email-keyed user model.

    Every path that stores a password goes through ``set_password`` so the
    configured hasher (Argon2 in deployment) is applied consistently.
    """

    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("The email must be set")
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", User.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """
    POS user account.

    Roles drive the header-based access rules in
    ``apps.core.role_middleware``:
    - Admin: everything, including user management
    - Supervisor: products, sales and reports
    - Cashier: sales and product reads
    """

    # Role choices
    ADMIN = "Admin"
    SUPERVISOR = "Supervisor"
    CASHIER = "Cashier"

    ROLE_CHOICES = [
        (ADMIN, "Admin"),
        (SUPERVISOR, "Supervisor"),
        (CASHIER, "Cashier"),
    ]

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the user",
    )

    # Email is the login identifier
    username = None
    first_name = None
    last_name = None

    name = models.CharField(
        max_length=150,
        blank=True,
        help_text="Display name",
    )

    email = models.EmailField(
        unique=True,
        help_text="Login email, unique across all users",
    )

    role = models.CharField(
        max_length=20,
        choices=ROLE_CHOICES,
        default=CASHIER,
        help_text="User's role in the POS",
    )

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        db_table = "users"
        ordering = ["name"]
        verbose_name = "User"
        verbose_name_plural = "Users"

    def __str__(self):
        return f"{self.email} ({self.role})"

    def get_full_name(self):
        return self.name

    def get_short_name(self):
        return self.name or self.email

    def is_admin(self):
        """Check if user is an administrator."""
        return self.role == self.ADMIN
