"""
Management command to create the initial administrator account.

Runs safely on every deploy: if the admin email already exists nothing is
changed.

Usage:
    python manage.py seed_admin
    python manage.py seed_admin --email owner@shop.com --password s3cret
"""

from django.conf import settings
from django.core.management.base import BaseCommand

from apps.core.models import User


class Command(BaseCommand):
    help = "Create the initial Admin account if it does not exist"

    def add_arguments(self, parser):
        parser.add_argument(
            "--email",
            default=settings.ODIN_SEED_ADMIN_EMAIL,
            help="Admin login email",
        )
        parser.add_argument(
            "--password",
            default=settings.ODIN_SEED_ADMIN_PASSWORD,
            help="Admin password (defaults to ODIN_SEED_ADMIN_PASSWORD)",
        )
        parser.add_argument("--name", default="Administrador", help="Display name")

    def handle(self, *args, **options):
        email = options["email"].strip()

        if User.objects.filter(email=email).exists():
            self.stdout.write(self.style.WARNING(f"Admin {email} already exists"))
            return

        User.objects.create_user(
            email=email,
            password=options["password"],
            name=options["name"],
            role=User.ADMIN,
            is_staff=True,
            is_superuser=True,
        )
        self.stdout.write(self.style.SUCCESS(f"✓ Created admin {email}"))
