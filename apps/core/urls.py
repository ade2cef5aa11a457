from django.urls import path

from . import health, views

app_name = "core"

urlpatterns = [
    # Health checks
    path("api/health", health.health_check, name="health_check"),
    path("api/health/ready", health.readiness_probe, name="readiness_probe"),
    # Authentication
    path("api/auth/login", views.LoginView.as_view(), name="login"),
    path("api/auth/register", views.RegisterView.as_view(), name="register"),
    path("api/auth/users", views.LegacyUserListView.as_view(), name="legacy_user_list"),
    path(
        "api/auth/users/<str:email>/toggle",
        views.LegacyUserToggleView.as_view(),
        name="legacy_user_toggle",
    ),
    # User administration
    path("api/admin/users", views.AdminUserListCreateView.as_view(), name="admin_user_list"),
    path(
        "api/admin/users/<str:email>/toggle",
        views.AdminUserToggleView.as_view(),
        name="admin_user_toggle",
    ),
]
