"""
Sentry setup for the Odin POS backend.

Events are scrubbed before they leave the server:
- passwords, secrets and session cookies are redacted
- the X-User-Role header is redacted; it is the only credential the API sees
- cash tendered and change amounts are redacted
- cashier emails are masked wherever they show up: the X-User-Email header,
  login and checkout bodies, the user toggle URLs and log messages
"""

import re
from typing import Any, Dict, Optional

import sentry_sdk
from sentry_sdk.integrations.django import DjangoIntegration

REDACTED = "[REDACTED]"

# Any key containing one of these is dropped
SECRET_KEY_PARTS = ("password", "secret", "token", "authorization", "cookie", "csrf", "session")

# Exact keys, lowercased, as they appear in headers, request bodies and WSGI env
REDACTED_KEYS = {
    "x-user-role",
    "http_x_user_role",
    "cashreceived",
    "cash_received",
    "change",
}
EMAIL_KEYS = {
    "email",
    "createdbyemail",
    "created_by_email",
    "x-user-email",
    "http_x_user_email",
}

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
# /api/auth/users/<email>/toggle and /api/admin/users/<email>/toggle
URL_EMAIL_PATTERN = re.compile(r"(/users/)([^/?#]+%40[^/?#]+)", re.IGNORECASE)


def mask_email(email: str) -> str:
    """
    Keep the first two characters of the local part and the domain.

    >>> mask_email("cashier@odin.com")
    'ca***@odin.com'
    """
    local, sep, domain = str(email).partition("@")
    if not sep or not local or not domain:
        return "REDACTED@EMAIL"
    return f"{local[:2]}***@{domain}"


def mask_emails_in(text: str) -> str:
    text = URL_EMAIL_PATTERN.sub(lambda m: m.group(1) + REDACTED, text)
    return EMAIL_PATTERN.sub(lambda m: mask_email(m.group(0)), text)


def _scrub_value(key: str, value: Any) -> Any:
    key_lower = str(key).lower()
    if key_lower in REDACTED_KEYS or any(part in key_lower for part in SECRET_KEY_PARTS):
        return REDACTED
    if key_lower in EMAIL_KEYS and isinstance(value, str):
        return mask_email(value) if value else value
    return scrub(value)


def scrub(data: Any) -> Any:
    """Recursively scrub a header dict, request body, log extra or string."""
    if isinstance(data, dict):
        return {key: _scrub_value(key, value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [scrub(item) for item in data]
    if isinstance(data, str):
        return mask_emails_in(data)
    return data


def before_send(event: Dict[str, Any], hint: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Scrub an error or message event before it is sent."""
    request = event.get("request")
    if request:
        for section in ("headers", "data", "env"):
            if section in request:
                request[section] = scrub(request[section])
        if "cookies" in request:
            request["cookies"] = {name: REDACTED for name in request["cookies"]}
        for section in ("url", "query_string"):
            if isinstance(request.get(section), str):
                request[section] = mask_emails_in(request[section])

    user = event.get("user")
    if user:
        if "email" in user:
            user["email"] = mask_email(user["email"])
        if "ip_address" in user:
            user["ip_address"] = "XXX.XXX.XXX.XXX"

    if "extra" in event:
        event["extra"] = scrub(event["extra"])

    # Log records from the sale engine and user views name the cashier
    logentry = event.get("logentry")
    if logentry:
        for field in ("message", "formatted"):
            if isinstance(logentry.get(field), str):
                logentry[field] = mask_emails_in(logentry[field])
        if "params" in logentry:
            logentry["params"] = scrub(logentry["params"])

    for exception in event.get("exception", {}).get("values", []):
        if isinstance(exception.get("value"), str):
            exception["value"] = mask_emails_in(exception["value"])

    return event


def before_breadcrumb(crumb: Dict[str, Any], hint: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Scrub log and HTTP breadcrumbs attached to later events."""
    if isinstance(crumb.get("message"), str):
        crumb["message"] = mask_emails_in(crumb["message"])
    if "data" in crumb:
        crumb["data"] = scrub(crumb["data"])
    return crumb


def initialize_sentry(
    dsn: Optional[str],
    environment: str = "development",
    traces_sample_rate: float = 0.1,
    release: Optional[str] = None,
) -> None:
    """
    Initialize the Sentry SDK with the Django integration.

    Does nothing when ``dsn`` is empty, so local runs never report.
    """
    if not dsn:
        return

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        traces_sample_rate=traces_sample_rate,
        integrations=[DjangoIntegration(transaction_style="url")],
        before_send=before_send,
        before_breadcrumb=before_breadcrumb,
        send_default_pii=False,
        max_breadcrumbs=50,
    )
