"""
Volunteer Shared Helpers

Link building and display-id generation used by the service and the pages.
"""

import secrets
from urllib.parse import urlencode

DISPLAY_ID_PREFIX = "OEF"


def generate_display_id() -> str:
    """
    Generate a cosmetic display identifier such as ``OEF-0427``.

    The id is not stored anywhere; every call returns a fresh value.
    """
    return f"{DISPLAY_ID_PREFIX}-{secrets.randbelow(10_000):04d}"


def normalize_base_url(base_url: str) -> str:
    """Strip trailing slashes so paths can be appended safely."""
    return base_url.rstrip("/")


def build_approval_link(base_url: str, email: str, token: str) -> str:
    """
    Build the administrator's approval link.

    Args:
        base_url: Externally reachable base URL of this service
        email: Applicant email (URL-encoded into the query string)
        token: Shared approval token

    Returns:
        Absolute URL of the /approve endpoint
    """
    query = urlencode({"email": email, "token": token})
    return f"{normalize_base_url(base_url)}/approve?{query}"


def build_card_link(
    base_url: str,
    email: str,
    display_id: str,
    name: str | None = None,
    interest: str | None = None,
) -> str:
    """Build the link to the printable ID card view."""
    params = {"email": email, "id": display_id}
    if name:
        params["name"] = name
    if interest:
        params["interest"] = interest
    return f"{normalize_base_url(base_url)}/download-id?{urlencode(params)}"


def build_qr_url(qr_api_url: str, display_id: str, size: int = 150) -> str:
    """Build the third-party QR image URL encoding the display id."""
    query = urlencode({"size": f"{size}x{size}", "data": display_id})
    return f"{qr_api_url}?{query}"
