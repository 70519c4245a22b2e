"""
Core module - Configuration, errors, email delivery, and middleware.
"""

from volunteer_intake.core.config import Settings, get_settings
from volunteer_intake.core.errors import (
    AuthorizationError,
    DeliveryError,
    PhotoTooLargeError,
    ValidationError,
    VolunteerServiceError,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "VolunteerServiceError",
    "ValidationError",
    "PhotoTooLargeError",
    "AuthorizationError",
    "DeliveryError",
]
