"""
Service Errors

Every error carries a user-facing message, a machine-readable error code,
and the HTTP status the router should answer with.
"""


class VolunteerServiceError(Exception):
    """Base exception for volunteer intake errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class ValidationError(VolunteerServiceError):
    """Raised when a submission is missing required input."""

    def __init__(self, message: str = "Invalid submission."):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=400,
        )


class PhotoTooLargeError(ValidationError):
    """Raised when the uploaded photo exceeds the configured size cap."""

    def __init__(self, max_bytes: int):
        super().__init__(f"Passport photo is too large (max {max_bytes // (1024 * 1024)}MB).")
        self.error_code = "PHOTO_TOO_LARGE"
        self.status_code = 413


class AuthorizationError(VolunteerServiceError):
    """Raised when an approval link carries the wrong token."""

    def __init__(self, message: str = "Invalid approval token."):
        super().__init__(
            message=message,
            error_code="INVALID_TOKEN",
            status_code=403,
        )


class DeliveryError(VolunteerServiceError):
    """Raised when the email provider rejects, fails, or times out."""

    def __init__(self, message: str = "Email failed to send."):
        super().__init__(
            message=message,
            error_code="DELIVERY_FAILED",
            status_code=500,
        )
