"""
Application Configuration

Settings are loaded from environment variables (and an optional .env file)
once per process and injected into handlers via ``get_settings``.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_APPROVAL_TOKEN = "change-me"


class Settings(BaseSettings):
    """Runtime configuration for the volunteer intake API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Runtime
    python_env: str = "development"
    log_level: str = "INFO"
    cors_origins: str = "*"

    # Email delivery (Resend)
    resend_api_key: str | None = None
    email_from: str = "Onakpa Emmanuel Foundation <noreply@oef.org>"
    admin_email: str = "admin@oef.org"
    email_timeout_seconds: float = Field(30.0, gt=0)

    # Approval flow
    approval_token: str = DEFAULT_APPROVAL_TOKEN
    public_base_url: str | None = None
    applicant_email_override: str | None = None
    send_digital_id_email: bool = True

    # Uploads
    upload_dir: Path = Path("./uploads")
    max_upload_bytes: int = 15 * 1024 * 1024
    max_request_bytes: int = 20 * 1024 * 1024

    # Digital ID card
    qr_api_url: str = "https://api.qrserver.com/v1/create-qr-code/"
    organization_name: str = "Onakpa Emmanuel Foundation"
    organization_tagline: str = "...we split the seas, so you can walk right through it"

    @property
    def is_production(self) -> bool:
        return self.python_env.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.python_env.lower() == "development"

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings accessor, usable as a FastAPI dependency."""
    return Settings()
