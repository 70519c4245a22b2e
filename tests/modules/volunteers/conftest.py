"""
Fixtures for volunteer module tests.
"""

from io import BytesIO
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient
from starlette.datastructures import Headers, UploadFile

from volunteer_intake.core.config import Settings, get_settings
from volunteer_intake.core.email import DeliveryReceipt
from volunteer_intake.main import app
from volunteer_intake.modules.volunteers.schemas import VolunteerSubmission

TEST_TOKEN = "test-secret-token"
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + b"\x00" * 256 + b"\xff\xd9"


@pytest.fixture
def test_settings(tmp_path):
    """Settings isolated from the environment, with a per-test upload dir."""
    return Settings(
        _env_file=None,
        python_env="test",
        resend_api_key=None,
        email_from="OEF Test <noreply@test.com>",
        admin_email="admin@test.com",
        approval_token=TEST_TOKEN,
        public_base_url="http://testserver",
        applicant_email_override=None,
        send_digital_id_email=True,
        upload_dir=tmp_path / "uploads",
        email_timeout_seconds=5,
    )


@pytest.fixture
def approval_token():
    """The shared secret configured in test_settings."""
    return TEST_TOKEN


@pytest.fixture
def jpeg_bytes():
    """Minimal JPEG payload used as the passport photo."""
    return JPEG_BYTES


@pytest.fixture
def sample_submission():
    """A complete volunteer submission."""
    return VolunteerSubmission(
        full_name="Jane Doe",
        dob="1990-04-12",
        email="jane@example.com",
        phone="+2348012345678",
        nationality="Nigerian",
        language="English",
        interest="Education",
        motivation="I want to help children learn to read.",
        transport="Yes",
        criminal_record="No",
    )


@pytest.fixture
def sample_form():
    """Multipart form fields as sent by the volunteer page."""
    return {
        "fullName": "Jane Doe",
        "dob": "1990-04-12",
        "email": "jane@example.com",
        "phone": "+2348012345678",
        "nationality": "Nigerian",
        "language": "English",
        "interest": "Education",
        "motivation": "I want to help children learn to read.",
        "transport": "Yes",
        "criminal_record": "No",
    }


@pytest.fixture
def make_upload():
    """Factory for in-memory UploadFile objects."""

    def _make(
        content: bytes = JPEG_BYTES,
        filename: str | None = "passport.jpg",
        content_type: str = "image/jpeg",
    ) -> UploadFile:
        return UploadFile(
            file=BytesIO(content),
            filename=filename,
            headers=Headers({"content-type": content_type}),
        )

    return _make


@pytest.fixture
def mock_send_email():
    """Patch the provider call; every send succeeds with a fake receipt."""

    async def _send(to_email, subject, html_content, *, settings, attachments=None):
        return DeliveryReceipt(
            id="test-receipt",
            to=to_email,
            subject=subject,
            attachments=[attachment.filename for attachment in attachments or []],
        )

    with patch(
        "volunteer_intake.core.email.send_email", new=AsyncMock(side_effect=_send)
    ) as mock:
        yield mock


@pytest.fixture
def client(test_settings):
    """Test client with settings injected."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()
