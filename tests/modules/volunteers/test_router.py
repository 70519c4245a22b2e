"""
End-to-end tests for the volunteer endpoints.

The provider call (core.email.send_email) is patched; everything else,
including multipart parsing and temp file handling, runs for real.
"""

import re
from unittest.mock import AsyncMock, patch

import pytest

from volunteer_intake.core.errors import DeliveryError

DISPLAY_ID = re.compile(r"OEF-\d{4}")


@pytest.fixture
def photo(jpeg_bytes):
    """Multipart file field for the passport photo."""
    return {"passport": ("passport.jpg", jpeg_bytes, "image/jpeg")}


class TestSubmitVolunteerEndpoint:
    """POST /submit-volunteer"""

    def test_submission_emails_admin_and_removes_temp_file(
        self, client, test_settings, sample_form, photo, jpeg_bytes, approval_token, mock_send_email
    ):
        response = client.post("/submit-volunteer", data=sample_form, files=photo)

        assert response.status_code == 200
        assert response.json() == {"status": "success", "message": "Application received"}

        mock_send_email.assert_awaited_once()
        kwargs = mock_send_email.call_args.kwargs
        assert kwargs["to_email"] == "admin@test.com"
        assert "Jane Doe" in kwargs["subject"]
        assert "Jane Doe" in kwargs["html_content"]
        assert "email=jane%40example.com" in kwargs["html_content"]
        assert f"token={approval_token}" in kwargs["html_content"]
        assert [a.filename for a in kwargs["attachments"]] == ["passport.jpg"]
        assert kwargs["attachments"][0].content == jpeg_bytes

        assert list(test_settings.upload_dir.iterdir()) == []

    def test_missing_photo_returns_400_without_side_effects(
        self, client, test_settings, sample_form, mock_send_email
    ):
        response = client.post("/submit-volunteer", data=sample_form)

        assert response.status_code == 400
        assert response.json() == {"status": "error", "message": "No passport photo uploaded."}
        mock_send_email.assert_not_called()
        assert not test_settings.upload_dir.exists()

    def test_missing_email_returns_400(
        self, client, test_settings, sample_form, photo, mock_send_email
    ):
        del sample_form["email"]

        response = client.post("/submit-volunteer", data=sample_form, files=photo)

        assert response.status_code == 400
        assert response.json()["status"] == "error"
        assert "email" in response.json()["message"]
        mock_send_email.assert_not_called()
        assert not test_settings.upload_dir.exists()

    def test_only_email_is_required(self, client, photo, mock_send_email):
        response = client.post("/submit-volunteer", data={"email": "solo@example.com"}, files=photo)

        assert response.status_code == 200
        assert "N/A" in mock_send_email.call_args.kwargs["html_content"]

    def test_oversized_photo_returns_413(self, client, test_settings, sample_form, mock_send_email):
        test_settings.max_upload_bytes = 100

        response = client.post(
            "/submit-volunteer",
            data=sample_form,
            files={"passport": ("passport.jpg", b"x" * 101, "image/jpeg")},
        )

        assert response.status_code == 413
        assert response.json()["status"] == "error"
        mock_send_email.assert_not_called()
        assert not test_settings.upload_dir.exists()

    def test_delivery_failure_returns_500_without_leaking_details(
        self, client, test_settings, sample_form, photo
    ):
        with patch(
            "volunteer_intake.core.email.send_email", AsyncMock(side_effect=DeliveryError())
        ):
            response = client.post("/submit-volunteer", data=sample_form, files=photo)

        assert response.status_code == 500
        assert response.json() == {"status": "error", "message": "Email failed to send."}
        assert list(test_settings.upload_dir.iterdir()) == []


class TestApproveEndpoint:
    """GET /approve"""

    def test_valid_token_approves_and_notifies_applicant(
        self, client, approval_token, mock_send_email
    ):
        response = client.get(
            "/approve", params={"email": "jane@example.com", "token": approval_token}
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "jane@example.com" in response.text

        assert mock_send_email.await_count == 2
        for call in mock_send_email.call_args_list:
            assert call.kwargs["to_email"] == "jane@example.com"
            assert DISPLAY_ID.search(call.kwargs["html_content"])

        page_id = DISPLAY_ID.search(response.text).group()
        digital_id_html = mock_send_email.call_args_list[1].kwargs["html_content"]
        assert page_id in digital_id_html

    def test_wrong_token_returns_403_and_sends_nothing(self, client, mock_send_email):
        response = client.get("/approve", params={"email": "jane@example.com", "token": "wrong"})

        assert response.status_code == 403
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Invalid approval token."
        mock_send_email.assert_not_called()

    def test_missing_token_returns_403(self, client, mock_send_email):
        response = client.get("/approve", params={"email": "jane@example.com"})

        assert response.status_code == 403
        mock_send_email.assert_not_called()

    def test_missing_email_returns_400_and_sends_nothing(
        self, client, approval_token, mock_send_email
    ):
        response = client.get("/approve", params={"token": approval_token})

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Missing applicant email."
        mock_send_email.assert_not_called()

    def test_missing_email_with_wrong_token_is_still_403(self, client, mock_send_email):
        response = client.get("/approve", params={"token": "wrong"})

        assert response.status_code == 403
        mock_send_email.assert_not_called()

    def test_valid_token_approves_unknown_email(self, client, approval_token, mock_send_email):
        """Insecure by design: no submission needs to exist for the email."""
        response = client.get(
            "/approve", params={"email": "stranger@example.com", "token": approval_token}
        )

        assert response.status_code == 200
        assert mock_send_email.call_args_list[0].kwargs["to_email"] == "stranger@example.com"

    def test_revisiting_link_sends_duplicate_emails_with_new_id(
        self, client, approval_token, mock_send_email
    ):
        """Approval is not single-use: a second visit re-sends with a different id."""
        params = {"email": "jane@example.com", "token": approval_token}

        with patch(
            "volunteer_intake.modules.volunteers.service.generate_display_id",
            side_effect=["OEF-0001", "OEF-0002"],
        ):
            first = client.get("/approve", params=params)
            second = client.get("/approve", params=params)

        assert first.status_code == 200
        assert second.status_code == 200
        assert "OEF-0001" in first.text
        assert "OEF-0002" in second.text

        assert mock_send_email.await_count == 4
        first_visit = mock_send_email.call_args_list[:2]
        second_visit = mock_send_email.call_args_list[2:]
        for call in first_visit:
            assert "OEF-0001" in call.kwargs["html_content"]
            assert "OEF-0002" not in call.kwargs["html_content"]
        for call in second_visit:
            assert "OEF-0002" in call.kwargs["html_content"]
            assert "OEF-0001" not in call.kwargs["html_content"]

    def test_override_address_receives_applicant_emails(
        self, client, test_settings, approval_token, mock_send_email
    ):
        test_settings.applicant_email_override = "qa@test.com"

        response = client.get(
            "/approve", params={"email": "jane@example.com", "token": approval_token}
        )

        assert response.status_code == 200
        assert {c.kwargs["to_email"] for c in mock_send_email.call_args_list} == {"qa@test.com"}

    def test_delivery_failure_returns_500_text(self, client, approval_token):
        with patch(
            "volunteer_intake.core.email.send_email", AsyncMock(side_effect=DeliveryError())
        ):
            response = client.get(
                "/approve", params={"email": "jane@example.com", "token": approval_token}
            )

        assert response.status_code == 500
        assert response.text == "Admin approved, but failed to notify the applicant."


class TestDownloadIdEndpoint:
    """GET /download-id"""

    def test_renders_card_without_authentication(self, client):
        response = client.get(
            "/download-id", params={"email": "jane@example.com", "id": "OEF-1234"}
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "jane@example.com" in response.text
        assert "OEF-1234" in response.text
        assert "data=OEF-1234" in response.text

    def test_optional_name_and_interest(self, client):
        response = client.get(
            "/download-id",
            params={
                "email": "jane@example.com",
                "id": "OEF-1234",
                "name": "Jane Doe",
                "interest": "Health",
            },
        )

        assert "Jane Doe" in response.text
        assert "Health" in response.text

    def test_values_are_escaped(self, client):
        response = client.get(
            "/download-id", params={"email": "<script>x</script>", "id": "OEF-1234"}
        )

        assert response.status_code == 200
        assert "<script>x</script>" not in response.text
        assert "&lt;script&gt;" in response.text

    def test_missing_id_generates_one(self, client):
        response = client.get("/download-id", params={"email": "jane@example.com"})

        assert response.status_code == 200
        assert DISPLAY_ID.search(response.text)
