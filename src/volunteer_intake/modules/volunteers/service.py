"""
Volunteer Service Layer

Business logic for volunteer intake and approval.
Orchestrates temporary photo storage and email notifications.

This module implements:
1. Intake Flow:
   - Validate and store the passport photo
   - Build the approval link for the administrator
   - Email the submission with the photo attached
   - Remove the temporary photo (always attempted)

2. Approval Flow:
   - Compare the link token with the configured shared secret
   - Generate a cosmetic display id
   - Email the applicant an approval notice and a digital ID link

3. ID Card:
   - Assemble the values shown on the printable card

Known limitations (kept as built):
- The approval token is one shared secret, not bound to a submission
- Nothing is persisted, so an approval link can be replayed and every
  visit sends new emails with a new display id
"""

import logging
import secrets

from fastapi import UploadFile

from volunteer_intake.core.config import Settings
from volunteer_intake.core.email import (
    EmailAttachment,
    send_admin_submission_notification,
    send_applicant_approved,
    send_digital_id,
)
from volunteer_intake.core.errors import AuthorizationError, ValidationError
from volunteer_intake.modules.volunteers import storage
from volunteer_intake.modules.volunteers.helpers import (
    build_approval_link,
    build_card_link,
    build_qr_url,
    generate_display_id,
)
from volunteer_intake.modules.volunteers.schemas import (
    ApprovalAction,
    ApprovalResult,
    IdCard,
    SubmissionResponse,
    VolunteerSubmission,
)

logger = logging.getLogger(__name__)

APPLICATION_RECEIVED = "Application received"
MISSING_EMAIL_MESSAGE = "Missing applicant email."


def is_token_valid(token: str | None, settings: Settings) -> bool:
    """Exact comparison of a link token against the configured secret."""
    if not token:
        return False
    return secrets.compare_digest(token.encode(), settings.approval_token.encode())


def resolve_applicant_recipient(email: str, settings: Settings) -> str:
    """
    Address that applicant emails are actually sent to.

    When APPLICANT_EMAIL_OVERRIDE is set (staging), every applicant email
    goes there instead of to the applicant.
    """
    if settings.applicant_email_override:
        return settings.applicant_email_override
    return email


async def submit_volunteer(
    submission: VolunteerSubmission,
    photo_upload: UploadFile | None,
    base_url: str,
    settings: Settings,
) -> SubmissionResponse:
    """
    Accept a volunteer application and forward it to the administrator.

    Args:
        submission: Validated form fields
        photo_upload: The passport photo file field
        base_url: Externally reachable base URL for the approval link
        settings: Application settings

    Returns:
        Success envelope

    Raises:
        ValidationError: If the photo is missing, empty, or too large
        DeliveryError: If the administrator email could not be sent
    """
    photo = await storage.save_photo(
        photo_upload,
        upload_dir=settings.upload_dir,
        max_bytes=settings.max_upload_bytes,
    )

    logger.info(f"Processing volunteer submission for: {submission.display_name}")

    try:
        approve_link = build_approval_link(base_url, submission.email, settings.approval_token)
        attachment = EmailAttachment(
            filename=photo.filename,
            content=await storage.read_photo(photo),
            content_type=photo.content_type,
        )
        receipt = await send_admin_submission_notification(
            applicant_name=submission.display_name,
            rows=submission.display_rows(),
            motivation=submission.motivation or "",
            approve_link=approve_link,
            photo=attachment,
            settings=settings,
        )
    finally:
        storage.discard_photo(photo)

    logger.info(f"Application sent for: {submission.display_name}, receipt: {receipt.id}")
    return SubmissionResponse(status="success", message=APPLICATION_RECEIVED)


async def approve_volunteer(
    action: ApprovalAction,
    base_url: str,
    settings: Settings,
) -> ApprovalResult:
    """
    Approve a volunteer from an approval-link visit.

    No pending submission is looked up: any email is approved as long as
    the token matches.

    Args:
        action: Email and token from the approval link
        base_url: Externally reachable base URL for the ID card link
        settings: Application settings

    Returns:
        The generated display id, the address mailed, and delivery receipts

    Raises:
        AuthorizationError: If the token does not match
        ValidationError: If the link carries no applicant email
        DeliveryError: If an applicant email could not be sent
    """
    if not is_token_valid(action.token, settings):
        logger.warning(f"Approval rejected: invalid token for {action.email}")
        raise AuthorizationError()

    if not action.email.strip():
        logger.warning("Approval rejected: no applicant email in link")
        raise ValidationError(MISSING_EMAIL_MESSAGE)

    display_id = generate_display_id()
    recipient = resolve_applicant_recipient(action.email, settings)
    if recipient != action.email:
        logger.warning(f"Applicant email for {action.email} redirected to {recipient}")

    logger.info(f"Approving volunteer {action.email} as {display_id}")

    receipts = [
        await send_applicant_approved(recipient, display_id, settings=settings),
    ]

    if settings.send_digital_id_email:
        card_link = build_card_link(base_url, action.email, display_id)
        receipts.append(
            await send_digital_id(recipient, display_id, card_link, settings=settings)
        )

    logger.info(f"Approval notification sent to: {recipient} ({len(receipts)} emails)")
    return ApprovalResult(
        email=action.email,
        display_id=display_id,
        recipient=recipient,
        receipts=receipts,
    )


def build_id_card(
    email: str,
    display_id: str | None,
    settings: Settings,
    name: str | None = None,
    interest: str | None = None,
) -> IdCard:
    """Assemble printable card values; a missing id gets a fresh one."""
    display_id = display_id or generate_display_id()
    return IdCard(
        email=email,
        display_id=display_id,
        name=name,
        interest=interest,
        qr_url=build_qr_url(settings.qr_api_url, display_id),
    )
