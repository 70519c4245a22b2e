"""
Volunteer Router

Public endpoints for the volunteer intake and approval flow.

Endpoints:
- POST /submit-volunteer - Submit an application with a passport photo
- GET /approve - Administrator approval link
- GET /download-id - Printable volunteer ID card

Errors are converted to responses here: JSON envelopes on intake,
plain text on approval. Provider failures are logged, never echoed.
"""

import logging

import pydantic
from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from volunteer_intake.core.config import Settings, get_settings
from volunteer_intake.core.errors import (
    AuthorizationError,
    DeliveryError,
    ValidationError,
    VolunteerServiceError,
)
from volunteer_intake.modules.volunteers import service
from volunteer_intake.modules.volunteers.pages import render_approval_page, render_id_card_page
from volunteer_intake.modules.volunteers.schemas import (
    ApprovalAction,
    SubmissionResponse,
    VolunteerSubmission,
)

logger = logging.getLogger(__name__)

router = APIRouter()

APPROVAL_DELIVERY_FAILED = "Admin approved, but failed to notify the applicant."


def get_base_url(request: Request, settings: Settings = Depends(get_settings)) -> str:
    """Configured public base URL, falling back to the URL the request came in on."""
    return settings.public_base_url or str(request.base_url)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def _first_validation_message(error: pydantic.ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    return f"Invalid {field}: {first.get('msg', 'invalid value')}" if field else first["msg"]


@router.post(
    "/submit-volunteer",
    response_model=SubmissionResponse,
    summary="Submit Volunteer Application",
    responses={
        400: {"description": "Missing passport photo or invalid fields"},
        413: {"description": "Passport photo or request body too large"},
        500: {"description": "Email delivery failed"},
    },
)
async def submit_volunteer(
    base_url: str = Depends(get_base_url),
    settings: Settings = Depends(get_settings),
    full_name: str | None = Form(None, alias="fullName"),
    dob: str | None = Form(None),
    email: str | None = Form(None),
    phone: str | None = Form(None),
    nationality: str | None = Form(None),
    language: str | None = Form(None),
    interest: str | None = Form(None),
    motivation: str | None = Form(None),
    transport: str | None = Form(None),
    criminal_record: str | None = Form(None),
    passport: UploadFile | None = File(None),
):
    """
    Receive a volunteer application and email it to the administrator.

    Returns:
        ``{"status": "success", "message": "Application received"}``
    """
    try:
        submission = VolunteerSubmission(
            full_name=full_name,
            dob=dob,
            email=email,
            phone=phone,
            nationality=nationality,
            language=language,
            interest=interest,
            motivation=motivation,
            transport=transport,
            criminal_record=criminal_record,
        )
    except pydantic.ValidationError as e:
        logger.warning(f"Volunteer submission rejected: {e.error_count()} invalid field(s)")
        return _error_response(status.HTTP_400_BAD_REQUEST, _first_validation_message(e))

    try:
        return await service.submit_volunteer(submission, passport, base_url, settings)
    except DeliveryError as e:
        logger.error(f"Email error for submission from {submission.display_name}")
        return _error_response(e.status_code, e.message)
    except VolunteerServiceError as e:
        logger.warning(f"Volunteer submission rejected: {e.message}")
        return _error_response(e.status_code, e.message)
    except Exception as e:
        logger.exception(f"Unexpected error submitting volunteer application: {e}")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred. Please try again later.",
        )


@router.get(
    "/approve",
    response_class=HTMLResponse,
    summary="Approve Volunteer",
    responses={
        400: {"description": "Missing applicant email"},
        403: {"description": "Invalid approval token"},
        500: {"description": "Applicant notification failed"},
    },
)
async def approve_volunteer(
    email: str = "",
    token: str | None = None,
    base_url: str = Depends(get_base_url),
    settings: Settings = Depends(get_settings),
):
    """
    Approve a volunteer and notify them.

    Any email is accepted when the token matches; nothing checks that a
    submission for that email exists or was already approved.
    """
    try:
        result = await service.approve_volunteer(
            ApprovalAction(email=email, token=token), base_url, settings
        )
    except (AuthorizationError, ValidationError) as e:
        return PlainTextResponse(e.message, status_code=e.status_code)
    except DeliveryError as e:
        logger.error(f"Error sending approval email for {email}")
        return PlainTextResponse(APPROVAL_DELIVERY_FAILED, status_code=e.status_code)

    return HTMLResponse(render_approval_page(result, settings))


@router.get(
    "/download-id",
    response_class=HTMLResponse,
    summary="Printable Volunteer ID Card",
)
async def download_id(
    email: str = "",
    display_id: str | None = Query(None, alias="id"),
    name: str | None = None,
    interest: str | None = None,
    settings: Settings = Depends(get_settings),
):
    """Render a printable ID card. No authentication or id validation."""
    card = service.build_id_card(email, display_id, settings, name=name, interest=interest)
    return HTMLResponse(render_id_card_page(card, settings))
