"""
Email Service using Resend

Handles sending emails for the volunteer intake and approval flow.
Each call makes exactly one delivery attempt bounded by a timeout;
failures are raised as DeliveryError and never swallowed.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from html import escape

import resend

from volunteer_intake.core.config import Settings
from volunteer_intake.core.errors import DeliveryError

logger = logging.getLogger(__name__)

BASE_STYLE = """
            body { margin: 0; font-family: 'Montserrat', Helvetica, Arial, sans-serif; }
            .wrapper { background-color: #1B120F; padding: 40px; text-align: center; color: #F5F5DC; }
            .container { max-width: 600px; margin: 0 auto; border: 1px solid #D4AF37; padding: 50px; background-color: #2D1B15; }
            .title { font-weight: 100; letter-spacing: 6px; text-transform: uppercase; color: #D4AF37; font-size: 20px; }
            .subtitle { font-weight: 300; letter-spacing: 3px; font-size: 12px; text-transform: uppercase; opacity: 0.8; margin-bottom: 40px; }
            .button { background-color: #D4AF37; color: #1B120F; padding: 18px 35px; text-decoration: none; font-size: 12px; letter-spacing: 3px; text-transform: uppercase; font-weight: bold; display: inline-block; }
            .footer { margin-top: 60px; font-size: 9px; letter-spacing: 3px; opacity: 0.4; text-transform: uppercase; }
"""


@dataclass
class EmailAttachment:
    """A file attached to an outbound email."""

    filename: str
    content: bytes
    content_type: str | None = None


@dataclass
class DeliveryReceipt:
    """Result of a successful delivery attempt."""

    id: str
    to: str
    subject: str
    attachments: list[str] = field(default_factory=list)


def _build_params(
    settings: Settings,
    to_email: str,
    subject: str,
    html_content: str,
    attachments: list[EmailAttachment] | None,
) -> "resend.Emails.SendParams":
    params: resend.Emails.SendParams = {
        "from": settings.email_from,
        "to": [to_email],
        "subject": subject,
        "html": html_content,
    }
    if attachments:
        params["attachments"] = [
            {"filename": attachment.filename, "content": list(attachment.content)}
            for attachment in attachments
        ]
    return params


async def send_email(
    to_email: str,
    subject: str,
    html_content: str,
    *,
    settings: Settings,
    attachments: list[EmailAttachment] | None = None,
) -> DeliveryReceipt:
    """
    Send an email using Resend.

    Args:
        to_email: Recipient email address
        subject: Email subject line
        html_content: HTML content of the email
        settings: Application settings (sender identity, credential, timeout)
        attachments: Optional files to attach

    Returns:
        Receipt with the provider message id

    Raises:
        DeliveryError: If the provider fails, times out, or is not configured
            in production
    """
    attachment_names = [attachment.filename for attachment in attachments or []]

    if not settings.resend_api_key:
        if settings.is_production:
            logger.error("RESEND_API_KEY not set - cannot deliver email in production")
            raise DeliveryError()
        logger.warning("RESEND_API_KEY not set - logging email instead of sending")
        logger.info(f"EMAIL TO: {to_email} | SUBJECT: {subject} | ATTACHMENTS: {attachment_names}")
        return DeliveryReceipt(id="logged", to=to_email, subject=subject, attachments=attachment_names)

    resend.api_key = settings.resend_api_key
    params = _build_params(settings, to_email, subject, html_content, attachments)

    try:
        # Run sync Resend call in thread pool to avoid blocking event loop
        email = await asyncio.wait_for(
            asyncio.to_thread(resend.Emails.send, params),
            timeout=settings.email_timeout_seconds,
        )
    except TimeoutError as e:
        logger.error(
            f"Timed out after {settings.email_timeout_seconds}s sending email to {to_email}"
        )
        raise DeliveryError() from e
    except Exception as e:
        logger.error(f"Failed to send email to {to_email}: {e}")
        raise DeliveryError() from e

    logger.info(f"Email sent successfully to {to_email}, id: {email['id']}")
    return DeliveryReceipt(
        id=email["id"], to=to_email, subject=subject, attachments=attachment_names
    )


async def send_admin_submission_notification(
    applicant_name: str,
    rows: list[tuple[str, str]],
    motivation: str,
    approve_link: str,
    photo: EmailAttachment,
    *,
    settings: Settings,
) -> DeliveryReceipt:
    """Send a new volunteer submission to the administrator with an approval link."""
    safe_applicant_name = escape(applicant_name)
    safe_org = escape(settings.organization_name)
    safe_tagline = escape(settings.organization_tagline)
    safe_motivation = escape(motivation)
    safe_link = escape(approve_link, quote=True)

    table_rows = "".join(
        f"""
                <tr>
                    <td class="label"><strong>{escape(label)}</strong></td>
                    <td class="value">{escape(value)}</td>
                </tr>"""
        for label, value in rows
    )

    html_content = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>{BASE_STYLE}
            table {{ width: 100%; text-align: left; border-collapse: collapse; font-size: 13px; line-height: 1.6; }}
            .label {{ padding: 12px 0; border-bottom: 1px solid rgba(212, 175, 55, 0.2); color: #D4AF37; font-size: 10px; letter-spacing: 1px; width: 40%; }}
            .value {{ padding: 12px 0; border-bottom: 1px solid rgba(212, 175, 55, 0.2); }}
            .motivation {{ padding: 12px 0; font-style: italic; opacity: 0.9; }}
        </style>
    </head>
    <body>
        <div class="wrapper">
            <div class="container">
                <h1 class="title">{safe_org}</h1>
                <h2 class="subtitle">Volunteer Registration Archive</h2>

                <p>New application from <strong>{safe_applicant_name}</strong></p>

                <table>{table_rows}
                    <tr>
                        <td class="label"><strong>MOTIVATION</strong></td>
                        <td class="motivation">"{safe_motivation}"</td>
                    </tr>
                </table>

                <div style="margin-top: 50px;">
                    <a href="{safe_link}" class="button">Approve Volunteer</a>
                </div>

                <p style="word-break: break-all; font-size: 11px;">{safe_link}</p>

                <div class="footer">{safe_org} &bull; {safe_tagline}</div>
            </div>
        </div>
    </body>
    </html>
    """

    return await send_email(
        to_email=settings.admin_email,
        subject=f"New Volunteer Credentials: {applicant_name}",
        html_content=html_content,
        settings=settings,
        attachments=[photo],
    )


async def send_applicant_approved(
    to_email: str,
    display_id: str,
    *,
    settings: Settings,
) -> DeliveryReceipt:
    """Tell the applicant their application has been approved."""
    safe_org = escape(settings.organization_name)
    safe_tagline = escape(settings.organization_tagline)
    safe_display_id = escape(display_id)

    html_content = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>{BASE_STYLE}</style>
    </head>
    <body>
        <div class="wrapper">
            <div class="container">
                <h1 class="title">Welcome to the Foundation</h1>

                <p>Dear Volunteer,</p>

                <p>We are pleased to inform you that your application to the <strong>{safe_org}</strong> has been reviewed and <strong>APPROVED</strong>.</p>

                <p>Your volunteer ID is <strong>{safe_display_id}</strong>.</p>

                <p>A coordinator will reach out to you shortly regarding next steps.</p>

                <p>Best Regards,<br><strong>The O.E.F Administration Team</strong></p>

                <div class="footer">{safe_org} &bull; {safe_tagline}</div>
            </div>
        </div>
    </body>
    </html>
    """

    return await send_email(
        to_email=to_email,
        subject="Congratulations! Your Application has been Approved",
        html_content=html_content,
        settings=settings,
    )


async def send_digital_id(
    to_email: str,
    display_id: str,
    card_link: str,
    *,
    settings: Settings,
) -> DeliveryReceipt:
    """Send the applicant a link to their printable digital ID card."""
    safe_org = escape(settings.organization_name)
    safe_tagline = escape(settings.organization_tagline)
    safe_display_id = escape(display_id)
    safe_link = escape(card_link, quote=True)

    html_content = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>{BASE_STYLE}</style>
    </head>
    <body>
        <div class="wrapper">
            <div class="container">
                <h1 class="title">Your Digital Volunteer ID</h1>
                <h2 class="subtitle">{safe_display_id}</h2>

                <p>Your official {safe_org} volunteer ID card is ready.</p>

                <p>Open it below and use your browser's print option to keep a copy:</p>

                <a href="{safe_link}" class="button">View &amp; Print ID Card</a>

                <p style="word-break: break-all; font-size: 11px;">{safe_link}</p>

                <div class="footer">{safe_org} &bull; {safe_tagline}</div>
            </div>
        </div>
    </body>
    </html>
    """

    return await send_email(
        to_email=to_email,
        subject=f"Your Digital Volunteer ID: {display_id}",
        html_content=html_content,
        settings=settings,
    )
