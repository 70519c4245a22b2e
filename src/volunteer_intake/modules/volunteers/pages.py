"""
HTML Pages

Confirmation page shown to the administrator after approval, and the
printable volunteer ID card. All interpolated values are escaped.
"""

from html import escape

from volunteer_intake.core.config import Settings
from volunteer_intake.modules.volunteers.schemas import ApprovalResult, IdCard


def render_approval_page(result: ApprovalResult, settings: Settings) -> str:
    safe_email = escape(result.email)
    safe_recipient = escape(result.recipient)
    safe_display_id = escape(result.display_id)
    safe_org = escape(settings.organization_name)

    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <title>Volunteer Approved - {safe_org}</title>
        <style>
            body {{ margin: 0; font-family: 'Montserrat', Helvetica, Arial, sans-serif; background: #F5F5DC; color: #1B120F; }}
            .banner {{ color: #D4AF37; background: #1B120F; padding: 20px; text-align: center; letter-spacing: 3px; text-transform: uppercase; }}
            .content {{ text-align: center; padding: 20px; }}
        </style>
    </head>
    <body>
        <h1 class="banner">Volunteer Approved Successfully</h1>
        <div class="content">
            <p>{safe_email} has been approved as <strong>{safe_display_id}</strong>.</p>
            <p>A confirmation email has been sent to {safe_recipient}.</p>
        </div>
    </body>
    </html>
    """


def render_id_card_page(card: IdCard, settings: Settings) -> str:
    """Self-contained printable ID card with a QR code of the display id."""
    safe_email = escape(card.email)
    safe_display_id = escape(card.display_id)
    safe_name = escape(card.name or "Volunteer")
    safe_interest = escape(card.interest or "General Volunteer")
    safe_qr_url = escape(card.qr_url, quote=True)
    safe_org = escape(settings.organization_name)
    safe_tagline = escape(settings.organization_tagline)

    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <title>{safe_display_id} - {safe_org} Volunteer ID</title>
        <style>
            body {{ margin: 0; padding: 40px; font-family: 'Montserrat', Helvetica, Arial, sans-serif; background: #F5F5DC; }}
            .card {{ width: 340px; margin: 0 auto; border: 2px solid #D4AF37; border-radius: 12px; background: #1B120F; color: #F5F5DC; padding: 24px; text-align: center; }}
            .org {{ color: #D4AF37; letter-spacing: 4px; text-transform: uppercase; font-size: 14px; margin: 0 0 4px; }}
            .role {{ font-size: 10px; letter-spacing: 3px; text-transform: uppercase; opacity: 0.7; }}
            .name {{ font-size: 22px; margin: 20px 0 6px; }}
            .field {{ font-size: 12px; margin: 4px 0; }}
            .id {{ color: #D4AF37; font-size: 18px; letter-spacing: 2px; margin: 16px 0; }}
            .qr {{ background: #FFFFFF; padding: 8px; border-radius: 6px; }}
            .footer {{ margin-top: 16px; font-size: 8px; letter-spacing: 2px; opacity: 0.5; text-transform: uppercase; }}
            .actions {{ text-align: center; margin-top: 24px; }}
            @media print {{ .actions {{ display: none; }} body {{ background: #FFFFFF; }} }}
        </style>
    </head>
    <body>
        <div class="card">
            <p class="org">{safe_org}</p>
            <p class="role">Official Volunteer</p>
            <p class="name">{safe_name}</p>
            <p class="field">{safe_interest}</p>
            <p class="field">{safe_email}</p>
            <p class="id">{safe_display_id}</p>
            <img class="qr" src="{safe_qr_url}" alt="QR code for {safe_display_id}" width="150" height="150">
            <p class="footer">{safe_tagline}</p>
        </div>
        <div class="actions">
            <button onclick="window.print()">Print ID Card</button>
        </div>
    </body>
    </html>
    """
