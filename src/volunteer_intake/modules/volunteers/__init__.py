"""
Volunteers Module

Handles the volunteer intake workflow:
1. Application submission with a passport photo
2. Administrator notification with an approval link
3. Approval, applicant notification, and a printable digital ID card

API Endpoints:
- POST /submit-volunteer - Submit a new application
- GET /approve - Approve an applicant (shared-token link)
- GET /download-id - Printable ID card

Nothing is persisted: submissions live for one request and the temporary
photo is removed once the administrator email has been attempted.
"""

from .router import router

__all__ = ["router"]
