"""
Volunteer Schemas

Pydantic schemas for the intake form, approval actions, and responses.
None of these are persisted; each lives for a single request.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from volunteer_intake.core.email import DeliveryReceipt

NOT_PROVIDED = "N/A"


class VolunteerSubmission(BaseModel):
    """Form fields of one volunteer application."""

    model_config = ConfigDict(populate_by_name=True)

    full_name: str | None = Field(None, alias="fullName", max_length=200)
    dob: str | None = Field(None, max_length=50)
    email: EmailStr
    phone: str | None = Field(None, max_length=50)
    nationality: str | None = Field(None, max_length=100)
    language: str | None = Field(None, max_length=100)
    interest: str | None = Field(None, max_length=200)
    motivation: str | None = Field(None, max_length=5000)
    transport: str | None = Field(None, max_length=200)
    criminal_record: str | None = Field(None, max_length=500)

    @property
    def display_name(self) -> str:
        return self.full_name or self.email

    def display_rows(self) -> list[tuple[str, str]]:
        """Labelled rows for the administrator email, blanks shown as N/A."""
        fields = [
            ("FULL NAME", self.full_name),
            ("DATE OF BIRTH", self.dob),
            ("EMAIL", self.email),
            ("PHONE", self.phone),
            ("NATIONALITY", self.nationality),
            ("LANGUAGE", self.language),
            ("INTEREST", self.interest),
            ("TRANSPORT", self.transport),
            ("CRIMINAL RECORD", self.criminal_record),
        ]
        return [(label, value or NOT_PROVIDED) for label, value in fields]


class PhotoUpload(BaseModel):
    """Passport photo written to temporary storage."""

    path: str
    filename: str
    content_type: str | None = None
    size: int


class ApprovalAction(BaseModel):
    """Query parameters of one approval-link visit."""

    email: str
    token: str | None = None


class ApprovalResult(BaseModel):
    """Outcome of a successful approval."""

    email: str
    display_id: str
    recipient: str
    receipts: list[DeliveryReceipt] = Field(default_factory=list)


class SubmissionResponse(BaseModel):
    """JSON envelope returned by the intake endpoint."""

    status: str
    message: str


class IdCard(BaseModel):
    """Values rendered on a printable ID card."""

    email: str
    display_id: str
    name: str | None = None
    interest: str | None = None
    qr_url: str
