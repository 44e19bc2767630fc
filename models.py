# models.py
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

ApplicationStatus = Literal["pending", "processing", "completed", "rejected"]
PaymentStatus = Literal["pending", "completed", "failed"]
MessageStatus = Literal["new", "read", "responded"]
SubmissionStatus = Literal["new", "processing", "completed", "rejected"]

SUBMISSION_STATUSES = ("new", "processing", "completed", "rejected")


class Profile(BaseModel):
    id: str
    full_name: str = ""
    phone: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Package(BaseModel):
    id: str
    name: str
    price: float
    description: str = ""
    features: List[str] = Field(default_factory=list)
    is_active: bool = True
    created_at: Optional[datetime] = None


class LLCApplication(BaseModel):
    id: str
    user_id: str
    package_id: str
    state: str
    company_name: str
    status: ApplicationStatus = "pending"
    form_data: Dict[str, Any] = Field(default_factory=dict)
    payment_status: PaymentStatus = "pending"
    payment_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ContactMessage(BaseModel):
    id: str
    name: str
    email: str
    subject: str
    message: str
    status: MessageStatus = "new"
    created_at: Optional[datetime] = None


class FormSubmission(BaseModel):
    """Admin-facing projection of an application."""
    id: str
    state: str
    company_name: str
    member_name: str = ""
    email: str = ""
    phone: str = ""
    status: SubmissionStatus = "new"
    created_at: Optional[datetime] = None


FORM_SUBMISSION_COLUMNS = "id, state, company_name, member_name, email, phone, status, created_at"


def submission_from_application(row: Dict[str, Any]) -> Dict[str, Any]:
    """Build the ``form_submissions`` row that mirrors a new application."""
    form_data = row.get("form_data") or {}
    return {
        "id": row["id"],
        "state": row.get("state", ""),
        "company_name": row.get("company_name", ""),
        "member_name": form_data.get("memberName", ""),
        "email": form_data.get("email", ""),
        "phone": form_data.get("phone", ""),
        "status": "new",
        "created_at": row.get("created_at"),
    }
