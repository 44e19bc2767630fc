# contact_service.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Content, Email, Mail, ReplyTo, To

from record_store import StoreError

CONTACT_FIELDS = ("name", "email", "subject", "message")


class ContactResult(BaseModel):
    ok: bool
    message: str


class SupportNotifier:
    """Emails the support inbox about new contact messages via SendGrid."""

    def __init__(self, api_key: str, from_email: str, from_name: str, support_email: str) -> None:
        self._sendgrid_key = api_key
        self._from_email = from_email or "no-reply@ogssolution.com"
        self._from_name = from_name or "OGS Solution"
        self._support_email = support_email
        self.sent: List[Dict[str, Any]] = []

    def notify(self, row: Dict[str, Any]) -> None:
        subject = f"New contact message: {row.get('subject', '')}"
        text_body = (
            f"From: {row.get('name', '')} <{row.get('email', '')}>\n"
            f"Subject: {row.get('subject', '')}\n\n"
            f"{row.get('message', '')}"
        )
        if not self._sendgrid_key:
            # For testing without SendGrid API key
            print(f"[TEST MODE] Would email support about message from {row.get('email', '')}")
            self.sent.append({"to": self._support_email, "subject": subject})
            return

        sg = SendGridAPIClient(self._sendgrid_key)
        msg = Mail(from_email=Email(self._from_email, self._from_name),
                   to_emails=To(self._support_email), subject=subject)
        msg.add_content(Content("text/plain", text_body))
        msg.reply_to = ReplyTo(row.get("email", ""), row.get("name", ""))

        response = sg.send(msg)
        print(f"[MAIL LOG] SendGrid response status: {response.status_code}")
        if response.status_code not in (200, 202):
            raise RuntimeError(f"SendGrid returned status {response.status_code}")
        self.sent.append({"to": self._support_email, "subject": subject})


class ContactService:
    def __init__(self, store, notifier: Optional[SupportNotifier] = None) -> None:
        self.store = store
        self.notifier = notifier

    def submit(self, name: str, email: str, subject: str, message: str) -> ContactResult:
        values = {
            "name": (name or "").strip(),
            "email": (email or "").strip(),
            "subject": (subject or "").strip(),
            "message": (message or "").strip(),
        }
        missing = [f for f in CONTACT_FIELDS if not values[f]]
        if missing:
            return ContactResult(ok=False, message=f"Please fill in: {', '.join(missing)}.")

        try:
            row = self.store.insert("contact_messages", {**values, "status": "new"})
        except StoreError as e:
            print(f"[CONTACT LOG] ❌ Error submitting contact form: {e}")
            return ContactResult(ok=False, message="Error submitting form. Please try again.")

        if self.notifier is not None:
            try:
                self.notifier.notify(row)
            except Exception as e:
                print(f"[MAIL LOG] ⚠️ support notification failed (non-fatal): {e}")

        print(f"[CONTACT LOG] ✅ contact message stored id={row.get('id')}")
        return ContactResult(ok=True, message="Thank you for contacting us! We'll get back to you shortly.")
