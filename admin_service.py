# admin_service.py
import csv
import io
from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from models import FORM_SUBMISSION_COLUMNS, SUBMISSION_STATUSES, FormSubmission
from record_store import StoreError
from site_content import state_name

CSV_HEADERS = ["Date", "Company Name", "Member Name", "Email", "Phone", "State", "Status"]
STATUS_FILTERS = ("all",) + SUBMISSION_STATUSES


def _format_date(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return f"{value.month}/{value.day}/{value.year}"


class AdminService:
    """Back-office view over ``form_submissions``."""

    def __init__(self, store) -> None:
        self.store = store

    def load_submissions(self) -> Tuple[List[FormSubmission], Optional[str]]:
        try:
            rows = self.store.select(
                "form_submissions",
                columns=FORM_SUBMISSION_COLUMNS,
                order_by="created_at",
                descending=True,
            )
            return [FormSubmission(**row) for row in rows], None
        except (StoreError, ValidationError) as e:
            print(f"[ADMIN LOG] ❌ Error loading submissions: {e}")
            return [], "Error loading submissions."

    def update_status(self, submission_id: str, new_status: str) -> Optional[str]:
        """Returns an error message, or None on success."""
        if new_status not in SUBMISSION_STATUSES:
            return f"Unknown status: {new_status}"
        try:
            self.store.update(
                "form_submissions",
                {"status": new_status, "updated_at": datetime.now(timezone.utc).isoformat()},
                {"id": submission_id},
            )
        except StoreError as e:
            print(f"[ADMIN LOG] ❌ Error updating status: {e}")
            return "Failed to update status"
        print(f"[ADMIN LOG] ✏️ submission {submission_id} -> {new_status}")
        return None

    @staticmethod
    def filter_submissions(submissions: List[FormSubmission], status: str = "all", query: str = "") -> List[FormSubmission]:
        q = (query or "").lower()
        out = []
        for sub in submissions:
            if status != "all" and sub.status != status:
                continue
            if q and not (
                q in sub.company_name.lower()
                or q in sub.member_name.lower()
                or q in sub.email.lower()
            ):
                continue
            out.append(sub)
        return out

    @staticmethod
    def stats(submissions: List[FormSubmission]) -> Dict[str, int]:
        statuses = [s.status for s in submissions]
        return {
            "total": len(statuses),
            "new": statuses.count("new"),
            "processing": statuses.count("processing"),
            "completed": statuses.count("completed"),
        }

    @staticmethod
    def export_csv(submissions: List[FormSubmission]) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for sub in submissions:
            writer.writerow([
                _format_date(sub.created_at),
                sub.company_name,
                sub.member_name,
                sub.email,
                sub.phone,
                state_name(sub.state) or sub.state,
                sub.status,
            ])
        return buf.getvalue().rstrip("\n")

    @staticmethod
    def export_filename(today: Optional[date] = None) -> str:
        today = today or date.today()
        return f"llc-submissions-{today.isoformat()}.csv"
