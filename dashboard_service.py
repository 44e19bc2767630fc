# dashboard_service.py
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ValidationError

from models import LLCApplication, Package
from record_store import StoreError

STATUS_MESSAGES = {
    "completed": "Your LLC has been successfully formed!",
    "processing": "Your application is being processed.",
    "pending": "Your application is pending. Please complete payment to proceed.",
    "rejected": "Your application needs attention. Please contact support.",
}


class ApplicationView(BaseModel):
    application: LLCApplication
    package: Optional[Package] = None

    @property
    def status_label(self) -> str:
        return self.application.status.capitalize()

    @property
    def payment_label(self) -> str:
        return self.application.payment_status.capitalize()

    @property
    def status_message(self) -> str:
        return STATUS_MESSAGES.get(self.application.status, "")

    @property
    def needs_payment(self) -> bool:
        # Payment itself is not handled here; the button is a placeholder.
        return self.application.payment_status == "pending"


class DashboardService:
    """The signed-in customer's applications, newest first."""

    def __init__(self, store) -> None:
        self.store = store

    def load_applications(self, user_id: str) -> Tuple[List[ApplicationView], Optional[str]]:
        try:
            rows = self.store.select(
                "llc_applications",
                filters={"user_id": user_id},
                order_by="created_at",
                descending=True,
            )
            packages = {p["id"]: p for p in self.store.select("packages")}
            views = []
            for row in rows:
                pkg = packages.get(row.get("package_id"))
                views.append(ApplicationView(
                    application=LLCApplication(**row),
                    package=Package(**pkg) if pkg else None,
                ))
        except (StoreError, ValidationError) as e:
            print(f"[DASHBOARD LOG] ❌ Error loading applications: {e}")
            return [], "Error loading applications."
        return views, None

    @staticmethod
    def stats(views: List[ApplicationView]) -> Dict[str, int]:
        statuses = [v.application.status for v in views]
        return {
            "total": len(statuses),
            "completed": statuses.count("completed"),
            "in_progress": sum(1 for s in statuses if s in ("pending", "processing")),
        }
