# catalog_service.py
from typing import List, Optional

from pydantic import ValidationError

from models import Package
from pages import AuthPage, GetStartedPage, Page
from record_store import StoreError

_PACKAGE_COLORS = {"basic": "blue", "ultimate": "green", "epic": "orange"}
_PACKAGE_BADGES = {"ultimate": "Most Popular", "epic": "Best Value"}


class CatalogService:
    """Service packages shown on the Services page and in the wizard."""

    def __init__(self, store) -> None:
        self.store = store

    def load_packages(self) -> List[Package]:
        try:
            rows = self.store.select("packages", filters={"is_active": True}, order_by="price")
            return [Package(**row) for row in rows]
        except (StoreError, ValidationError) as e:
            print(f"[CATALOG LOG] ❌ Error loading packages: {e}")
            return []

    @staticmethod
    def package_color(name: str) -> str:
        return _PACKAGE_COLORS.get((name or "").lower(), "blue")

    @staticmethod
    def package_badge(name: str) -> Optional[str]:
        return _PACKAGE_BADGES.get((name or "").lower())

    @staticmethod
    def select_package(package: Package, signed_in: bool) -> Page:
        if not signed_in:
            return AuthPage()
        return GetStartedPage(selected_package=package)
