from __future__ import annotations

import unittest

from dashboard_service import ApplicationView
from intake_wizard import IntakeWizard
from models import FormSubmission, LLCApplication, Package
from page_views import (
    admin_table_rows,
    dashboard_markdown,
    package_choices,
    progress_markdown,
    review_markdown,
    services_markdown,
)


class TestPageViews(unittest.TestCase):
    def test_services_lists_packages_with_badges(self) -> None:
        packages = [
            Package(id="b", name="Basic", price=99, features=["Filing"]),
            Package(id="u", name="Ultimate", price=299),
        ]
        text = services_markdown(packages)
        self.assertIn("### 🔵 Basic", text)
        self.assertIn("### 🟢 Ultimate", text)
        self.assertIn("Most Popular", text)
        self.assertIn("$99", text)
        self.assertIn("✓ Filing", text)
        self.assertEqual(package_choices(packages)[0][1], "b")

    def test_services_empty(self) -> None:
        self.assertIn("No packages", services_markdown([]))

    def test_wizard_views(self) -> None:
        self.assertEqual(progress_markdown(None), "")
        w = IntakeWizard("u1", package_id="b")
        w.set_field("state", "NV")
        self.assertIn("🔵 State Selection", progress_markdown(w))
        review = review_markdown(w, [Package(id="b", name="Basic", price=99)])
        self.assertIn("Nevada", review)
        self.assertIn("Basic", review)

    def test_dashboard_empty_and_error(self) -> None:
        self.assertIn("No Applications Yet", dashboard_markdown([]))
        self.assertIn("Error loading applications.", dashboard_markdown([], "Error loading applications."))

    def test_dashboard_lists_application(self) -> None:
        app = LLCApplication(
            id="a1", user_id="u1", package_id="b", state="DE", company_name="Acme LLC",
            created_at="2024-03-05T10:00:00+00:00",
        )
        text = dashboard_markdown([ApplicationView(application=app, package=Package(id="b", name="Basic", price=99))])
        self.assertIn("Acme LLC", text)
        self.assertIn("Delaware", text)
        self.assertIn("March 5, 2024", text)
        self.assertIn("**Total Applications:** 1", text)

    def test_admin_rows(self) -> None:
        sub = FormSubmission(id="s1", state="WY", company_name="Acme", member_name="Jane",
                             created_at="2024-03-05T10:00:00+00:00")
        self.assertEqual(admin_table_rows([sub]), [["03/05/2024", "Acme", "Jane", "Wyoming", "new", "s1"]])


if __name__ == "__main__":
    unittest.main()
