from __future__ import annotations

import unittest
from datetime import date

from admin_service import CSV_HEADERS, AdminService
from models import FormSubmission
from record_store import MemoryRecordStore, StoreError


class _BrokenStore:
    def select(self, *args, **kwargs):
        raise StoreError("down")

    def update(self, *args, **kwargs):
        raise StoreError("down")


def _submission(**overrides) -> FormSubmission:
    values = {
        "id": "s1", "state": "DE", "company_name": "Acme LLC", "member_name": "Jane Doe",
        "email": "jane@example.com", "phone": "555-0100", "status": "new",
        "created_at": "2024-03-05T10:00:00+00:00",
    }
    values.update(overrides)
    return FormSubmission(**values)


class TestAdminService(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryRecordStore()
        self.service = AdminService(self.store)

    def test_load_newest_first(self) -> None:
        self.store.insert("form_submissions", _submission(id="old", created_at="2024-01-01T00:00:00+00:00").model_dump(mode="json"))
        self.store.insert("form_submissions", _submission(id="new", created_at="2024-02-01T00:00:00+00:00").model_dump(mode="json"))
        subs, error = self.service.load_submissions()
        self.assertIsNone(error)
        self.assertEqual([s.id for s in subs], ["new", "old"])

    def test_load_error(self) -> None:
        subs, error = AdminService(_BrokenStore()).load_submissions()
        self.assertEqual(subs, [])
        self.assertEqual(error, "Error loading submissions.")

    def test_malformed_row_is_reported_not_raised(self) -> None:
        self.store.insert("form_submissions", {
            "state": "DE", "company_name": "Acme LLC", "member_name": None,
            "email": "jane@example.com", "phone": None, "status": "archived",
        })
        subs, error = self.service.load_submissions()
        self.assertEqual(subs, [])
        self.assertEqual(error, "Error loading submissions.")

    def test_update_status(self) -> None:
        row = self.store.insert("form_submissions", _submission().model_dump(mode="json"))
        self.assertIsNone(self.service.update_status(row["id"], "processing"))
        updated = self.store.select("form_submissions")[0]
        self.assertEqual(updated["status"], "processing")
        self.assertIn("updated_at", updated)

    def test_update_status_rejects_unknown_status(self) -> None:
        self.assertIsNotNone(self.service.update_status("s1", "archived"))

    def test_update_status_failure(self) -> None:
        self.assertEqual(AdminService(_BrokenStore()).update_status("s1", "completed"), "Failed to update status")

    def test_filter_by_status_and_query(self) -> None:
        subs = [
            _submission(id="1", company_name="Acme LLC", status="new"),
            _submission(id="2", company_name="Beta Co", member_name="Bob", email="bob@beta.io", status="completed"),
        ]
        self.assertEqual([s.id for s in AdminService.filter_submissions(subs, "completed")], ["2"])
        self.assertEqual([s.id for s in AdminService.filter_submissions(subs, "all", "ACME")], ["1"])
        self.assertEqual([s.id for s in AdminService.filter_submissions(subs, "all", "beta.io")], ["2"])
        self.assertEqual(AdminService.filter_submissions(subs, "new", "bob"), [])

    def test_stats(self) -> None:
        subs = [_submission(status=s) for s in ("new", "new", "processing", "completed", "rejected")]
        self.assertEqual(
            AdminService.stats(subs),
            {"total": 5, "new": 2, "processing": 1, "completed": 1},
        )

    def test_export_csv_quotes_every_cell(self) -> None:
        text = AdminService.export_csv([_submission(company_name='Acme "Best" LLC')])
        lines = text.split("\n")
        self.assertEqual(lines[0], ",".join(f'"{h}"' for h in CSV_HEADERS))
        self.assertEqual(
            lines[1],
            '"3/5/2024","Acme ""Best"" LLC","Jane Doe","jane@example.com","555-0100","Delaware","new"',
        )
        self.assertEqual(len(lines), 2)

    def test_export_filename(self) -> None:
        self.assertEqual(AdminService.export_filename(date(2024, 7, 9)), "llc-submissions-2024-07-09.csv")


if __name__ == "__main__":
    unittest.main()
