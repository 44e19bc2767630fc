from __future__ import annotations

import json
import unittest

import httpx

from models import submission_from_application
from record_store import MemoryRecordStore, StoreError, SupabaseRecordStore, seed_packages
from site_content import SEED_PACKAGES


class TestMemoryRecordStore(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryRecordStore()

    def test_insert_assigns_id_and_created_at(self) -> None:
        row = self.store.insert("contact_messages", {"name": "A"})
        self.assertTrue(row["id"])
        self.assertTrue(row["created_at"])
        self.assertNotIn("_seq", row)

    def test_select_filters_orders_and_projects(self) -> None:
        seed_packages(self.store, SEED_PACKAGES)
        self.store.insert("packages", {"name": "Hidden", "price": 1, "is_active": False})

        rows = self.store.select("packages", columns="name, price", filters={"is_active": True}, order_by="price")

        self.assertEqual([r["name"] for r in rows], ["Basic", "Ultimate", "Epic"])
        self.assertEqual(set(rows[0]), {"name", "price"})

    def test_descending_order_breaks_ties_by_insertion(self) -> None:
        for name in ("first", "second"):
            self.store.insert("t", {"name": name, "created_at": "2024-01-01T00:00:00+00:00"})
        rows = self.store.select("t", order_by="created_at", descending=True)
        self.assertEqual([r["name"] for r in rows], ["second", "first"])

    def test_returned_rows_are_copies(self) -> None:
        self.store.insert("t", {"data": {"a": 1}})
        self.store.select("t")[0]["data"]["a"] = 2
        self.assertEqual(self.store.select("t")[0]["data"]["a"], 1)

    def test_with_token_shares_tables(self) -> None:
        self.assertIs(self.store.with_token("jwt"), self.store)

    def test_update_requires_filter(self) -> None:
        with self.assertRaises(StoreError):
            self.store.update("t", {"status": "x"}, {})

    def test_update_patches_matching_rows(self) -> None:
        a = self.store.insert("t", {"status": "new"})
        self.store.insert("t", {"status": "new"})
        changed = self.store.update("t", {"status": "completed"}, {"id": a["id"]})
        self.assertEqual(len(changed), 1)
        statuses = sorted(r["status"] for r in self.store.select("t"))
        self.assertEqual(statuses, ["completed", "new"])

    def test_trigger_projects_application_into_submissions(self) -> None:
        self.store.add_trigger("llc_applications", lambda row: ("form_submissions", submission_from_application(row)))
        app = self.store.insert("llc_applications", {
            "user_id": "u1", "package_id": "p1", "state": "DE", "company_name": "Acme LLC",
            "form_data": {"memberName": "Jane", "email": "jane@example.com", "phone": "555"},
            "status": "pending", "payment_status": "pending",
        })
        subs = self.store.select("form_submissions")
        self.assertEqual(len(subs), 1)
        self.assertEqual(subs[0]["id"], app["id"])
        self.assertEqual(subs[0]["member_name"], "Jane")
        self.assertEqual(subs[0]["status"], "new")
        self.assertEqual(self.store.count("llc_applications"), 1)


class TestSupabaseRecordStore(unittest.TestCase):
    def _store(self, handler, token=None) -> SupabaseRecordStore:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        return SupabaseRecordStore(
            "https://proj.supabase.co/", "anon-key",
            access_token=token, client=client,
        )

    def test_requires_url_and_key(self) -> None:
        with self.assertRaises(ValueError):
            SupabaseRecordStore("", "")

    def test_select_builds_postgrest_query(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = request.url
            seen["headers"] = request.headers
            return httpx.Response(200, json=[{"id": "1", "name": "Basic"}])

        rows = self._store(handler, token="user-jwt").select(
            "packages", filters={"is_active": True}, order_by="price",
        )

        self.assertEqual(rows, [{"id": "1", "name": "Basic"}])
        self.assertEqual(seen["url"].path, "/rest/v1/packages")
        self.assertEqual(seen["url"].params["is_active"], "eq.true")
        self.assertEqual(seen["url"].params["order"], "price.asc")
        self.assertEqual(seen["url"].params["select"], "*")
        self.assertEqual(seen["headers"]["apikey"], "anon-key")
        self.assertEqual(seen["headers"]["authorization"], "Bearer user-jwt")

    def test_anon_key_used_without_session(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers["authorization"]
            return httpx.Response(200, json=[])

        self._store(handler).select("packages")
        self.assertEqual(seen["auth"], "Bearer anon-key")

    def test_with_token_scopes_requests_to_one_visitor(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers["authorization"])
            return httpx.Response(200, json=[])

        base = self._store(handler)
        base.with_token("alice-jwt").select("llc_applications")
        base.with_token(None).select("packages")
        base.select("packages")
        self.assertEqual(seen, ["Bearer alice-jwt", "Bearer anon-key", "Bearer anon-key"])

    def test_insert_asks_for_representation(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["prefer"] = request.headers.get("prefer")
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json=[{"id": "abc", **seen["body"]}])

        row = self._store(handler).insert("contact_messages", {"name": "A"})
        self.assertEqual(seen["prefer"], "return=representation")
        self.assertEqual(row["id"], "abc")

    def test_update_sends_filters_and_desc_order_select(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=[])

        self._store(handler).update("form_submissions", {"status": "processing"}, {"id": "s1"})
        self.assertEqual(seen["method"], "PATCH")
        self.assertEqual(seen["params"], {"id": "eq.s1"})

        self._store(handler).select("form_submissions", columns="id, status", order_by="created_at", descending=True)
        self.assertEqual(seen["params"]["order"], "created_at.desc")
        self.assertEqual(seen["params"]["select"], "id,status")

    def test_http_error_raises_store_error(self) -> None:
        store = self._store(lambda request: httpx.Response(401, json={"message": "JWT expired"}))
        with self.assertRaises(StoreError):
            store.select("packages")

    def test_transport_error_raises_store_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with self.assertRaises(StoreError):
            self._store(handler).insert("contact_messages", {"name": "A"})


if __name__ == "__main__":
    unittest.main()
