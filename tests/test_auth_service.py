from __future__ import annotations

import json
import unittest

import httpx

from auth_service import (
    SIGNED_IN,
    SIGNED_OUT,
    AuthError,
    AuthService,
    AuthState,
    MemoryAuthProvider,
    SupabaseAuthProvider,
)
from record_store import MemoryRecordStore, StoreError


class _NoProfileStore(MemoryRecordStore):
    def insert(self, table, row):
        raise StoreError("profiles table missing")


class TestMemoryAuthProvider(unittest.TestCase):
    def setUp(self) -> None:
        self.provider = MemoryAuthProvider()

    def test_sign_up_returns_session(self) -> None:
        session = self.provider.sign_up("a@example.com", "pw", "A")
        self.assertEqual(session.email, "a@example.com")
        self.assertTrue(self.provider.is_active(session.access_token))

    def test_duplicate_sign_up(self) -> None:
        self.provider.sign_up("a@example.com", "pw")
        with self.assertRaises(AuthError):
            self.provider.sign_up("a@example.com", "pw")

    def test_wrong_password(self) -> None:
        self.provider.sign_up("a@example.com", "pw")
        with self.assertRaisesRegex(AuthError, "Invalid login credentials"):
            self.provider.sign_in("a@example.com", "nope")

    def test_sign_out_revokes_only_that_token(self) -> None:
        first = self.provider.sign_up("a@example.com", "pw")
        second = self.provider.sign_in("a@example.com", "pw")
        self.provider.sign_out(first.access_token)
        self.assertFalse(self.provider.is_active(first.access_token))
        self.assertTrue(self.provider.is_active(second.access_token))


class TestAuthState(unittest.TestCase):
    def setUp(self) -> None:
        self.provider = MemoryAuthProvider()
        self.provider.sign_up("a@example.com", "pw")
        self.provider.sign_up("b@example.com", "pw")
        self.auth = AuthState(self.provider)
        self.events = []
        self.unsubscribe = self.auth.on_auth_state_change(lambda event, session: self.events.append(event))

    def test_sign_in_and_out_emit_events(self) -> None:
        session = self.auth.sign_in("a@example.com", "pw")
        self.assertEqual(self.auth.get_session(), session)
        self.auth.sign_out()
        self.assertIsNone(self.auth.get_session())
        self.assertEqual(self.events, [SIGNED_IN, SIGNED_OUT])
        self.assertFalse(self.provider.is_active(session.access_token))

    def test_unsubscribe_stops_events(self) -> None:
        self.unsubscribe()
        self.auth.sign_in("a@example.com", "pw")
        self.assertEqual(self.events, [])

    def test_failed_sign_in_leaves_no_session(self) -> None:
        with self.assertRaises(AuthError):
            self.auth.sign_in("a@example.com", "wrong")
        self.assertIsNone(self.auth.get_session())
        self.assertEqual(self.events, [])

    def test_failing_subscriber_does_not_break_sign_in(self) -> None:
        def boom(event, session):
            raise RuntimeError("subscriber bug")

        self.auth.on_auth_state_change(boom)
        self.auth.sign_in("a@example.com", "pw")
        self.assertIsNotNone(self.auth.get_session())

    def test_two_visitors_have_separate_sessions(self) -> None:
        other = AuthState(self.provider)
        self.auth.sign_in("a@example.com", "pw")
        self.assertIsNone(other.get_session())

        other.sign_in("b@example.com", "pw")
        self.auth.sign_out()
        self.assertEqual(other.get_session().email, "b@example.com")
        self.assertEqual(self.events, [SIGNED_IN, SIGNED_OUT])


class TestAuthService(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryRecordStore()
        self.provider = MemoryAuthProvider()
        self.service = AuthService(self.store)
        self.auth = AuthState(self.provider)

    def test_sign_up_creates_profile(self) -> None:
        result = self.service.sign_up(self.auth, "a@example.com", "pw", " Alice ", "555")
        self.assertTrue(result.ok)
        profiles = self.store.select("profiles")
        self.assertEqual(profiles[0]["id"], result.session.user_id)
        self.assertEqual(profiles[0]["full_name"], "Alice")
        self.assertEqual(self.auth.get_session().email, "a@example.com")

    def test_profile_failure_is_not_fatal(self) -> None:
        service = AuthService(_NoProfileStore())
        self.assertTrue(service.sign_up(self.auth, "a@example.com", "pw", "Alice").ok)

    def test_blank_input_rejected(self) -> None:
        self.assertFalse(self.service.sign_in(self.auth, "", "pw").ok)
        self.assertFalse(self.service.sign_up(self.auth, "a@example.com", "pw", "  ").ok)

    def test_sign_in_error_message(self) -> None:
        result = self.service.sign_in(self.auth, "ghost@example.com", "pw")
        self.assertFalse(result.ok)
        self.assertEqual(result.message, "Invalid login credentials")

    def test_sign_out(self) -> None:
        self.service.sign_up(self.auth, "a@example.com", "pw", "Alice")
        self.assertTrue(AuthService.sign_out(self.auth).ok)
        self.assertIsNone(self.auth.get_session())

    def test_sign_in_only_affects_the_given_visitor(self) -> None:
        self.service.sign_up(self.auth, "a@example.com", "pw", "Alice")
        other = AuthState(self.provider)
        self.assertIsNone(other.get_session())


class TestSupabaseAuthProvider(unittest.TestCase):
    def _provider(self, handler) -> SupabaseAuthProvider:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        return SupabaseAuthProvider("https://proj.supabase.co", "anon-key", client=client)

    def test_password_sign_in(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["grant"] = request.url.params["grant_type"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={
                "access_token": "jwt", "user": {"id": "u1", "email": "a@example.com"},
            })

        session = self._provider(handler).sign_in("a@example.com", "pw")

        self.assertEqual(seen["path"], "/auth/v1/token")
        self.assertEqual(seen["grant"], "password")
        self.assertEqual(seen["body"], {"email": "a@example.com", "password": "pw"})
        self.assertEqual(session.access_token, "jwt")
        self.assertEqual(session.user_id, "u1")

    def test_rejected_credentials_use_server_message(self) -> None:
        provider = self._provider(lambda request: httpx.Response(
            400, json={"error": "invalid_grant", "error_description": "Invalid login credentials"},
        ))
        with self.assertRaisesRegex(AuthError, "Invalid login credentials"):
            provider.sign_in("a@example.com", "bad")

    def test_sign_up_without_session_asks_for_confirmation(self) -> None:
        provider = self._provider(lambda request: httpx.Response(200, json={"id": "u1", "email": "a@example.com"}))
        with self.assertRaises(AuthError):
            provider.sign_up("a@example.com", "pw", "Alice")

    def test_logout_sends_the_visitor_token(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["auth"] = request.headers["authorization"]
            return httpx.Response(204)

        self._provider(handler).sign_out("visitor-jwt")
        self.assertEqual(seen["path"], "/auth/v1/logout")
        self.assertEqual(seen["auth"], "Bearer visitor-jwt")

    def test_state_clears_session_even_if_logout_fails(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/logout"):
                return httpx.Response(500)
            return httpx.Response(200, json={"access_token": "jwt", "user": {"id": "u1", "email": "a@example.com"}})

        auth = AuthState(self._provider(handler))
        auth.sign_in("a@example.com", "pw")
        with self.assertRaises(AuthError):
            auth.sign_out()
        self.assertIsNone(auth.get_session())


if __name__ == "__main__":
    unittest.main()
