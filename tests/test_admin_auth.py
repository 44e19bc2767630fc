from __future__ import annotations

import unittest

from admin_auth import AdminAuth
from auth_service import AuthError, AuthState, MemoryAuthProvider

ADMIN = "admin@ogssolution.com"


class _BrokenSessionState(AuthState):
    def get_session(self):
        raise AuthError("session lookup failed")


class TestAdminAuth(unittest.TestCase):
    def setUp(self) -> None:
        self.provider = MemoryAuthProvider()
        self.provider.sign_up(ADMIN, "admin-pw")
        self.provider.sign_up("user@example.com", "user-pw")
        self.auth = AuthState(self.provider)
        self.admin = AdminAuth(self.auth, ADMIN)
        self.admin.start()

    def tearDown(self) -> None:
        self.admin.stop()

    def test_not_admin_without_session(self) -> None:
        self.assertFalse(self.admin.is_admin)
        self.assertFalse(self.admin.loading)

    def test_admin_sign_in(self) -> None:
        result = self.admin.sign_in(ADMIN, "admin-pw")
        self.assertTrue(result.ok)
        self.assertTrue(self.admin.is_admin)

    def test_non_admin_is_signed_out(self) -> None:
        result = self.admin.sign_in("user@example.com", "user-pw")
        self.assertFalse(result.ok)
        self.assertEqual(result.error, "Unauthorized access")
        self.assertFalse(self.admin.is_admin)
        self.assertIsNone(self.auth.get_session())

    def test_bad_password_reports_provider_error(self) -> None:
        result = self.admin.sign_in(ADMIN, "wrong")
        self.assertFalse(result.ok)
        self.assertEqual(result.error, "Invalid login credentials")

    def test_email_match_is_case_sensitive(self) -> None:
        self.provider.sign_up("Admin@OGSSolution.com", "pw")
        result = self.admin.sign_in("Admin@OGSSolution.com", "pw")
        self.assertFalse(result.ok)
        self.assertFalse(self.admin.is_admin)

    def test_tracks_auth_state_changes(self) -> None:
        self.auth.sign_in(ADMIN, "admin-pw")
        self.assertTrue(self.admin.is_admin)
        self.auth.sign_out()
        self.assertFalse(self.admin.is_admin)

    def test_sign_out(self) -> None:
        self.admin.sign_in(ADMIN, "admin-pw")
        self.admin.sign_out()
        self.assertFalse(self.admin.is_admin)
        self.assertIsNone(self.auth.get_session())

    def test_existing_admin_session_is_recognised_on_start(self) -> None:
        self.auth.sign_in(ADMIN, "admin-pw")
        other = AdminAuth(self.auth, ADMIN)
        other.start()
        self.assertTrue(other.is_admin)
        other.stop()

    def test_session_check_failure_leaves_not_admin(self) -> None:
        gate = AdminAuth(_BrokenSessionState(self.provider), ADMIN)
        gate.start()
        self.assertFalse(gate.is_admin)
        self.assertFalse(gate.loading)
        gate.stop()

    def test_gates_of_different_visitors_are_independent(self) -> None:
        other_auth = AuthState(self.provider)
        other_gate = AdminAuth(other_auth, ADMIN)
        other_gate.start()

        self.admin.sign_in(ADMIN, "admin-pw")
        self.assertFalse(other_gate.is_admin)

        # A rejected non-admin elsewhere must not sign the real admin out.
        self.assertFalse(other_gate.sign_in("user@example.com", "user-pw").ok)
        self.assertTrue(self.admin.is_admin)
        self.assertIsNotNone(self.auth.get_session())
        other_gate.stop()


if __name__ == "__main__":
    unittest.main()
