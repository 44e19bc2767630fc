# admin_auth.py
from typing import Optional

from pydantic import BaseModel

from auth_service import AuthError, AuthState, Session


class AdminSignInResult(BaseModel):
    ok: bool
    error: Optional[str] = None


class AdminAuth:
    """
    Admin gate for one visitor: their session counts as admin only when its
    email equals the configured ADMIN_EMAIL (exact, case-sensitive match).
    """

    def __init__(self, auth: AuthState, admin_email: str) -> None:
        self.auth = auth
        self.admin_email = admin_email
        self.is_admin = False
        self.loading = True
        self._unsubscribe = None

    def start(self) -> None:
        try:
            self.is_admin = self._matches(self.auth.get_session())
        except AuthError as e:
            print(f"[ADMIN LOG] ❌ Error checking admin status: {e}")
        finally:
            self.loading = False
        self._unsubscribe = self.auth.on_auth_state_change(self._on_change)

    def stop(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    def _matches(self, session: Optional[Session]) -> bool:
        return bool(session and self.admin_email and session.email == self.admin_email)

    def _on_change(self, event: str, session: Optional[Session]) -> None:
        self.is_admin = self._matches(session)

    def sign_in(self, email: str, password: str) -> AdminSignInResult:
        self.loading = True
        try:
            try:
                self.auth.sign_in(email, password)
            except AuthError as e:
                return AdminSignInResult(ok=False, error=str(e))

            session = self.auth.get_session()
            if self._matches(session):
                self.is_admin = True
                print("[ADMIN LOG] 🔐 admin signed in")
                return AdminSignInResult(ok=True)

            print("[ADMIN LOG] 🚫 non-admin sign-in -> signing out")
            self.auth.sign_out()
            self.is_admin = False
            return AdminSignInResult(ok=False, error="Unauthorized access")
        except AuthError as e:
            print(f"[ADMIN LOG] ❌ admin sign-in error: {e}")
            return AdminSignInResult(ok=False, error="An error occurred during sign in")
        finally:
            self.loading = False

    def sign_out(self) -> None:
        try:
            self.auth.sign_out()
        except AuthError as e:
            print(f"[ADMIN LOG] ❌ Error signing out: {e}")
        finally:
            self.is_admin = False
