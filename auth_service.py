# auth_service.py
import hashlib
import hmac
import secrets
import uuid
from typing import Any, Callable, Dict, List, Optional

import httpx
from pydantic import BaseModel

from record_store import StoreError

AuthCallback = Callable[[str, Optional["Session"]], None]

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"


class AuthError(Exception):
    """The auth provider rejected a request or could not be reached."""


class Session(BaseModel):
    access_token: str
    user_id: str
    email: str


# ========= PROVIDERS (shared, no per-user state) =========
class MemoryAuthProvider:
    """Email/password accounts kept in process memory (dev + tests)."""

    def __init__(self) -> None:
        self._users: Dict[str, Dict[str, Any]] = {}
        self._tokens: Dict[str, str] = {}

    @staticmethod
    def _hash(password: str, salt: str) -> str:
        return hashlib.sha256(f"{salt}:{password}".encode("utf-8")).hexdigest()

    def sign_up(self, email: str, password: str, full_name: str = "") -> Session:
        if email in self._users:
            raise AuthError("User already registered")
        salt = secrets.token_hex(8)
        self._users[email] = {
            "id": str(uuid.uuid4()),
            "email": email,
            "salt": salt,
            "password_hash": self._hash(password, salt),
            "full_name": full_name,
        }
        return self.sign_in(email, password)

    def sign_in(self, email: str, password: str) -> Session:
        user = self._users.get(email)
        if not user or not hmac.compare_digest(user["password_hash"], self._hash(password, user["salt"])):
            raise AuthError("Invalid login credentials")
        token = secrets.token_urlsafe(24)
        self._tokens[token] = user["id"]
        return Session(access_token=token, user_id=user["id"], email=email)

    def sign_out(self, access_token: str) -> None:
        self._tokens.pop(access_token, None)

    def is_active(self, access_token: str) -> bool:
        return access_token in self._tokens


class SupabaseAuthProvider:
    """GoTrue (Supabase Auth) over plain HTTP."""

    def __init__(self, url: str, anon_key: str, *, client: Optional[httpx.Client] = None, timeout_s: float = 15.0) -> None:
        if not url or not anon_key:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY are required for the supabase backend")
        self._base = f"{url.rstrip('/')}/auth/v1"
        self._anon_key = anon_key
        self._client = client or httpx.Client(timeout=timeout_s)

    def _headers(self, token: Optional[str] = None) -> Dict[str, str]:
        return {
            "apikey": self._anon_key,
            "Authorization": f"Bearer {token or self._anon_key}",
            "Content-Type": "application/json",
        }

    def _post(self, path: str, payload: Optional[dict] = None, token: Optional[str] = None) -> Dict[str, Any]:
        try:
            resp = self._client.post(f"{self._base}{path}", headers=self._headers(token), json=payload or {})
        except httpx.HTTPError as e:
            raise AuthError(f"Could not reach auth service: {e}") from e
        data: Dict[str, Any] = {}
        if resp.content:
            try:
                data = resp.json()
            except ValueError:
                data = {}
        if not (200 <= resp.status_code < 300):
            message = data.get("error_description") or data.get("msg") or data.get("message") or f"HTTP {resp.status_code}"
            raise AuthError(message)
        return data

    @staticmethod
    def _session_from(data: Dict[str, Any]) -> Optional[Session]:
        user = data.get("user") or {}
        token = data.get("access_token")
        if not token or not user.get("id"):
            return None
        return Session(access_token=token, user_id=user["id"], email=user.get("email", ""))

    def sign_in(self, email: str, password: str) -> Session:
        data = self._post("/token?grant_type=password", {"email": email, "password": password})
        session = self._session_from(data)
        if session is None:
            raise AuthError("Sign-in response had no session")
        return session

    def sign_up(self, email: str, password: str, full_name: str = "") -> Session:
        data = self._post("/signup", {"email": email, "password": password, "data": {"full_name": full_name}})
        session = self._session_from(data)
        if session is None:
            # Email confirmation is on: the account exists but no session yet.
            raise AuthError("Check your email to confirm your account, then sign in.")
        return session

    def sign_out(self, access_token: str) -> None:
        self._post("/logout", token=access_token)

    def close(self) -> None:
        self._client.close()


# ========= PER-BROWSER AUTH STATE =========
class AuthState:
    """
    One visitor's session on top of a shared provider: current session,
    sign in/up/out, and auth-change subscribers. Each browser gets its own.
    """

    def __init__(self, provider) -> None:
        self.provider = provider
        self._session: Optional[Session] = None
        self._subscribers: List[AuthCallback] = []

    def get_session(self) -> Optional[Session]:
        return self._session

    def on_auth_state_change(self, callback: AuthCallback) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)
        return unsubscribe

    def _emit(self, event: str) -> None:
        for cb in list(self._subscribers):
            try:
                cb(event, self._session)
            except Exception as e:
                print(f"[AUTH LOG] ⚠️ auth subscriber failed on {event}: {e!r}")

    def sign_in(self, email: str, password: str) -> Session:
        self._session = self.provider.sign_in(email, password)
        self._emit(SIGNED_IN)
        return self._session

    def sign_up(self, email: str, password: str, full_name: str = "") -> Session:
        self._session = self.provider.sign_up(email, password, full_name)
        self._emit(SIGNED_IN)
        return self._session

    def sign_out(self) -> None:
        token = self._session.access_token if self._session else None
        try:
            if token:
                self.provider.sign_out(token)
        finally:
            self._session = None
            self._emit(SIGNED_OUT)


# ========= CUSTOMER AUTH =========
class AuthResult(BaseModel):
    ok: bool
    message: str = ""
    session: Optional[Session] = None


class AuthService:
    """Customer sign-in / sign-up for one visitor's ``AuthState``, plus the profile row."""

    def __init__(self, store) -> None:
        self.store = store

    def sign_in(self, auth: AuthState, email: str, password: str) -> AuthResult:
        email = (email or "").strip()
        if not email or not password:
            return AuthResult(ok=False, message="Please enter your email and password.")
        try:
            session = auth.sign_in(email, password)
        except AuthError as e:
            print(f"[AUTH LOG] ❌ sign_in failed for {email}: {e}")
            return AuthResult(ok=False, message=str(e))
        print(f"[AUTH LOG] 🔐 signed in user_id={session.user_id}")
        return AuthResult(ok=True, session=session)

    def sign_up(self, auth: AuthState, email: str, password: str, full_name: str, phone: str = "") -> AuthResult:
        email = (email or "").strip()
        if not email or not password or not (full_name or "").strip():
            return AuthResult(ok=False, message="Please fill in your name, email and password.")
        try:
            session = auth.sign_up(email, password, full_name.strip())
        except AuthError as e:
            print(f"[AUTH LOG] ❌ sign_up failed for {email}: {e}")
            return AuthResult(ok=False, message=str(e))

        try:
            self.store.with_token(session.access_token).insert("profiles", {
                "id": session.user_id,
                "full_name": full_name.strip(),
                "phone": phone.strip() or None,
            })
        except StoreError as e:
            # The account exists either way; the profile can be filled in later.
            print(f"[AUTH LOG] ⚠️ profile insert failed for user_id={session.user_id}: {e}")
        print(f"[AUTH LOG] 🆕 signed up user_id={session.user_id}")
        return AuthResult(ok=True, session=session)

    @staticmethod
    def sign_out(auth: AuthState) -> AuthResult:
        try:
            auth.sign_out()
        except AuthError as e:
            print(f"[AUTH LOG] ❌ sign_out error: {e}")
            return AuthResult(ok=False, message="Error signing out.")
        return AuthResult(ok=True)
