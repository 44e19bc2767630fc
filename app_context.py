# app_context.py
from dataclasses import dataclass
from typing import Optional

from admin_auth import AdminAuth
from admin_service import AdminService
from auth_service import AuthService, AuthState, MemoryAuthProvider, Session, SupabaseAuthProvider
from catalog_service import CatalogService
from contact_service import ContactService, SupportNotifier
from dashboard_service import DashboardService
from models import submission_from_application
from record_store import MemoryRecordStore, SupabaseRecordStore, seed_packages
from site_content import SEED_PACKAGES


@dataclass
class Theme:
    mode: str = "light"

    def toggle(self) -> str:
        self.mode = "dark" if self.mode == "light" else "light"
        return self.mode


@dataclass
class AppContext:
    """
    Shared, stateless collaborators built once at startup. Nothing here knows
    who is signed in; each browser keeps its own ``AuthState`` and passes its
    session in.
    """
    store: object
    auth_provider: object
    auth: AuthService
    catalog: CatalogService
    contact: ContactService
    admin_email: str
    whatsapp_url: str
    chat_reply_delay: float = 1.0

    @classmethod
    def from_config(cls, config, *, store=None, auth_provider=None) -> "AppContext":
        if store is None or auth_provider is None:
            store, auth_provider = _build_backend(config, store, auth_provider)

        notifier: Optional[SupportNotifier] = SupportNotifier(
            api_key=config.SENDGRID_API_KEY,
            from_email=config.MAIL_FROM,
            from_name=config.MAIL_FROM_NAME,
            support_email=config.SUPPORT_EMAIL,
        )
        print(f"[APP LOG] 🧩 context ready (backend={config.STORAGE_BACKEND})")
        return cls(
            store=store,
            auth_provider=auth_provider,
            auth=AuthService(store),
            catalog=CatalogService(store),
            contact=ContactService(store, notifier),
            admin_email=config.ADMIN_EMAIL,
            whatsapp_url=config.WHATSAPP_URL,
            chat_reply_delay=config.CHAT_REPLY_DELAY_SECONDS,
        )

    # ---- per-visitor pieces ----
    def new_auth_state(self) -> AuthState:
        return AuthState(self.auth_provider)

    def new_admin_auth(self, auth: AuthState) -> AdminAuth:
        gate = AdminAuth(auth, self.admin_email)
        gate.start()
        return gate

    def store_for(self, session: Optional[Session]):
        return self.store.with_token(session.access_token if session else None)

    def dashboard_for(self, session: Optional[Session]) -> DashboardService:
        return DashboardService(self.store_for(session))

    def admin_for(self, session: Optional[Session]) -> AdminService:
        return AdminService(self.store_for(session))

    def close(self) -> None:
        for resource in (self.store, self.auth_provider):
            close = getattr(resource, "close", None)
            if close is not None:
                close()


def _build_backend(config, store=None, auth_provider=None):
    if config.STORAGE_BACKEND == "supabase":
        auth_provider = auth_provider or SupabaseAuthProvider(config.SUPABASE_URL, config.SUPABASE_ANON_KEY)
        store = store or SupabaseRecordStore(config.SUPABASE_URL, config.SUPABASE_ANON_KEY)
        return store, auth_provider

    if store is None:
        store = MemoryRecordStore()
        store.add_trigger("llc_applications", lambda row: ("form_submissions", submission_from_application(row)))
        seed_packages(store, SEED_PACKAGES)
    return store, auth_provider or MemoryAuthProvider()
