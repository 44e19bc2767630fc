# config.py
import os

def setup_environment():
    # ==== Supabase (storage + auth) ====
    os.environ.setdefault("STORAGE_BACKEND", "memory")  # memory | supabase
    os.environ.setdefault("SUPABASE_URL", "")
    os.environ.setdefault("SUPABASE_ANON_KEY", "")

    # ==== Admin ====
    os.environ.setdefault("ADMIN_EMAIL", "admin@ogssolution.com")

    # ==== SendGrid ====
    os.environ.setdefault("SENDGRID_API_KEY", "")
    os.environ.setdefault("MAIL_FROM", "no-reply@ogssolution.com")
    os.environ.setdefault("MAIL_FROM_NAME", "OGS Solution")
    os.environ.setdefault("SUPPORT_EMAIL", "support@ogssolution.com")

    # ==== Site ====
    os.environ.setdefault("WHATSAPP_URL", "https://wa.me/15551234567")
    os.environ.setdefault("CHAT_REPLY_DELAY_SECONDS", "1.0")

    # ==== App base URL (Gradio) ====
    # Default to the typical Gradio port. You can override at runtime.
    os.environ.setdefault("SITE_URL", "http://localhost:7860")
    os.environ.setdefault("ENV", "development")

    print("✅ Environment variables configured for Gradio at", os.environ["SITE_URL"])


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


class Config:
    STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "memory")
    SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
    SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "")

    ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "")

    SENDGRID_API_KEY = os.environ.get("SENDGRID_API_KEY", "")
    MAIL_FROM = os.environ.get("MAIL_FROM", "")
    MAIL_FROM_NAME = os.environ.get("MAIL_FROM_NAME", "OGS Solution")
    SUPPORT_EMAIL = os.environ.get("SUPPORT_EMAIL", "support@ogssolution.com")

    WHATSAPP_URL = os.environ.get("WHATSAPP_URL", "https://wa.me/15551234567")
    CHAT_REPLY_DELAY_SECONDS = _float_env("CHAT_REPLY_DELAY_SECONDS", 1.0)

    SITE_URL = os.environ.get("SITE_URL", "http://localhost:7860")
    ENV = os.environ.get("ENV", "development")

    @classmethod
    def load(cls):
        """Re-read every setting from the current environment."""
        cls.STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "memory").strip().lower()
        cls.SUPABASE_URL = os.environ.get("SUPABASE_URL", "").strip()
        cls.SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "").strip()
        cls.ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "").strip()
        cls.SENDGRID_API_KEY = os.environ.get("SENDGRID_API_KEY", "")
        cls.MAIL_FROM = os.environ.get("MAIL_FROM", "")
        cls.MAIL_FROM_NAME = os.environ.get("MAIL_FROM_NAME", "OGS Solution")
        cls.SUPPORT_EMAIL = os.environ.get("SUPPORT_EMAIL", "support@ogssolution.com")
        cls.WHATSAPP_URL = os.environ.get("WHATSAPP_URL", "https://wa.me/15551234567")
        cls.CHAT_REPLY_DELAY_SECONDS = _float_env("CHAT_REPLY_DELAY_SECONDS", 1.0)
        cls.SITE_URL = os.environ.get("SITE_URL", "http://localhost:7860")
        cls.ENV = os.environ.get("ENV", "development")
        return cls

# helper (optional): call this after demo.launch(share=True)
def set_site_url_from_gradio_share(share_url: str):
    if share_url:
        os.environ["SITE_URL"] = share_url
        Config.SITE_URL = share_url
        print("🔗 SITE_URL updated to Gradio share URL:", share_url)

setup_environment()
Config.load()
