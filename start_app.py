#!/usr/bin/env python3
"""
Startup script for the OGS Solution site.
Loads configuration, checks the backend settings, then launches the Gradio UI.
"""

import os
import sys


def main():
    print("🚀 Starting OGS Solution LLC formation site...")
    print("=" * 50)

    # Import configuration first
    try:
        import config
        print("✅ Configuration loaded successfully")
    except ImportError as e:
        print(f"❌ Failed to load configuration: {e}")
        sys.exit(1)

    required_vars = ["ADMIN_EMAIL"]
    if config.Config.STORAGE_BACKEND == "supabase":
        required_vars += ["SUPABASE_URL", "SUPABASE_ANON_KEY"]
    missing_vars = [var for var in required_vars if not os.getenv(var)]

    if missing_vars:
        print(f"❌ Missing environment variables: {', '.join(missing_vars)}")
        sys.exit(1)

    if not config.Config.SENDGRID_API_KEY:
        print("⚠️ SENDGRID_API_KEY not set, support notifications run in test mode")

    print(f"✅ Backend: {config.Config.STORAGE_BACKEND}")
    print("✅ Starting Gradio application...")
    print("=" * 50)

    from app_context import AppContext
    from gradio_app import build_demo

    try:
        context = AppContext.from_config(config.Config)
        demo = build_demo(context)
    except Exception as e:
        print(f"❌ Failed to start application: {e}")
        sys.exit(1)

    try:
        demo.queue().launch()
    finally:
        context.close()


if __name__ == "__main__":
    main()
