# gradio_app.py
import os
import tempfile
from dataclasses import dataclass, field
from typing import List, Optional

import gradio as gr

from admin_auth import AdminAuth
from admin_service import STATUS_FILTERS, AdminService
from app_context import AppContext, Theme
from auth_service import AuthState
from chat_responder import ChatSession
from intake_wizard import LAST_STEP, IntakeWizard, WizardClosedError
from models import SUBMISSION_STATUSES, Package
from page_views import (
    ADMIN_TABLE_HEADERS,
    admin_stats_markdown,
    admin_table_rows,
    contact_markdown,
    dashboard_markdown,
    footer_markdown,
    home_markdown,
    package_choices,
    progress_markdown,
    review_markdown,
    services_markdown,
    submission_choices,
)
from pages import (
    NAVIGATION,
    AdminDashboardPage,
    AdminLoginPage,
    AuthPage,
    ContactPage,
    DashboardPage,
    GetStartedPage,
    HomePage,
    HowItWorksPage,
    Navigator,
    Page,
    ServicesPage,
    dispatch,
)
from site_content import COMPANY_NAME, FAQS, US_STATES

# Page columns; How It Works shares the home column.
COLUMN_KEYS = ("home", "services", "contact", "get-started", "dashboard", "auth", "admin-login", "admin-dashboard")

WIZARD_FIELDS = (
    "state", "package_id", "company_name", "business_type", "business_purpose",
    "member_name", "email", "phone", "address", "city", "zip_code",
)


# ========= PER-BROWSER STATE =========
@dataclass
class UIState:
    nav: Navigator
    chat: ChatSession
    auth: AuthState
    admin: AdminAuth
    theme: Theme = field(default_factory=Theme)
    wizard: Optional[IntakeWizard] = None
    packages: List[Package] = field(default_factory=list)
    applications: list = field(default_factory=list)
    applications_error: Optional[str] = None
    submissions: list = field(default_factory=list)
    submissions_error: Optional[str] = None
    status_filter: str = "all"
    search_query: str = ""


def new_ui_state(ctx: AppContext) -> UIState:
    auth = ctx.new_auth_state()
    return UIState(
        nav=Navigator(),
        chat=ChatSession(reply_delay=ctx.chat_reply_delay),
        auth=auth,
        admin=ctx.new_admin_auth(auth),
    )


# ========= PAGE ENTRY =========
def enter_page(ctx: AppContext, ui: UIState, page: Page) -> Page:
    """Load what ``page`` needs; returns the page to actually show (auth redirects)."""

    def _plain(p):
        return p

    def _services(p):
        ui.packages = ctx.catalog.load_packages()
        return p

    def _get_started(p):
        user = ui.auth.get_session()
        if user is None:
            return AuthPage()
        ui.packages = ctx.catalog.load_packages()
        selected = p.selected_package.id if p.selected_package else ""
        ui.wizard = IntakeWizard(user.user_id, email=user.email, package_id=selected)
        return p

    def _dashboard(p):
        user = ui.auth.get_session()
        if user is None:
            return AuthPage()
        ui.applications, ui.applications_error = ctx.dashboard_for(user).load_applications(user.user_id)
        return p

    def _admin_dashboard(p):
        if not ui.admin.is_admin:
            return AdminLoginPage()
        ui.submissions, ui.submissions_error = ctx.admin_for(ui.auth.get_session()).load_submissions()
        return p

    target = dispatch(page, {
        HomePage: _plain,
        HowItWorksPage: _plain,
        ContactPage: _plain,
        AuthPage: _plain,
        AdminLoginPage: _plain,
        ServicesPage: _services,
        GetStartedPage: _get_started,
        DashboardPage: _dashboard,
        AdminDashboardPage: _admin_dashboard,
    })
    if target is not page:
        print(f"[UI LOG] ↪ redirect {page.key} -> {target.key}")
        return enter_page(ctx, ui, target)
    return target


def column_for(page: Page) -> str:
    return "home" if isinstance(page, HowItWorksPage) else page.key


# ========= UI =========
def build_demo(ctx: AppContext) -> gr.Blocks:
    with gr.Blocks(theme=gr.themes.Soft(), title=COMPANY_NAME) as demo:
        st_ui = gr.State()

        # ---- header ----
        with gr.Row():
            gr.Markdown(f"## 🏢 {COMPANY_NAME}")
            nav_buttons = [(gr.Button(label, size="sm", variant="secondary"), cls) for label, cls in NAVIGATION]
            get_started_btn = gr.Button("Get Started", size="sm", variant="primary")
            dashboard_btn = gr.Button("Dashboard", size="sm")
            auth_btn = gr.Button("Sign In", size="sm")
            theme_btn = gr.Button("🌙 Dark", size="sm")
            admin_btn = gr.Button("Admin", size="sm")

        # ---- home ----
        with gr.Column(visible=True) as col_home:
            gr.Markdown(home_markdown())
            home_cta = gr.Button("Start Your LLC Now", variant="primary")
            gr.Markdown("## Frequently Asked Questions\nEverything you need to know about forming your LLC")
            for faq in FAQS:
                with gr.Accordion(faq["question"], open=False):
                    gr.Markdown(faq["answer"])
            gr.Markdown("Still have questions? Our AI assistant and support team are here to help 24/7.")

        # ---- services ----
        with gr.Column(visible=False) as col_services:
            services_md = gr.Markdown()
            services_pick = gr.Radio(choices=[], label="Select Package")
            services_btn = gr.Button("Select Package", variant="primary")
            services_contact_btn = gr.Button("Contact Our Team")

        # ---- contact ----
        with gr.Column(visible=False) as col_contact:
            gr.Markdown(contact_markdown())
            gr.Markdown("## Send Us a Message")
            c_name = gr.Textbox(label="Your Name", placeholder="John Doe")
            c_email = gr.Textbox(label="Your Email", placeholder="john@example.com")
            c_subject = gr.Textbox(label="Subject")
            c_message = gr.Textbox(label="Message", lines=5)
            c_send = gr.Button("Send Message", variant="primary")
            c_status = gr.Markdown()

        # ---- get started (wizard) ----
        with gr.Column(visible=False) as col_wizard:
            gr.Markdown("# Start Your LLC Formation\nComplete the following steps to form your LLC")
            w_progress = gr.Markdown()
            with gr.Group(visible=True) as w_step1:
                gr.Markdown("## Select Your State\nChoose the state where you want to form your LLC")
                w_state = gr.Dropdown(choices=[(s["name"], s["code"]) for s in US_STATES], label="State", value=None)
            with gr.Group(visible=False) as w_step2:
                gr.Markdown("## Choose Your Package\nSelect the service package that fits your needs")
                w_package = gr.Radio(choices=[], label="Package")
            with gr.Group(visible=False) as w_step3:
                gr.Markdown("## Business Information\nTell us about your business")
                w_company = gr.Textbox(label="Company Name", placeholder="e.g., My Business LLC")
                w_type = gr.Dropdown(
                    choices=[("Single-Member LLC", "single-member"), ("Multi-Member LLC", "multi-member")],
                    value="single-member", label="Business Type",
                )
                w_purpose = gr.Textbox(label="Business Purpose", placeholder="Describe what your business will do...", lines=4)
            with gr.Group(visible=False) as w_step4:
                gr.Markdown("## Contact Information\nHow can we reach you?")
                w_member = gr.Textbox(label="Full Name")
                with gr.Row():
                    w_email = gr.Textbox(label="Email")
                    w_phone = gr.Textbox(label="Phone")
                w_address = gr.Textbox(label="Street Address")
                with gr.Row():
                    w_city = gr.Textbox(label="City")
                    w_zip = gr.Textbox(label="ZIP Code")
            with gr.Group(visible=False) as w_step5:
                w_review = gr.Markdown()
            with gr.Row():
                w_back = gr.Button("◀ Back", interactive=False)
                w_next = gr.Button("Next ▶", variant="primary", interactive=False)
                w_submit = gr.Button("Submit Application ✓", variant="primary", visible=False)

        # ---- customer dashboard ----
        with gr.Column(visible=False) as col_dashboard:
            dash_md = gr.Markdown()
            dash_start_btn = gr.Button("Start a New Application")

        # ---- customer auth ----
        with gr.Column(visible=False) as col_auth:
            gr.Markdown("# Sign In\nSign in or create an account to start your LLC formation.")
            a_email = gr.Textbox(label="Email")
            a_password = gr.Textbox(label="Password", type="password")
            with gr.Accordion("New here? Create an account", open=False):
                a_name = gr.Textbox(label="Full Name")
                a_phone = gr.Textbox(label="Phone (optional)")
                a_signup = gr.Button("Create Account")
            a_signin = gr.Button("Sign In", variant="primary")
            a_status = gr.Markdown()

        # ---- admin login ----
        with gr.Column(visible=False) as col_admin_login:
            gr.Markdown("# Admin Sign In")
            ad_email = gr.Textbox(label="Admin Email")
            ad_password = gr.Textbox(label="Password", type="password")
            ad_signin = gr.Button("Sign In", variant="primary")
            ad_status = gr.Markdown()

        # ---- admin dashboard ----
        with gr.Column(visible=False) as col_admin:
            gr.Markdown("# Admin Dashboard\nManage LLC formation submissions")
            adm_stats = gr.Markdown()
            with gr.Row():
                adm_search = gr.Textbox(label="Search", placeholder="Search...")
                adm_filter = gr.Dropdown(choices=[(s.capitalize() if s != "all" else "All Status", s) for s in STATUS_FILTERS],
                                         value="all", label="Status")
            adm_table = gr.Dataframe(headers=ADMIN_TABLE_HEADERS, interactive=False, wrap=True)
            with gr.Row():
                adm_pick = gr.Dropdown(choices=[], label="Submission")
                adm_new_status = gr.Dropdown(choices=[(s.capitalize(), s) for s in SUBMISSION_STATUSES], label="New Status")
                adm_update = gr.Button("Update Status")
            with gr.Row():
                adm_export = gr.Button("Export CSV")
                adm_signout = gr.Button("Sign Out", variant="stop")
            adm_file = gr.File(label="CSV export", visible=False)

        # ---- footer + chat ----
        gr.Markdown(footer_markdown(ctx.whatsapp_url))
        with gr.Accordion("💬 Chat with AI Assistant", open=False):
            chat = gr.Chatbot(height=360, type="messages")
            chat_in = gr.Textbox(placeholder="Type your message...", show_label=False)
            with gr.Row():
                chat_send = gr.Button("Send", variant="primary")
                chat_reset = gr.Button("Close / Reset Chat")

        columns = dict(zip(COLUMN_KEYS, (
            col_home, col_services, col_contact, col_wizard, col_dashboard, col_auth, col_admin_login, col_admin,
        )))
        step_groups = (w_step1, w_step2, w_step3, w_step4, w_step5)
        wizard_inputs = dict(zip(WIZARD_FIELDS, (
            w_state, w_package, w_company, w_type, w_purpose,
            w_member, w_email, w_phone, w_address, w_city, w_zip,
        )))

        # ========= RENDER =========
        def wizard_updates(ui: UIState, with_values: bool = False) -> dict:
            w = ui.wizard
            out = {w_progress: progress_markdown(w)}
            if w is None:
                return out
            for i, grp in enumerate(step_groups, start=1):
                out[grp] = gr.update(visible=w.step == i)
            out[w_back] = gr.update(interactive=w.can_go_back())
            out[w_next] = gr.update(visible=w.step < LAST_STEP, interactive=w.can_go_next())
            out[w_submit] = gr.update(visible=w.step == LAST_STEP, interactive=not w.submitting,
                                      value="Submit Application ✓")
            out[w_review] = review_markdown(w, ui.packages)
            if with_values:
                out[w_package] = gr.update(choices=package_choices(ui.packages), value=w.form.package_id or None)
                for name, comp in wizard_inputs.items():
                    if name == "package_id":
                        continue
                    value = getattr(w.form, name)
                    out[comp] = gr.update(value=value or (None if name == "state" else ""))
            return out

        def admin_updates(ui: UIState) -> dict:
            subs = AdminService.filter_submissions(ui.submissions, ui.status_filter, ui.search_query)
            stats_md = admin_stats_markdown(AdminService.stats(ui.submissions))
            if ui.submissions_error:
                stats_md += f"\n\n⚠️ {ui.submissions_error}"
            elif not subs:
                stats_md += "\n\n_No submissions found_"
            return {
                adm_stats: stats_md,
                adm_table: gr.update(value={"data": admin_table_rows(subs), "headers": ADMIN_TABLE_HEADERS}),
                adm_pick: gr.update(choices=submission_choices(subs), value=None),
            }

        def render(ui: UIState) -> dict:
            page = ui.nav.current
            shown = column_for(page)
            out = {col: gr.update(visible=key == shown) for key, col in columns.items()}
            out[auth_btn] = gr.update(value="Sign Out" if ui.auth.get_session() else "Sign In")
            out[services_md] = services_markdown(ui.packages)
            out[services_pick] = gr.update(choices=package_choices(ui.packages), value=None)
            out[dash_md] = dashboard_markdown(ui.applications, ui.applications_error)
            out.update(wizard_updates(ui, with_values=isinstance(page, GetStartedPage)))
            out.update(admin_updates(ui))
            return out

        render_targets = (
            list(columns.values())
            + [auth_btn, services_md, services_pick, dash_md, w_progress, w_back, w_next, w_submit, w_review]
            + list(step_groups) + list(wizard_inputs.values())
            + [adm_stats, adm_table, adm_pick]
        )

        def go(ui: UIState, page: Page) -> dict:
            ui.nav.navigate(enter_page(ctx, ui, page))
            out = render(ui)
            out[st_ui] = ui
            return out

        nav_outputs = [st_ui] + render_targets

        # ========= HANDLERS =========
        def on_load():
            ui = new_ui_state(ctx)
            print("[UI LOG] on_load -> new browser session")
            out = go(ui, HomePage())
            out[chat] = ui.chat.as_chatbot_messages()
            return out

        def nav_to(page_cls):
            def _handler(ui):
                return go(ui, page_cls())
            return _handler

        def on_auth_button(ui):
            if ui.auth.get_session() is not None:
                ctx.auth.sign_out(ui.auth)
                ui.wizard = None
                gr.Info("Signed out.")
                return go(ui, HomePage())
            return go(ui, AuthPage())

        def on_admin_button(ui):
            return go(ui, AdminDashboardPage() if ui.admin.is_admin else AdminLoginPage())

        def on_select_package(ui, package_id):
            pkg = next((p for p in ui.packages if p.id == package_id), None)
            if pkg is None:
                gr.Warning("Please choose a package first.")
                return go(ui, ServicesPage())
            return go(ui, ctx.catalog.select_package(pkg, ui.auth.get_session() is not None))

        def on_contact(name, email, subject, message):
            result = ctx.contact.submit(name, email, subject, message)
            if not result.ok:
                gr.Warning(result.message)
                return gr.update(), gr.update(), gr.update(), gr.update(), ""
            return "", "", "", "", f"✅ {result.message}"

        def on_sign_in(ui, email, password):
            result = ctx.auth.sign_in(ui.auth, email, password)
            if not result.ok:
                out = {a_status: f"⚠️ {result.message}"}
                return out
            out = go(ui, DashboardPage())
            out[a_status] = ""
            out[a_password] = ""
            return out

        def on_sign_up(ui, email, password, full_name, phone):
            result = ctx.auth.sign_up(ui.auth, email, password, full_name, phone)
            if not result.ok:
                return {a_status: f"⚠️ {result.message}"}
            out = go(ui, GetStartedPage())
            out[a_status] = ""
            out[a_password] = ""
            return out

        def on_admin_sign_in(ui, email, password):
            result = ui.admin.sign_in(email, password)
            if not result.ok:
                return {ad_status: f"⚠️ {result.error}"}
            out = go(ui, AdminDashboardPage())
            out[ad_status] = ""
            out[ad_password] = ""
            return out

        def on_admin_sign_out(ui):
            ui.admin.sign_out()
            ui.submissions = []
            return go(ui, HomePage())

        # ---- wizard ----
        def field_handler(name):
            def _handler(ui, value):
                w = ui.wizard if ui else None
                if w is None or w.finished:
                    return gr.update()
                try:
                    w.set_field(name, value or ("single-member" if name == "business_type" else ""))
                except WizardClosedError:
                    return gr.update()
                return gr.update(interactive=w.can_go_next())
            return _handler

        def on_next(ui):
            if ui.wizard is not None:
                ui.wizard.next()
            return wizard_updates(ui)

        def on_back(ui):
            if ui.wizard is not None:
                ui.wizard.back()
            return wizard_updates(ui)

        def on_submit(ui):
            w = ui.wizard
            if w is None:
                return go(ui, GetStartedPage())
            result = w.submit(ctx.store_for(ui.auth.get_session()))
            if not result.ok:
                gr.Warning(result.message)
                return wizard_updates(ui)
            gr.Info(result.message)
            ui.wizard = None
            return go(ui, DashboardPage())

        # ---- admin ----
        def on_admin_filter(ui, status, query):
            ui.status_filter = status or "all"
            ui.search_query = query or ""
            return admin_updates(ui)

        def on_admin_update(ui, submission_id, new_status):
            if not ui.admin.is_admin:
                gr.Warning("Unauthorized access")
                return admin_updates(ui)
            if not submission_id or not new_status:
                gr.Warning("Choose a submission and a status.")
                return admin_updates(ui)
            admin = ctx.admin_for(ui.auth.get_session())
            error = admin.update_status(submission_id, new_status)
            if error:
                gr.Warning(error)
                return admin_updates(ui)
            ui.submissions, ui.submissions_error = admin.load_submissions()
            return admin_updates(ui)

        def on_admin_export(ui):
            if not ui.admin.is_admin:
                gr.Warning("Unauthorized access")
                return gr.update(value=None, visible=False)
            subs = AdminService.filter_submissions(ui.submissions, ui.status_filter, ui.search_query)
            path = os.path.join(tempfile.mkdtemp(prefix="ogs-"), AdminService.export_filename())
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(AdminService.export_csv(subs))
            print(f"[ADMIN LOG] 📤 exported {len(subs)} submission(s)")
            return gr.update(value=path, visible=True)

        # ---- chat ----
        def on_chat_send(ui, text):
            ui.chat.send(text)
            return ui.chat.as_chatbot_messages(), "", gr.update(interactive=not ui.chat.awaiting_reply)

        def on_chat_reply(ui):
            ui.chat.deliver_reply()
            return ui.chat.as_chatbot_messages(), gr.update(interactive=not ui.chat.awaiting_reply)

        def on_chat_reset(ui):
            ui.chat.reset()
            return ui.chat.as_chatbot_messages(), gr.update(interactive=True)

        def on_theme(ui):
            mode = ui.theme.toggle()
            print(f"[UI LOG] 🎨 theme -> {mode}")
            return gr.update(value="☀️ Light" if mode == "dark" else "🌙 Dark")

        # ========= WIRING =========
        demo.load(fn=on_load, outputs=nav_outputs + [chat])

        for btn, page_cls in nav_buttons:
            btn.click(fn=nav_to(page_cls), inputs=[st_ui], outputs=nav_outputs)
        get_started_btn.click(fn=nav_to(GetStartedPage), inputs=[st_ui], outputs=nav_outputs)
        home_cta.click(fn=nav_to(GetStartedPage), inputs=[st_ui], outputs=nav_outputs)
        dash_start_btn.click(fn=nav_to(GetStartedPage), inputs=[st_ui], outputs=nav_outputs)
        dashboard_btn.click(fn=nav_to(DashboardPage), inputs=[st_ui], outputs=nav_outputs)
        services_contact_btn.click(fn=nav_to(ContactPage), inputs=[st_ui], outputs=nav_outputs)
        auth_btn.click(fn=on_auth_button, inputs=[st_ui], outputs=nav_outputs)
        admin_btn.click(fn=on_admin_button, inputs=[st_ui], outputs=nav_outputs)
        theme_btn.click(fn=on_theme, inputs=[st_ui], outputs=[theme_btn],
                        js="(s) => { document.body.classList.toggle('dark'); return s; }")

        services_btn.click(fn=on_select_package, inputs=[st_ui, services_pick], outputs=nav_outputs)

        c_send.click(fn=on_contact, inputs=[c_name, c_email, c_subject, c_message],
                     outputs=[c_name, c_email, c_subject, c_message, c_status])

        a_signin.click(fn=on_sign_in, inputs=[st_ui, a_email, a_password], outputs=nav_outputs + [a_status, a_password])
        a_signup.click(fn=on_sign_up, inputs=[st_ui, a_email, a_password, a_name, a_phone],
                       outputs=nav_outputs + [a_status, a_password])
        ad_signin.click(fn=on_admin_sign_in, inputs=[st_ui, ad_email, ad_password],
                        outputs=nav_outputs + [ad_status, ad_password])
        adm_signout.click(fn=on_admin_sign_out, inputs=[st_ui], outputs=nav_outputs)

        wizard_outputs = [w_progress, w_back, w_next, w_submit, w_review] + list(step_groups)
        for name, comp in wizard_inputs.items():
            comp.change(fn=field_handler(name), inputs=[st_ui, comp], outputs=[w_next])
        w_next.click(fn=on_next, inputs=[st_ui], outputs=wizard_outputs)
        w_back.click(fn=on_back, inputs=[st_ui], outputs=wizard_outputs)
        w_submit.click(
            fn=lambda: gr.update(interactive=False, value="Submitting..."), outputs=[w_submit]
        ).then(fn=on_submit, inputs=[st_ui], outputs=nav_outputs)

        adm_filter.change(fn=on_admin_filter, inputs=[st_ui, adm_filter, adm_search], outputs=[adm_stats, adm_table, adm_pick])
        adm_search.change(fn=on_admin_filter, inputs=[st_ui, adm_filter, adm_search], outputs=[adm_stats, adm_table, adm_pick])
        adm_update.click(fn=on_admin_update, inputs=[st_ui, adm_pick, adm_new_status], outputs=[adm_stats, adm_table, adm_pick])
        adm_export.click(fn=on_admin_export, inputs=[st_ui], outputs=[adm_file])

        chat_in.submit(fn=on_chat_send, inputs=[st_ui, chat_in], outputs=[chat, chat_in, chat_send]).then(
            fn=on_chat_reply, inputs=[st_ui], outputs=[chat, chat_send])
        chat_send.click(fn=on_chat_send, inputs=[st_ui, chat_in], outputs=[chat, chat_in, chat_send]).then(
            fn=on_chat_reply, inputs=[st_ui], outputs=[chat, chat_send])
        chat_reset.click(fn=on_chat_reset, inputs=[st_ui], outputs=[chat, chat_send])

    return demo


if __name__ == "__main__":
    import config  # side-effect: sets env on import

    context = AppContext.from_config(config.Config)
    demo = build_demo(context)
    print("🌐 SITE_URL:", os.getenv("SITE_URL"))
    try:
        demo.queue().launch()
    finally:
        context.close()
