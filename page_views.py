# page_views.py
from typing import Dict, List, Optional

from catalog_service import CatalogService
from dashboard_service import ApplicationView, DashboardService
from intake_wizard import IntakeWizard
from models import FormSubmission, Package
from site_content import (
    BENEFITS,
    COMPANY_NAME,
    CONTACT_INFO,
    PROCESS_STEPS,
    TAGLINE,
    TESTIMONIALS,
    state_name,
)


def _usd(amount: float) -> str:
    return f"${amount:,.0f}"


_PACKAGE_MARKS = {"blue": "🔵", "green": "🟢", "orange": "🟠"}


def home_markdown() -> str:
    lines = [
        "# Form Your LLC Today",
        "Fast, affordable, and hassle-free LLC formation in all 50 states. "
        "Join thousands of entrepreneurs who trust us with their business.",
        "",
        "## Why Choose Us",
    ]
    for b in BENEFITS:
        lines.append(f"- **{b['title']}** — {b['description']}")
    lines += ["", "## How It Works"]
    for s in PROCESS_STEPS:
        lines.append(f"**{s['number']}. {s['title']}** — {s['description']}  ")
    lines += ["", "## What Our Customers Say"]
    for t in TESTIMONIALS:
        lines.append(f"> {'★' * t['rating']} “{t['content']}”  \n> — **{t['name']}**, {t['role']}")
        lines.append("")
    return "\n".join(lines)


def services_markdown(packages: List[Package]) -> str:
    if not packages:
        return "_No packages available right now. Please check back soon._"
    lines = [
        "# Choose Your LLC Package",
        "Select the perfect package for your business needs. All packages include professional filing and expert support.",
        "",
    ]
    for pkg in packages:
        badge = CatalogService.package_badge(pkg.name)
        mark = _PACKAGE_MARKS.get(CatalogService.package_color(pkg.name), "🔵")
        title = f"### {mark} {pkg.name}" + (f"  ·  _{badge}_" if badge else "")
        lines += [title, f"**{_usd(pkg.price)}** + state fees", "", pkg.description, ""]
        lines += [f"- ✓ {feature}" for feature in pkg.features]
        lines.append("")
    lines.append("**Not Sure Which Package to Choose?** Our AI assistant can help you find the perfect package for your business needs.")
    return "\n".join(lines)


def package_choices(packages: List[Package]) -> List[tuple]:
    return [(f"{p.name} — {_usd(p.price)} + state fees", p.id) for p in packages]


def contact_markdown() -> str:
    return (
        "# Contact Us\n"
        "Have questions or need help? Our team is here for you.\n\n"
        f"- 📧 [{CONTACT_INFO['email']}](mailto:{CONTACT_INFO['email']})\n"
        f"- 📞 [{CONTACT_INFO['phone']}](tel:{CONTACT_INFO['phone']})\n"
        f"- 🕑 {CONTACT_INFO['hours']}"
    )


def footer_markdown(whatsapp_url: str) -> str:
    return (
        f"**{COMPANY_NAME}** — {TAGLINE}  \n"
        f"📧 {CONTACT_INFO['email']} · 📞 {CONTACT_INFO['phone']} · "
        f"[💬 Chat with us on WhatsApp]({whatsapp_url})"
    )


_STEP_MARKS = {"done": "✅", "current": "🔵", "upcoming": "⚪"}


def progress_markdown(wizard: Optional[IntakeWizard]) -> str:
    if wizard is None:
        return ""
    return "  →  ".join(f"{_STEP_MARKS[s['status']]} {s['label']}" for s in wizard.progress())


def review_markdown(wizard: Optional[IntakeWizard], packages: List[Package]) -> str:
    if wizard is None:
        return ""
    summary = wizard.review_summary([p.model_dump() for p in packages])
    parts = ["## Review Your Information", "Please review your information before submitting", ""]
    for heading, body in summary.items():
        parts.append(f"**{heading}**  ")
        parts.append(body.replace("\n", "  \n"))
        parts.append("")
    return "\n".join(parts)


def dashboard_markdown(views: List[ApplicationView], error: Optional[str] = None) -> str:
    lines = ["# My Dashboard", "Track your LLC formation applications", ""]
    if error:
        lines.append(f"⚠️ {error}")
        return "\n".join(lines)
    if not views:
        lines += [
            "### No Applications Yet",
            "You haven't submitted any LLC formation applications yet. Use **Get Started** to begin your first application.",
        ]
    for v in views:
        app = v.application
        submitted = f"{app.created_at:%B} {app.created_at.day}, {app.created_at.year}" if app.created_at else ""
        lines += [
            f"### {app.company_name}  ·  `{v.status_label}`",
            f"- **State:** {state_name(app.state) or app.state}",
            f"- **Package:** {v.package.name if v.package else '—'}",
            f"- **Payment Status:** {v.payment_label}",
            f"- **Submitted:** {submitted}",
            "",
            v.status_message + ("  \n_Complete Payment: coming soon._" if v.needs_payment else ""),
            "",
        ]
    stats = DashboardService.stats(views)
    lines.append(
        f"**Total Applications:** {stats['total']} · **Completed:** {stats['completed']} · "
        f"**In Progress:** {stats['in_progress']}"
    )
    return "\n".join(lines)


def admin_stats_markdown(stats: Dict[str, int]) -> str:
    return (
        f"**Total:** {stats['total']} · **New:** {stats['new']} · "
        f"**Processing:** {stats['processing']} · **Completed:** {stats['completed']}"
    )


ADMIN_TABLE_HEADERS = ["Date", "Company", "Contact", "State", "Status", "ID"]


def admin_table_rows(submissions: List[FormSubmission]) -> List[List[str]]:
    rows = []
    for s in submissions:
        rows.append([
            s.created_at.strftime("%m/%d/%Y") if s.created_at else "",
            s.company_name,
            s.member_name,
            state_name(s.state) or s.state,
            s.status,
            s.id,
        ])
    return rows


def submission_choices(submissions: List[FormSubmission]) -> List[tuple]:
    return [(f"{s.company_name} ({s.status})", s.id) for s in submissions]
