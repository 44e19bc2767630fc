# pages.py
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Union

from models import Package


@dataclass(frozen=True)
class HomePage:
    key = "home"


@dataclass(frozen=True)
class ServicesPage:
    key = "services"


@dataclass(frozen=True)
class HowItWorksPage:
    key = "how-it-works"


@dataclass(frozen=True)
class ContactPage:
    key = "contact"


@dataclass(frozen=True)
class GetStartedPage:
    selected_package: Optional[Package] = None
    key = "get-started"


@dataclass(frozen=True)
class DashboardPage:
    key = "dashboard"


@dataclass(frozen=True)
class AuthPage:
    key = "auth"


@dataclass(frozen=True)
class AdminLoginPage:
    key = "admin-login"


@dataclass(frozen=True)
class AdminDashboardPage:
    key = "admin-dashboard"


Page = Union[
    HomePage, ServicesPage, HowItWorksPage, ContactPage, GetStartedPage,
    DashboardPage, AuthPage, AdminLoginPage, AdminDashboardPage,
]
PAGE_TYPES = (
    HomePage, ServicesPage, HowItWorksPage, ContactPage, GetStartedPage,
    DashboardPage, AuthPage, AdminLoginPage, AdminDashboardPage,
)

# Header navigation, in display order.
NAVIGATION = (
    ("Home", HomePage),
    ("Services", ServicesPage),
    ("How It Works", HowItWorksPage),
    ("Contact", ContactPage),
)


def dispatch(page: Page, handlers: Dict[type, Callable[[Page], object]]):
    """
    Route ``page`` to the handler registered for its type. ``handlers`` must
    cover every page type; a missing one is a programming error.
    """
    missing = [t.__name__ for t in PAGE_TYPES if t not in handlers]
    if missing:
        raise ValueError(f"page handlers missing for: {', '.join(missing)}")
    return handlers[type(page)](page)


@dataclass
class Navigator:
    current: Page = field(default_factory=HomePage)

    def navigate(self, page: Page) -> Page:
        if not isinstance(page, PAGE_TYPES):
            raise TypeError(f"not a page: {page!r}")
        self.current = page
        print(f"[UI LOG] 🧭 navigate -> {page.key}")
        return page
