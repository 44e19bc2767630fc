# chat_responder.py
import time
import uuid
from datetime import datetime, timezone
from textwrap import dedent
from typing import Callable, List, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel, Field


GREETING = (
    "Hello! I'm your LLC formation assistant. I can help you understand our services, "
    "recommend the right package, or answer any questions about forming an LLC. "
    "How can I assist you today?"
)

PRICING_REPLY = dedent("""\
    We offer three packages:

    • Basic ($99) - Essential LLC registration and document filing
    • Ultimate ($299) - Everything in Basic plus EIN and registered agent service
    • Epic ($499) - Complete business setup with priority support

    All prices are plus state filing fees. Would you like to see more details about any package?""")

STATE_REPLY = (
    "We can help you form an LLC in any U.S. state! Each state has different requirements and fees. "
    "Delaware, Wyoming, and Nevada are popular choices for their business-friendly laws. "
    "Would you like help choosing the right state for your business?"
)

TIMING_REPLY = dedent("""\
    Processing times vary by package:

    • Basic: 5-7 business days
    • Ultimate: 3-5 business days
    • Epic: 1-2 business days (expedited)

    These times don't include state processing, which varies by location. Would you like to get started?""")

EIN_REPLY = (
    "An EIN (Employer Identification Number) is a federal tax ID for your business. "
    "It's required if you plan to hire employees or have multiple members. "
    "Our Ultimate and Epic packages include EIN registration. "
    "Would you like to know more about these packages?"
)

AGENT_REPLY = (
    "A registered agent receives legal documents on behalf of your LLC. It's required in all states. "
    "Our Ultimate and Epic packages include 1 year of registered agent service. "
    "This ensures you never miss important legal notices."
)

COMPARE_REPLY = dedent("""\
    The main differences between packages:

    • Basic: Core filing services
    • Ultimate: Adds EIN + registered agent service
    • Epic: Includes everything plus bank account setup and priority support

    Most customers choose Ultimate for the best value. Which features are most important to you?""")

RECOMMEND_REPLY = dedent("""\
    I'd be happy to recommend a package! Can you tell me:

    1. Will you have employees or multiple members?
    2. Do you need urgent processing?
    3. Would you like help with bank account setup?

    This will help me suggest the perfect package for your needs.""")

START_REPLY = dedent("""\
    Great! I can help you get started. The process is simple:

    1. Choose your state
    2. Select a package
    3. Fill out our easy form
    4. We handle the rest!

    Would you like me to take you to our Get Started page?""")

SUPPORT_REPLY = dedent("""\
    You can reach our support team:

    • Email: support@ogssolution.com
    • Phone: +1 (555) 123-4567
    • WhatsApp: Click the green button

    We're available 24/7! Would you like to visit our contact page?""")

FALLBACK_REPLY = dedent("""\
    I'd be happy to help you with that! I can assist with:

    • Explaining our packages and pricing
    • Helping you choose the right state
    • Answering questions about LLCs
    • Guiding you through the formation process

    What would you like to know more about?""")


Predicate = Callable[[str], bool]


def contains_any(*keywords: str) -> Predicate:
    def _match(text: str) -> bool:
        return any(k in text for k in keywords)
    _match.keywords = keywords  # type: ignore[attr-defined]
    return _match


# Order is precedence: the first rule that matches wins.
RULES: Tuple[Tuple[str, Predicate, str], ...] = (
    ("pricing",    contains_any("price", "cost", "package"),        PRICING_REPLY),
    ("state",      contains_any("state", "where"),                  STATE_REPLY),
    ("timing",     contains_any("time", "how long", "fast"),        TIMING_REPLY),
    ("ein",        contains_any("ein", "tax"),                      EIN_REPLY),
    ("agent",      contains_any("agent", "registered"),             AGENT_REPLY),
    ("compare",    contains_any("difference", "compare"),           COMPARE_REPLY),
    ("recommend",  contains_any("recommend", "which", "best"),      RECOMMEND_REPLY),
    ("start",      contains_any("start", "begin", "get started"),   START_REPLY),
    ("support",    contains_any("contact", "support", "help"),      SUPPORT_REPLY),
)


def match_topic(raw_input: str, rules: Sequence[Tuple[str, Predicate, str]] = RULES) -> Optional[str]:
    text = (raw_input or "").lower()
    for topic, predicate, _ in rules:
        if predicate(text):
            return topic
    return None


def respond(raw_input: str, rules: Sequence[Tuple[str, Predicate, str]] = RULES) -> str:
    """Pick the canned reply for a free-text question; never raises."""
    text = (raw_input or "").lower()
    for _, predicate, reply in rules:
        if predicate(text):
            return reply
    return FALLBACK_REPLY


# ========= CONVERSATION LOG =========
class ConversationMessage(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = {"frozen": True}


class ChatSession:
    """
    In-memory chat surface state. The log is append-only; closing the chat
    (``reset``) throws it away and starts over with the greeting.
    """

    def __init__(self, reply_delay: float = 1.0, sleep: Callable[[float], None] = time.sleep) -> None:
        self.reply_delay = reply_delay
        self._sleep = sleep
        self._messages: List[ConversationMessage] = []
        self._pending: List[ConversationMessage] = []
        self.reset()

    @property
    def messages(self) -> Tuple[ConversationMessage, ...]:
        return tuple(self._messages)

    @property
    def awaiting_reply(self) -> bool:
        return bool(self._pending)

    def reset(self) -> None:
        self._messages = [ConversationMessage(role="assistant", content=GREETING)]
        self._pending = []
        print("[CHAT LOG] 🧹 chat reset -> greeting seeded")

    def send(self, text: str) -> Optional[ConversationMessage]:
        if not text or not text.strip():
            return None
        msg = ConversationMessage(role="user", content=text)
        self._messages.append(msg)
        self._pending.append(msg)
        print(f"[CHAT LOG] 📨 user message (first 80): {text[:80]!r}")
        return msg

    def deliver_reply(self) -> Optional[ConversationMessage]:
        """Answer the oldest unanswered user message, after the thinking delay."""
        if not self._pending:
            return None
        if self.reply_delay > 0:
            self._sleep(self.reply_delay)
        trigger = self._pending.pop(0)
        reply = ConversationMessage(role="assistant", content=respond(trigger.content))
        self._messages.append(reply)
        print(f"[CHAT LOG] 💬 reply topic={match_topic(trigger.content) or 'fallback'}")
        return reply

    def as_chatbot_messages(self) -> List[dict]:
        return [{"role": m.role, "content": m.content} for m in self._messages]
