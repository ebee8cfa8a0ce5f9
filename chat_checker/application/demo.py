"""Fixture data for trying the UI without a 2Chat account."""

from ..domain.models import FetchResult, Group, Message, parse_timestamp
from .assembler import search_payload

DEMO_PHONE_NUMBER = "+1234567890"
DEMO_SEARCH_TERM = "demo"


def _message(msg_id, text, created_at, phone, name):
    return Message(
        id=msg_id,
        text=text,
        sender_phone=phone,
        sender_display_name=name,
        created_at=parse_timestamp(created_at),
        sent_by="user",
    )


def demo_results():
    family = Group(
        uuid="WAG-demo-group-1",
        name="Demo Family Group",
        subject="Family chat and updates",
        size=8,
        created_at=parse_timestamp("2024-01-15T10:30:00Z"),
    )
    work = Group(
        uuid="WAG-demo-group-2",
        name="Work Team Demo",
        subject="Project updates and collaboration",
        size=12,
        created_at=parse_timestamp("2024-02-20T09:15:00Z"),
    )
    return [
        FetchResult.succeeded(family, [
            _message("MSG-1", "Hello everyone! How's everyone doing today?",
                     "2025-01-03T14:19:28", "+17131112222", "John Doe"),
            _message("MSG-2", "I'm doing great! Thanks for asking.",
                     "2025-01-03T14:20:15", "+17131113333", "Jane Smith"),
            _message("MSG-3", "Don't forget about the family dinner this weekend!",
                     "2025-01-03T14:21:00", "+17131114444", "Mom"),
        ], DEMO_PHONE_NUMBER),
        FetchResult.succeeded(work, [
            _message("MSG-4", "Good morning team! Let's start the weekly standup.",
                     "2025-01-03T09:00:00", "+17131115555", "Team Lead"),
            _message("MSG-5", "I'll be presenting the Q4 results today.",
                     "2025-01-03T09:01:30", "+17131116666", "Analyst"),
        ], DEMO_PHONE_NUMBER),
    ]


def demo_payload():
    return search_payload(DEMO_PHONE_NUMBER, DEMO_SEARCH_TERM, demo_results())
