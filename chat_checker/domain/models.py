"""
Domain Models - Groups, Messages and Search Results
===================================================

Records produced while walking the 2Chat API. All of them are created per
request and never persisted; the JSON export is an outer concern.

DESIGN:
- Remote records (Group, Message) are frozen: downstream code reads them,
  nothing mutates them.
- FetchResult holds either messages or an error, never both.
- Error kinds travel as an Enum from the client outward, so nobody has to
  parse error message text to find out what went wrong.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(Enum):
    """Why a call against the remote API failed."""
    AUTH = "AUTH"
    NOT_FOUND = "NOT_FOUND"
    ACCESS_DENIED = "ACCESS_DENIED"
    INVALID_REQUEST = "INVALID_REQUEST"
    PROTOCOL = "PROTOCOL"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_status(cls, status: Optional[int]) -> "ErrorKind":
        return _STATUS_KINDS.get(status, cls.UNKNOWN)

    @property
    def error_type(self) -> str:
        """User-facing classification shown next to failed targets."""
        if self in (ErrorKind.ACCESS_DENIED, ErrorKind.INVALID_REQUEST):
            return "ACCESS_DENIED"
        if self in (ErrorKind.AUTH, ErrorKind.NOT_FOUND):
            return self.value
        return "UNKNOWN"


_STATUS_KINDS = {
    401: ErrorKind.AUTH,
    403: ErrorKind.ACCESS_DENIED,
    404: ErrorKind.NOT_FOUND,
    422: ErrorKind.INVALID_REQUEST,
}


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp from the API, or None if unusable."""
    if not isinstance(value, str) or not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


@dataclass(frozen=True)
class Group:
    """A WhatsApp group as listed by 2Chat."""
    uuid: str
    name: Optional[str] = None
    subject: Optional[str] = None
    size: int = 0
    created_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Group":
        size = data.get("size")
        return cls(
            uuid=str(data.get("uuid", "")),
            name=data.get("wa_group_name"),
            subject=data.get("wa_subject"),
            size=size if isinstance(size, int) else 0,
            created_at=parse_timestamp(data.get("wa_created_at")),
        )


@dataclass(frozen=True)
class Message:
    """A single group message."""
    id: str
    text: Optional[str] = None
    sender_phone: Optional[str] = None
    sender_display_name: Optional[str] = None
    created_at: Optional[datetime] = None
    media_type: Optional[str] = None
    media_url: Optional[str] = None
    sent_by: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Message":
        body = _as_dict(data.get("message"))
        media = _as_dict(body.get("media"))
        participant = _as_dict(data.get("participant"))
        return cls(
            id=str(data.get("id", "")),
            text=body.get("text"),
            sender_phone=participant.get("phone_number"),
            sender_display_name=participant.get("pushname"),
            created_at=parse_timestamp(data.get("created_at")),
            media_type=media.get("type"),
            media_url=media.get("url"),
            sent_by=data.get("sent_by"),
        )


@dataclass(frozen=True)
class Page:
    """One page of messages; consumed immediately by the aggregator."""
    page_number: int
    messages: List[Message] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.messages


@dataclass
class FetchResult:
    """
    Outcome of aggregating one group.

    Exactly one of `messages` / `error_kind` is set. Use the `succeeded`
    and `failed` constructors instead of building it by hand.
    """
    group: Group
    messages: Optional[List[Message]] = None
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None
    phone_number: Optional[str] = None

    def __post_init__(self):
        if (self.messages is None) == (self.error_kind is None):
            raise ValueError("FetchResult needs either messages or an error kind")

    @classmethod
    def succeeded(cls, group: Group, messages: List[Message],
                  phone_number: Optional[str] = None) -> "FetchResult":
        return cls(group=group, messages=list(messages), phone_number=phone_number)

    @classmethod
    def failed(cls, group: Group, kind: ErrorKind, message: str,
               phone_number: Optional[str] = None) -> "FetchResult":
        return cls(group=group, error_kind=kind, error_message=message,
                   phone_number=phone_number)

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @property
    def messages_count(self) -> int:
        return len(self.messages or [])


@dataclass(frozen=True)
class TargetFailure:
    """A phone number whose groups could not be listed at all."""
    phone_number: str
    error_message: str
    error_kind: ErrorKind = ErrorKind.UNKNOWN


@dataclass
class SearchResult:
    """Combined outcome of a multi-number search."""
    targets_searched: int = 0
    results: List[FetchResult] = field(default_factory=list)
    failures: List[TargetFailure] = field(default_factory=list)

    @property
    def successes(self) -> List[FetchResult]:
        return [r for r in self.results if r.ok]

    @property
    def group_failures(self) -> List[FetchResult]:
        return [r for r in self.results if not r.ok]
