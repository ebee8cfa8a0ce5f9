# Domain Layer
# ============
# Plain data records and pure rules. No HTTP, no settings, no logging.

from .models import (
    ErrorKind,
    Group,
    Message,
    Page,
    FetchResult,
    TargetFailure,
    SearchResult,
)
from .filters import matches_title, filter_groups
from .validation import (
    PHONE_NUMBER_PATTERN,
    InvalidPhoneNumberError,
    is_valid_phone_number,
    validate_phone_number,
)

__all__ = [
    "ErrorKind",
    "Group",
    "Message",
    "Page",
    "FetchResult",
    "TargetFailure",
    "SearchResult",
    "matches_title",
    "filter_groups",
    "PHONE_NUMBER_PATTERN",
    "InvalidPhoneNumberError",
    "is_valid_phone_number",
    "validate_phone_number",
]
