"""
Phone Number Validation
=======================

2Chat addresses connected numbers in international format: a "+", a
non-zero leading digit and up to 15 digits in total. Every entry point
checks this before any remote call is made.
"""

import re

PHONE_NUMBER_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")

INVALID_PHONE_MESSAGE = (
    "Invalid phone number format. Use international format (e.g., +1234567890)"
)


class InvalidPhoneNumberError(ValueError):
    """Raised when a phone number is not in international format."""

    def __init__(self, phone_number: str):
        self.phone_number = phone_number
        super().__init__(INVALID_PHONE_MESSAGE)


def is_valid_phone_number(phone_number) -> bool:
    return isinstance(phone_number, str) and bool(PHONE_NUMBER_PATTERN.fullmatch(phone_number))


def validate_phone_number(phone_number: str) -> str:
    """Return the number unchanged, or raise InvalidPhoneNumberError."""
    if not is_valid_phone_number(phone_number):
        raise InvalidPhoneNumberError(phone_number)
    return phone_number
