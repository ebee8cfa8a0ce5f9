"""
Chat Source - Abstraction Layer for Group History Providers
===========================================================

Provides a unified interface for reading WhatsApp groups and their messages.
Currently implemented by the 2Chat REST client.

USAGE:
    source = TwoChatClient()
    groups = source.list_groups("+6580910054")
    page = source.fetch_message_page(groups[0].uuid, 0)
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ...domain.models import ErrorKind, Group, Page


class TwoChatError(Exception):
    """
    Failure talking to the remote API.

    `kind` is the structured classification; `status` is the HTTP status
    when the remote answered at all.
    """

    def __init__(self, kind: ErrorKind, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.status = status
        self.message = message

    def __repr__(self) -> str:
        return f"TwoChatError(kind={self.kind.value}, status={self.status}, message={self.message!r})"


class ChatSource(ABC):
    """
    Abstract base class for group history providers.
    Implement this interface to add new backends.
    """

    @abstractmethod
    def list_groups(self, phone_number: str) -> List[Group]:
        """List the groups of a connected phone number. Raises TwoChatError."""
        ...

    @abstractmethod
    def fetch_message_page(self, group_uuid: str, page_number: int) -> Page:
        """Fetch one page of a group's messages. Raises TwoChatError."""
        ...
