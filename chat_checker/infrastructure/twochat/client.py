"""
2Chat Client - REST Access to WhatsApp Groups
=============================================

ARCHITECTURAL DECISION:
- One requests.Session per calling thread, carrying the API key header
- Every failure leaves this module as a TwoChatError with an ErrorKind;
  callers never inspect requests exceptions or status codes themselves
- No retries: a failed page is the aggregator's decision, not ours

ENDPOINTS:
    GET /whatsapp/groups/{phone_number}
    GET /whatsapp/groups/messages/{group_uuid}?page_number=N
"""

import logging
import threading
from typing import Any, Dict, List, Optional

import requests

from ...domain.models import ErrorKind, Group, Message, Page
from ..config import get_settings
from .source import ChatSource, TwoChatError

logger = logging.getLogger(__name__)


class TwoChatClient(ChatSource):
    """
    2Chat REST client.

    USAGE:
        client = TwoChatClient()
        groups = client.list_groups("+6580910054")
        page = client.fetch_message_page(groups[0].uuid, page_number=0)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        settings = get_settings().twochat
        self._api_key = api_key if api_key is not None else settings.api_key
        self._base_url = (base_url or settings.base_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.timeout_seconds

        self._headers = {
            settings.api_key_header: self._api_key,
            "Content-Type": "application/json",
        }
        self._shared_session = session
        if session is not None:
            session.headers.update(self._headers)
        self._local = threading.local()

        if not self._api_key:
            logger.warning("No API_KEY set. 2Chat will reject every request.")

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def session(self) -> requests.Session:
        """An injected session, otherwise one session per calling thread."""
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update(self._headers)
            self._local.session = session
        return session

    def list_groups(self, phone_number: str) -> List[Group]:
        """List all WhatsApp groups of a connected phone number."""
        payload = self._get(
            f"/whatsapp/groups/{phone_number}",
            not_found=f"Phone number not found (404): '{phone_number}' is not connected to 2Chat",
        )
        if not payload.get("success"):
            raise TwoChatError(ErrorKind.PROTOCOL, "Failed to fetch groups")

        groups = [Group.from_api(item) for item in payload.get("data") or [] if isinstance(item, dict)]
        logger.info(f"Listed {len(groups)} groups for {phone_number}")
        return groups

    def fetch_message_page(self, group_uuid: str, page_number: int = 0) -> Page:
        """
        Fetch one page of messages.

        A 422 means the UUID is invalid or not accessible with this API key;
        the page walk treats that as terminal for the group.
        """
        logger.debug(f"Fetching messages for group {group_uuid}, page {page_number}")
        payload = self._get(
            f"/whatsapp/groups/messages/{group_uuid}",
            params={"page_number": page_number},
            not_found=f"Group not found (404): The group UUID '{group_uuid}' does not exist",
            unprocessable=(
                f"Invalid request (422): The group UUID '{group_uuid}' may be invalid "
                "or you may not have access to this group's messages"
            ),
            forbidden="Access denied (403): You may not have permission to access this group's messages",
        )
        if not payload.get("success"):
            raise TwoChatError(
                ErrorKind.PROTOCOL,
                f"API returned success: false for group {group_uuid}, page {page_number}",
            )

        raw_messages = payload.get("messages") or []
        messages = [Message.from_api(item) for item in raw_messages if isinstance(item, dict)]
        number = payload.get("page_number")
        logger.debug(f"Fetched {len(messages)} messages from page {page_number} of {group_uuid}")
        return Page(page_number=number if isinstance(number, int) else page_number, messages=messages)

    def _get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        not_found: str = "Not found (404)",
        unprocessable: str = "Invalid request (422)",
        forbidden: str = "Access denied (403)",
    ) -> Dict[str, Any]:
        """Issue a GET and return the JSON object body, or raise TwoChatError."""
        url = f"{self._base_url}{path}"
        logger.debug(f"GET {url} params={params}")

        try:
            response = self.session.get(url, params=params, timeout=self._timeout)
        except requests.Timeout as e:
            logger.warning(f"2Chat request timed out: {url}")
            raise TwoChatError(ErrorKind.UNKNOWN, f"Request timed out: {e}") from e
        except requests.RequestException as e:
            logger.warning(f"2Chat request failed: {url}: {e}")
            raise TwoChatError(ErrorKind.UNKNOWN, f"Request failed: {e}") from e

        status = response.status_code
        logger.debug(f"2Chat responded {status} for {path}")

        if status >= 400:
            kind = ErrorKind.from_status(status)
            messages = {
                ErrorKind.AUTH: "Authentication failed (401): Please check your API key",
                ErrorKind.NOT_FOUND: not_found,
                ErrorKind.ACCESS_DENIED: forbidden,
                ErrorKind.INVALID_REQUEST: unprocessable,
            }
            message = messages.get(kind, f"Request failed with status code {status}")
            logger.error(f"2Chat error {status} for {path}: {response.text[:200]}")
            raise TwoChatError(kind, message, status=status)

        try:
            payload = response.json()
        except ValueError as e:
            raise TwoChatError(ErrorKind.PROTOCOL, f"Invalid JSON from 2Chat for {path}", status=status) from e

        if not isinstance(payload, dict):
            raise TwoChatError(ErrorKind.PROTOCOL, f"Unexpected response body from 2Chat for {path}", status=status)
        return payload
