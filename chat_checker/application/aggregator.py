"""
Page Aggregator - Walk a Group's Message Pages
==============================================

Fetches page 0, 1, 2, ... of one group until a page comes back empty or
the page cap is reached, concatenating messages in fetch order.

FAILURE POLICY:
- Page 0 fails:   the group is inaccessible, the error propagates
- Page N>0 fails: keep what was collected, return it as a success
"""

import logging
from typing import List

from ..domain.models import Message
from ..infrastructure.twochat import ChatSource, TwoChatError

logger = logging.getLogger(__name__)


class PageAggregator:
    """Collects every message of a group, page by page."""

    def __init__(self, source: ChatSource):
        self._source = source

    def aggregate(self, group_uuid: str, max_pages: int) -> List[Message]:
        messages: List[Message] = []
        page_number = 0

        logger.info(f"Fetching messages for group {group_uuid} (max pages: {max_pages})")

        while page_number < max_pages:
            try:
                page = self._source.fetch_message_page(group_uuid, page_number)
            except TwoChatError as e:
                if page_number == 0:
                    logger.error(f"Group {group_uuid} is not accessible: {e}")
                    raise
                logger.warning(
                    f"Page {page_number} of group {group_uuid} failed ({e}); "
                    f"keeping {len(messages)} messages"
                )
                break

            if page.is_empty:
                logger.debug(f"Page {page_number} of group {group_uuid} is empty")
                break

            messages.extend(page.messages)
            page_number += 1

        logger.info(
            f"Completed group {group_uuid}: {len(messages)} messages from {page_number} pages"
        )
        return messages
