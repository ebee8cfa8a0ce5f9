"""
Search Orchestrator - Group History Across Phone Numbers
========================================================

For each phone number: list its groups, keep those whose name matches the
search term, and aggregate every remaining group's messages.

GUARANTEES:
- A failing number or group is recorded and skipped, never fatal
- Results follow input number order, then the remote group order
- Duplicate numbers are searched once

CONCURRENCY:
With max_workers > 1, distinct numbers are searched on a bounded thread
pool. Executor.map yields in submission order, so the ordering guarantee
is the same as in sequential mode.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Tuple

from ..domain.filters import filter_groups
from ..domain.models import ErrorKind, FetchResult, Group, SearchResult, TargetFailure
from ..domain.validation import InvalidPhoneNumberError, validate_phone_number
from ..infrastructure.twochat import ChatSource, TwoChatError
from .aggregator import PageAggregator

logger = logging.getLogger(__name__)

NumberOutcome = Tuple[List[FetchResult], Optional[TargetFailure]]


def unique_in_order(items: Iterable[str]) -> List[str]:
    seen = set()
    out = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out


class SearchOrchestrator:
    """
    USAGE:
        orchestrator = SearchOrchestrator(TwoChatClient())
        result = orchestrator.search(["+6580910054", "+6580261704"], "team", max_pages=5)
        print(len(result.results), len(result.failures))
    """

    def __init__(
        self,
        source: ChatSource,
        aggregator: Optional[PageAggregator] = None,
        max_workers: int = 1,
    ):
        self._source = source
        self._aggregator = aggregator or PageAggregator(source)
        self._max_workers = max(1, max_workers)

    @property
    def source(self) -> ChatSource:
        return self._source

    @property
    def aggregator(self) -> PageAggregator:
        return self._aggregator

    def list_groups(self, phone_number: str) -> List[Group]:
        return self._source.list_groups(validate_phone_number(phone_number))

    def search_number(
        self,
        phone_number: str,
        title_filter: Optional[str] = None,
        max_pages: int = 10,
    ) -> List[FetchResult]:
        """
        Search one number. Listing failures propagate; group failures are
        recorded in the returned results.
        """
        groups = self.list_groups(phone_number)
        matching = filter_groups(groups, title_filter)

        if not matching:
            logger.info(f"No matching groups for {phone_number}")
            return []

        return [self.fetch_group(group, max_pages, phone_number) for group in matching]

    def fetch_group(self, group: Group, max_pages: int, phone_number: Optional[str] = None) -> FetchResult:
        label = f"{group.name or 'Unnamed Group'} ({group.uuid})"
        try:
            messages = self._aggregator.aggregate(group.uuid, max_pages)
        except TwoChatError as e:
            logger.error(f"Error processing group {label}: {e}")
            return FetchResult.failed(group, e.kind, e.message, phone_number)
        except Exception as e:
            logger.exception(f"Unexpected error processing group {label}: {e}")
            return FetchResult.failed(group, ErrorKind.UNKNOWN, str(e), phone_number)

        logger.info(f"Processed group {label}: {len(messages)} messages")
        return FetchResult.succeeded(group, messages, phone_number)

    def search(
        self,
        phone_numbers: Iterable[str],
        title_filter: Optional[str] = None,
        max_pages: int = 10,
    ) -> SearchResult:
        numbers = unique_in_order(phone_numbers)
        logger.info(f"Starting search across {len(numbers)} numbers")

        def run(number: str) -> NumberOutcome:
            return self._search_isolated(number, title_filter, max_pages)

        if self._max_workers > 1 and len(numbers) > 1:
            with ThreadPoolExecutor(max_workers=min(self._max_workers, len(numbers))) as pool:
                outcomes = list(pool.map(run, numbers))
        else:
            outcomes = [run(number) for number in numbers]

        result = SearchResult(targets_searched=len(numbers))
        for results, failure in outcomes:
            result.results.extend(results)
            if failure is not None:
                result.failures.append(failure)

        logger.info(
            f"Search completed: {len(result.results)} groups across {len(numbers)} numbers, "
            f"{len(result.failures)} numbers failed"
        )
        return result

    def _search_isolated(self, phone_number: str, title_filter: Optional[str], max_pages: int) -> NumberOutcome:
        try:
            return self.search_number(phone_number, title_filter, max_pages), None
        except InvalidPhoneNumberError as e:
            logger.warning(f"Skipping {phone_number!r}: {e}")
            return [], TargetFailure(phone_number, str(e), ErrorKind.INVALID_REQUEST)
        except TwoChatError as e:
            logger.error(f"Error processing number {phone_number}: {e}")
            return [], TargetFailure(phone_number, e.message, e.kind)
        except Exception as e:
            logger.exception(f"Unexpected error processing number {phone_number}: {e}")
            return [], TargetFailure(phone_number, str(e), ErrorKind.UNKNOWN)
