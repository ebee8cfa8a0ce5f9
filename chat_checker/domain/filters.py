"""Group title matching."""

from typing import Iterable, List, Optional

from .models import Group


def matches_title(group_name: Optional[str], term: str) -> bool:
    """True if `term` occurs in `group_name`, ignoring case."""
    if group_name is None:
        return False
    return term.casefold() in group_name.casefold()


def filter_groups(groups: Iterable[Group], term: Optional[str]) -> List[Group]:
    """Keep groups whose name matches `term`; no term keeps everything."""
    if not term:
        return list(groups)
    return [g for g in groups if matches_title(g.name, term)]
