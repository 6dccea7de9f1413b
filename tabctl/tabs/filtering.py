"""Case-insensitive substring filtering over tab records."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .address import looks_like_address, parse_address
from .models import Address, Scope, TabRecord


def _haystacks(record: TabRecord, scope: Scope) -> Sequence[str]:
    if scope is Scope.TITLE_ONLY:
        return (record.title,)
    if scope is Scope.URL_ONLY:
        return (record.url,)
    return (record.title, record.url)


def matches(record: TabRecord, needle: str, scope: Scope) -> bool:
    needle = needle.lower()
    return any(needle in (value or "").lower() for value in _haystacks(record, scope))


def find_by_address(records: Iterable[TabRecord], address: Address) -> Optional[TabRecord]:
    for record in records:
        if record.address == address:
            return record
    return None


def find_by_title(records: Iterable[TabRecord], title: str) -> Optional[TabRecord]:
    # Tabs sharing a title resolve to the first one in snapshot order.
    for record in records:
        if record.title == title:
            return record
    return None


def filter_records(
    records: Sequence[TabRecord],
    query: Optional[str],
    scope: Scope = Scope.TITLE_OR_URL,
) -> List[TabRecord]:
    """Return records matching `query`, preserving snapshot order.

    A query shaped like `winIdx,tabIdx` ignores `scope` and resolves to the
    single tab at that address (or nothing when the address is out of range).
    """
    if query and looks_like_address(query):
        found = find_by_address(records, parse_address(query))
        return [found] if found is not None else []
    if not query:
        return list(records)
    return [record for record in records if matches(record, query, scope)]


def filter_by_keywords(
    records: Sequence[TabRecord],
    keywords: Sequence[str],
    scope: Scope = Scope.TITLE_OR_URL,
) -> List[TabRecord]:
    """Records matching any keyword, each returned once, in snapshot order."""
    if not keywords:
        return []
    return [record for record in records if any(matches(record, kw, scope) for kw in keywords)]
