"""Duplicate detection by exact URL."""

from __future__ import annotations

from typing import Iterable, List, Set

from .models import TabRecord


def find_duplicates(records: Iterable[TabRecord]) -> List[TabRecord]:
    """Every record whose URL already appeared earlier; first occurrences survive."""
    seen: Set[str] = set()
    dups: List[TabRecord] = []
    for record in records:
        if record.url in seen:
            dups.append(record)
        else:
            seen.add(record.url)
    return dups
