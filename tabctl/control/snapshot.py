"""Build the ordered tab snapshot a command works on."""

from __future__ import annotations

from typing import List

from tabctl.adapter.base import BrowserAdapter
from tabctl.tabs.models import TabRecord
from tabctl.tabs.text import normalize_title


def build_snapshot(adapter: BrowserAdapter) -> List[TabRecord]:
    records: List[TabRecord] = []
    for window_index, window in enumerate(adapter.list_windows()):
        for tab_index, tab in enumerate(adapter.list_tabs(window)):
            url = adapter.get_url(tab)
            records.append(
                TabRecord(
                    id=adapter.get_id(tab),
                    title=normalize_title(adapter.get_title(tab)),
                    url="" if url is None else str(url),
                    window_index=window_index,
                    tab_index=tab_index,
                    window=window,
                    tab=tab,
                )
            )
    return records
