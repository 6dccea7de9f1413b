"""Renderers for `list` (JSON) and `titles` (lines)."""

from __future__ import annotations

import json
from typing import Dict, List, Sequence

from tabctl.tabs.models import TabRecord
from tabctl.tabs.text import title_line

ALL_ITEM_ID = "all"
ALL_ITEM_TITLE = "Close all"
ALL_ITEM_SUBTITLE = "select all items"


def tab_item(record: TabRecord) -> Dict:
    return {
        "id": record.id,
        "title": record.title,
        "url": record.url,
        "winIdx": record.window_index,
        "tabIdx": record.tab_index,
        "arg": record.arg,
        "subtitle": record.subtitle,
    }


def close_all_item(query: str) -> Dict:
    # Selecting this entry feeds the query back to `close`.
    return {
        "id": ALL_ITEM_ID,
        "title": ALL_ITEM_TITLE,
        "url": "",
        "winIdx": 0,
        "tabIdx": 0,
        "arg": query,
        "subtitle": ALL_ITEM_SUBTITLE,
    }


def render_items(items: Sequence[Dict]) -> str:
    return json.dumps({"items": list(items)}, ensure_ascii=False, separators=(",", ":"))


def render_titles(records: Sequence[TabRecord]) -> List[str]:
    return [title_line(record.title, record.url) for record in records]
