"""Command implementations. Each takes a Session and already-parsed arguments."""

from __future__ import annotations

from collections import Counter
from typing import List, Optional, Sequence

from tabctl.errors import NoMatches
from tabctl.logs import log
from tabctl.tabs.address import parse_address
from tabctl.tabs.dedup import find_duplicates
from tabctl.tabs.filtering import filter_by_keywords, filter_records, find_by_address, find_by_title
from tabctl.tabs.models import Scope, TabRecord
from tabctl.tabs.text import split_title_lines, strip_url_decoration

from .confirm import confirm
from .output import close_all_item, render_items, render_titles, tab_item
from .session import Session
from .snapshot import build_snapshot

NO_MATCHING_TABS = "Couldn't find any matching tabs"
NO_DUPLICATES = "No duplicates found"


def close_records(session: Session, snapshot: Sequence[TabRecord], targets: Sequence[TabRecord]) -> int:
    """Close `targets` (snapshot order) last-first so queued addresses stay valid.

    When a target is the last tab left in its window, the window is closed
    instead if the policy allows it.
    """
    remaining = Counter(record.window_index for record in snapshot)
    adapter = session.adapter
    closed = 0
    for record in reversed(list(targets)):
        if session.settings.close_window_with_last_tab and remaining[record.window_index] == 1:
            log(session.settings, f"close window {record.window_index} (last tab {record.arg})")
            adapter.close_window(record.window)
        else:
            log(session.settings, f"close tab {record.arg}")
            adapter.close_tab(record.tab)
        remaining[record.window_index] -= 1
        closed += 1
    return closed


def list_tabs(session: Session, query: Optional[str]) -> None:
    snapshot = build_snapshot(session.adapter)
    matched = filter_records(snapshot, query, Scope.TITLE_OR_URL)
    items = [tab_item(record) for record in matched]
    if session.settings.prepend_all_item and query:
        items.insert(0, close_all_item(query))
    session.emit(render_items(items))


def list_titles(session: Session, query: Optional[str]) -> None:
    snapshot = build_snapshot(session.adapter)
    for line in render_titles(filter_records(snapshot, query, Scope.TITLE_OR_URL)):
        session.emit(line)


def dedup(session: Session) -> None:
    snapshot = build_snapshot(session.adapter)
    dups = find_duplicates(snapshot)
    log(session.settings, f"dedup: {len(dups)} duplicate(s) in {len(snapshot)} tabs")
    if not confirm(session, dups, "Close these duplicates?", NO_DUPLICATES):
        return
    close_records(session, snapshot, dups)


def close_by_address(session: Session, arg: str) -> None:
    parse_address(arg)
    snapshot = build_snapshot(session.adapter)
    targets = filter_records(snapshot, arg)
    if not targets:
        raise NoMatches(NO_MATCHING_TABS)
    if session.settings.confirm_address_close and not confirm(
        session, targets, "Close this tab?", NO_MATCHING_TABS
    ):
        return
    close_records(session, snapshot, targets)


def close_by_keywords(session: Session, scope: Scope, keywords: Sequence[str]) -> None:
    snapshot = build_snapshot(session.adapter)
    targets = filter_by_keywords(snapshot, keywords, scope)
    log(session.settings, f"close {scope.value}: {len(targets)} match(es) for {list(keywords)!r}")
    if not confirm(session, targets, "Close these tabs?", NO_MATCHING_TABS):
        return
    close_records(session, snapshot, targets)


def close_by_titles(session: Session, values: Sequence[str]) -> None:
    snapshot = build_snapshot(session.adapter)
    resolved: List[TabRecord] = []
    for title in split_title_lines(values):
        record = find_by_title(snapshot, title)
        if record is None:
            log(session.settings, f"closeByTitles: no tab titled {title!r}")
            continue
        if record not in resolved:
            resolved.append(record)
    if not resolved:
        raise NoMatches(NO_MATCHING_TABS)
    resolved.sort(key=lambda r: (r.window_index, r.tab_index))
    close_records(session, snapshot, resolved)


def focus_record(session: Session, record: TabRecord) -> None:
    adapter = session.adapter
    log(session.settings, f"focus {record.arg}")
    adapter.set_window_visible(record.window, True)
    adapter.set_active_tab(record.window, record.tab_index)
    adapter.set_window_order(record.window, 0)
    adapter.activate_application()


def focus(session: Session, arg: str) -> None:
    address = parse_address(arg)
    record = find_by_address(build_snapshot(session.adapter), address)
    if record is None:
        raise NoMatches(NO_MATCHING_TABS)
    focus_record(session, record)


def focus_by_title(session: Session, value: str) -> None:
    title = strip_url_decoration(value)
    record = find_by_title(build_snapshot(session.adapter), title)
    if record is None:
        raise NoMatches(NO_MATCHING_TABS)
    focus_record(session, record)
