"""Ask before destructive actions, according to the configured mode."""

from __future__ import annotations

from typing import List, Sequence

from tabctl.config import Mode
from tabctl.tabs.models import TabRecord
from tabctl.tabs.text import title_line

from .session import Session


def alert(session: Session, message: str) -> None:
    if session.settings.mode is Mode.YES:
        return
    session.adapter.activate_application()
    session.adapter.show_alert(message)


def render_empty(session: Session, message: str) -> None:
    if session.settings.mode is Mode.CLI:
        session.emit(message)
    else:
        alert(session, message)


def describe(candidates: Sequence[TabRecord]) -> List[str]:
    return [title_line(record.title, record.url) for record in candidates]


def confirm(session: Session, candidates: Sequence[TabRecord], prompt: str, empty_message: str) -> bool:
    """Return True when the action on `candidates` may proceed.

    An empty candidate list renders `empty_message` and never prompts.
    """
    if not candidates:
        render_empty(session, empty_message)
        return False

    mode = session.settings.mode
    if mode is Mode.YES:
        return True

    listing = "\n\n".join(describe(candidates))
    if mode is Mode.UI:
        session.adapter.activate_application()
        return session.adapter.show_confirm_dialog(f"{prompt}\n\n{listing}") is not None

    session.emit(f"\n{listing}")
    session.emit(f"\n{prompt} (y/N)")
    if session.read_line().strip() != "y":
        session.emit("Canceled")
        return False
    return True
