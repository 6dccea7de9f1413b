#!/usr/bin/env python3
"""tabctl: list, close, deduplicate and focus browser tabs from the terminal.

Global flags (accepted anywhere, stripped before the command is read):
- --ui              ask questions with a browser dialog instead of the terminal
- --yes             answer every question with "y"
- --prependAllItem  `list` only: put a "Close all" entry first
- -v, --verbose     diagnostics on stderr
- --app NAME        target browser application (default "Google Chrome")

Exit codes: 0 ok (also no matches and cancel), 1 usage, 2 browser failure.
"""

import sys
from typing import Callable, Dict, List, Mapping, Optional, TextIO, Tuple

from tabctl.adapter.base import BrowserAdapter
from tabctl.adapter.osascript import OsascriptAdapter
from tabctl.config import (
    Mode,
    Settings,
    _env_flag,
    build_settings,
    config_path,
    env_overrides,
    load_cfg,
    merge_cfg,
)
from tabctl.errors import AdapterUnavailable, InvalidAddress, NoMatches, UsageError
from tabctl.logs import log
from tabctl.tabs.address import looks_like_address
from tabctl.tabs.models import Scope

from . import commands
from .confirm import render_empty
from .session import Session

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_FAILURE = 2

SCOPE_FLAGS = {
    "--title": Scope.TITLE_ONLY,
    "--url": Scope.URL_ONLY,
    "--filter": Scope.TITLE_OR_URL,
}

USAGE_ROWS = [
    ("list <string?>", "List open tabs, optionally filtered by title or url", "tabctl list myfilter"),
    ("titles <string?>", "Print `title >> url` for open tabs", "tabctl titles mail"),
    ("dedup", "Close duplicate tabs", "tabctl dedup"),
    ("close <winIdx,tabIdx>", "Close a specific tab in a specific window", "tabctl close 0,13"),
    ("close --title <string(s)>", "Close tabs with titles containing strings", 'tabctl close --title Inbox "iphone - apple"'),
    ("close --url <string(s)>", "Close tabs with URLs containing strings", "tabctl close --url mail.google apple"),
    ("close --filter <string(s)>", "Close tabs with titles or URLs containing strings", "tabctl close --filter apple"),
    ("closeByTitles <title(s)>", "Close tabs by exact title, one per line", 'tabctl closeByTitles "Inbox >> https://mail.google.com"'),
    ("focus <winIdx,tabIdx>", "Focus a specific tab in a specific window", "tabctl focus 0,13"),
    ("focusByTitle <string>", "Focus a tab by its exact title", 'tabctl focusByTitle "My Tab Title"'),
    ("--ui", "Use browser dialogs for messages and questions", "tabctl close --title inbox --ui"),
    ("--yes", 'Answer all questions with "y"', "tabctl close --title inbox --yes"),
    ("--prependAllItem", 'With `list`: add a "Close all" entry first', "tabctl list mail --prependAllItem"),
    ("--app <name>", "Browser application to control", 'tabctl list --app "Brave Browser"'),
    ("-v, --verbose", "Print diagnostics to stderr", "tabctl dedup -v"),
]


def usage_text() -> str:
    lines = ["", "--------------", "Tab Control", "--------------", ""]
    for command, description, example in USAGE_ROWS:
        lines.append(f"{command:<30}{description:<56}usage: {example}")
    return "\n".join(lines)


def parse_args(args: List[str], env: Optional[Mapping[str, str]] = None) -> Tuple[Settings, List[str]]:
    """Strip global flags from `args` and build the run's Settings."""
    ui = False
    yes = False
    prepend_all_item = False
    verbose = _env_flag("TABCTL_VERBOSE", default=False, env=env)
    application: Optional[str] = None
    rest: List[str] = []
    idx = 0
    while idx < len(args):
        arg = args[idx]
        if arg == "--ui":
            ui = True
        elif arg == "--yes":
            yes = True
        elif arg == "--prependAllItem":
            prepend_all_item = True
        elif arg in ("-v", "--verbose"):
            verbose = True
        elif arg == "--app":
            if idx + 1 >= len(args):
                raise UsageError("--app requires an application name")
            idx += 1
            application = args[idx]
        elif arg.startswith("--app="):
            application = arg.split("=", 1)[1]
        else:
            rest.append(arg)
        idx += 1

    if application is not None and not application.strip():
        raise UsageError("--app requires an application name")

    # --yes wins over --ui when both are given.
    if yes:
        mode = Mode.YES
    elif ui:
        mode = Mode.UI
    else:
        mode = Mode.CLI

    overrides = env_overrides(env)
    if application:
        overrides["application"] = application.strip()
    cfg = merge_cfg(load_cfg(config_path(env)), overrides)
    settings = build_settings(cfg, mode=mode, prepend_all_item=prepend_all_item, verbose=verbose)
    return settings, rest


def _query(params: List[str]) -> Optional[str]:
    query = " ".join(params).strip()
    return query or None


def _cmd_list(session: Session, params: List[str]) -> None:
    commands.list_tabs(session, _query(params))


def _cmd_titles(session: Session, params: List[str]) -> None:
    commands.list_titles(session, _query(params))


def _cmd_dedup(session: Session, params: List[str]) -> None:
    commands.dedup(session)


def _cmd_close(session: Session, params: List[str]) -> None:
    if not params:
        raise UsageError("close requires a tab address or keywords")
    first = params[0]
    if first in SCOPE_FLAGS:
        keywords = params[1:]
        if not keywords:
            raise UsageError(f"close {first} requires at least one keyword")
        commands.close_by_keywords(session, SCOPE_FLAGS[first], keywords)
        return
    if first.startswith("--"):
        raise UsageError(f"Unknown close option: {first}")
    if len(params) == 1 and looks_like_address(first):
        commands.close_by_address(session, first)
        return
    commands.close_by_keywords(session, Scope.TITLE_OR_URL, params)


def _cmd_close_by_titles(session: Session, params: List[str]) -> None:
    if not params:
        raise UsageError("closeByTitles requires at least one title")
    commands.close_by_titles(session, params)


def _cmd_focus(session: Session, params: List[str]) -> None:
    if len(params) != 1:
        raise UsageError("focus requires exactly one tab address")
    commands.focus(session, params[0])


def _cmd_focus_by_title(session: Session, params: List[str]) -> None:
    title = " ".join(params)
    if not title.strip():
        raise UsageError("focusByTitle requires a title")
    commands.focus_by_title(session, title)


COMMANDS: Dict[str, Callable[[Session, List[str]], None]] = {
    "list": _cmd_list,
    "titles": _cmd_titles,
    "dedup": _cmd_dedup,
    "close": _cmd_close,
    "closeByTitles": _cmd_close_by_titles,
    "focus": _cmd_focus,
    "focusByTitle": _cmd_focus_by_title,
}


def dispatch(session: Session, args: List[str]) -> int:
    if not args:
        raise UsageError("")
    verb, params = args[0], args[1:]
    if verb in ("help", "-h", "--help"):
        session.emit(usage_text())
        return EXIT_OK
    handler = COMMANDS.get(verb)
    if handler is None:
        raise UsageError(f"Unknown command: {verb}")
    log(session.settings, f"command {verb} mode={session.settings.mode.value} app={session.settings.application!r}")
    try:
        handler(session, params)
    except NoMatches as exc:
        render_empty(session, str(exc))
    return EXIT_OK


def _emit_usage_error(stdout: TextIO, exc: UsageError) -> int:
    message = str(exc)
    if isinstance(exc, InvalidAddress):
        message = f"\n{message}\n"
    if message:
        print(message, file=stdout)
    print(usage_text(), file=stdout)
    return EXIT_USAGE


def main(
    argv: List[str],
    *,
    adapter: Optional[BrowserAdapter] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    env: Optional[Mapping[str, str]] = None,
) -> int:
    stdout = stdout or sys.stdout
    stdin = stdin or sys.stdin
    try:
        settings, rest = parse_args(list(argv[1:]), env=env)
    except UsageError as exc:
        return _emit_usage_error(stdout, exc)

    session = Session(
        settings=settings,
        adapter=adapter or OsascriptAdapter(settings),
        stdout=stdout,
        stdin=stdin,
    )
    try:
        return dispatch(session, rest)
    except UsageError as exc:
        return _emit_usage_error(stdout, exc)
    except AdapterUnavailable as exc:
        session.emit(str(exc))
        return EXIT_FAILURE
    except Exception as exc:
        log(settings, f"error: {type(exc).__name__}: {exc}")
        session.emit(f"Error: {exc}")
        return EXIT_FAILURE


def run() -> None:
    raise SystemExit(main(sys.argv))


if __name__ == "__main__":
    run()
