"""Browser adapter driving the Chromium scripting dictionary through osascript.

Every operation runs one `osascript -l JavaScript` process. Parameters travel
as script arguments (`run(argv)`, argv[0] is the application name) so no user
text is ever spliced into script source. Scripts answer with a JSON object on
stdout.
"""

import json
import subprocess
from dataclasses import dataclass
from typing import Any, List, Optional

from tabctl.errors import AdapterUnavailable
from tabctl.logs import log

from .base import BrowserAdapter

_PRELUDE = """
function browserFrom(argv) {
  const browser = Application(argv[0]);
  if (!browser.running()) {
    throw new Error(argv[0] + ' is not running');
  }
  return browser;
}
"""

READ_TABS_SCRIPT = """
function run(argv) {
  const browser = browserFrom(argv);
  return JSON.stringify({
    ids: browser.windows.tabs.id(),
    titles: browser.windows.tabs.title(),
    urls: browser.windows.tabs.url(),
  });
}
"""

CLOSE_TAB_SCRIPT = """
function run(argv) {
  browserFrom(argv).windows[Number(argv[1])].tabs[Number(argv[2])].close();
  return '{}';
}
"""

CLOSE_WINDOW_SCRIPT = """
function run(argv) {
  browserFrom(argv).windows[Number(argv[1])].close();
  return '{}';
}
"""

SET_VISIBLE_SCRIPT = """
function run(argv) {
  browserFrom(argv).windows[Number(argv[1])].visible = argv[2] === 'true';
  return '{}';
}
"""

# activeTabIndex and index are 1-based in the scripting dictionary.
SET_ACTIVE_TAB_SCRIPT = """
function run(argv) {
  browserFrom(argv).windows[Number(argv[1])].activeTabIndex = Number(argv[2]) + 1;
  return '{}';
}
"""

SET_ORDER_SCRIPT = """
function run(argv) {
  browserFrom(argv).windows[Number(argv[1])].index = Number(argv[2]) + 1;
  return '{}';
}
"""

ACTIVATE_SCRIPT = """
function run(argv) {
  browserFrom(argv).activate();
  return '{}';
}
"""

ALERT_SCRIPT = """
function run(argv) {
  const browser = browserFrom(argv);
  browser.includeStandardAdditions = true;
  browser.displayAlert(argv[1]);
  return '{}';
}
"""

DIALOG_SCRIPT = """
function run(argv) {
  const browser = browserFrom(argv);
  browser.includeStandardAdditions = true;
  try {
    const reply = browser.displayDialog(argv[1]);
    return JSON.stringify({button: reply.buttonReturned});
  } catch (e) {
    if (e.errorNumber === -128) {
      return JSON.stringify({cancelled: true});
    }
    throw e;
  }
}
"""

NOT_AUTHORIZED_MARKERS = ("-1743", "not authorized to send apple events", "not allowed to send apple events")


@dataclass(frozen=True)
class WindowRef:
    index: int


@dataclass(frozen=True)
class TabRef:
    window_index: int
    index: int
    id: Optional[Any] = None
    title: Optional[str] = None
    url: Optional[str] = None


def _describe_failure(application: str, op: str, detail: str) -> str:
    text = (detail or "").strip()
    lowered = text.lower()
    if any(marker in lowered for marker in NOT_AUTHORIZED_MARKERS):
        return (
            f"Not authorized to control {application}. Allow it under "
            "System Settings > Privacy & Security > Automation."
        )
    if "is not running" in lowered:
        return f"{application} is not running"
    if "can't get application" in lowered or "can’t get application" in lowered:
        return f"Application not found: {application}"
    return f"{application} automation failed ({op}): {text or 'no output'}"


def _column(table: object, window_index: int, tab_index: int) -> Optional[Any]:
    try:
        return table[window_index][tab_index]  # type: ignore[index]
    except (IndexError, KeyError, TypeError):
        return None


class OsascriptAdapter(BrowserAdapter):
    def __init__(self, settings):
        self.settings = settings
        self._tabs: Optional[List[List[TabRef]]] = None

    def _run(self, op: str, script: str, *args: object) -> dict:
        cmd = [
            self.settings.osascript_path,
            "-l",
            "JavaScript",
            "-e",
            _PRELUDE + script,
            self.settings.application,
            *[str(arg) for arg in args],
        ]
        log(self.settings, f"osascript {op} {' '.join(str(a) for a in args)}".rstrip())
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.settings.osascript_timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise AdapterUnavailable(f"osascript not found: {self.settings.osascript_path}") from exc
        except subprocess.TimeoutExpired as exc:
            raise AdapterUnavailable(
                f"{self.settings.application} did not respond within "
                f"{self.settings.osascript_timeout:g}s ({op})"
            ) from exc

        if proc.returncode != 0:
            detail = (proc.stderr or "").strip() or (proc.stdout or "").strip()
            log(self.settings, f"osascript {op} failed (code {proc.returncode}) {detail}")
            raise AdapterUnavailable(_describe_failure(self.settings.application, op, detail))

        out = (proc.stdout or "").strip()
        if not out:
            return {}
        try:
            data = json.loads(out)
        except ValueError as exc:
            raise AdapterUnavailable(f"Unexpected osascript output ({op}): {out[:200]}") from exc
        return data if isinstance(data, dict) else {}

    def _read_tabs(self) -> List[List[TabRef]]:
        data = self._run("read-tabs", READ_TABS_SCRIPT)
        ids = data.get("ids") or []
        titles = data.get("titles") or []
        urls = data.get("urls") or []
        windows: List[List[TabRef]] = []
        for w_idx, window_titles in enumerate(titles):
            tabs = []
            for t_idx in range(len(window_titles or [])):
                tabs.append(
                    TabRef(
                        window_index=w_idx,
                        index=t_idx,
                        id=_column(ids, w_idx, t_idx),
                        title=_column(titles, w_idx, t_idx),
                        url=_column(urls, w_idx, t_idx),
                    )
                )
            windows.append(tabs)
        log(self.settings, f"read {sum(len(t) for t in windows)} tabs in {len(windows)} windows")
        return windows

    def list_windows(self) -> List[WindowRef]:
        self._tabs = self._read_tabs()
        return [WindowRef(index) for index in range(len(self._tabs))]

    def list_tabs(self, window: WindowRef) -> List[TabRef]:
        if self._tabs is None:
            self._tabs = self._read_tabs()
        if window.index >= len(self._tabs):
            return []
        return list(self._tabs[window.index])

    def get_title(self, tab: TabRef) -> Optional[str]:
        return tab.title

    def get_url(self, tab: TabRef) -> Optional[str]:
        return tab.url

    def get_id(self, tab: TabRef) -> Optional[Any]:
        return tab.id

    def close_tab(self, tab: TabRef) -> None:
        self._run("close-tab", CLOSE_TAB_SCRIPT, tab.window_index, tab.index)

    def close_window(self, window: WindowRef) -> None:
        self._run("close-window", CLOSE_WINDOW_SCRIPT, window.index)

    def set_window_visible(self, window: WindowRef, visible: bool) -> None:
        self._run("set-visible", SET_VISIBLE_SCRIPT, window.index, "true" if visible else "false")

    def set_active_tab(self, window: WindowRef, index: int) -> None:
        self._run("set-active-tab", SET_ACTIVE_TAB_SCRIPT, window.index, index)

    def set_window_order(self, window: WindowRef, index: int) -> None:
        self._run("set-order", SET_ORDER_SCRIPT, window.index, index)

    def activate_application(self) -> None:
        self._run("activate", ACTIVATE_SCRIPT)

    def show_alert(self, message: str) -> None:
        self._run("alert", ALERT_SCRIPT, message)

    def show_confirm_dialog(self, message: str) -> Optional[str]:
        data = self._run("dialog", DIALOG_SCRIPT, message)
        if data.get("cancelled"):
            return None
        return str(data.get("button") or "OK")
