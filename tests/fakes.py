"""In-memory browser adapter that behaves like a real one: closing shifts indices."""

from typing import Any, List, Optional, Sequence, Tuple

from tabctl.adapter.base import BrowserAdapter
from tabctl.errors import AdapterUnavailable


class FakeTab:
    def __init__(self, title: Optional[str], url: Optional[str], tab_id: Optional[Any] = None):
        self.title = title
        self.url = url
        self.id = tab_id


class FakeWindow:
    def __init__(self, tabs: List[FakeTab]):
        self.tabs = tabs
        self.visible = False
        self.active_tab: Optional[int] = None


class FakeBrowser(BrowserAdapter):
    """`windows` is a list of windows, each a list of (title, url) or (title, url, id)."""

    def __init__(
        self,
        windows: Sequence[Sequence[Tuple]],
        *,
        dialog_response: Optional[str] = "OK",
        running: bool = True,
    ):
        self.windows = [FakeWindow([FakeTab(*tab) for tab in tabs]) for tabs in windows]
        self.dialog_response = dialog_response
        self.running = running
        self.calls: List[Tuple] = []
        self.activated = False

    def _window_index(self, window: FakeWindow) -> int:
        return self.windows.index(window)

    def _address(self, tab: FakeTab) -> Tuple[int, int]:
        for w_idx, window in enumerate(self.windows):
            for t_idx, candidate in enumerate(window.tabs):
                if candidate is tab:
                    return w_idx, t_idx
        raise AssertionError("tab is no longer open")

    @property
    def closes(self) -> List[Tuple]:
        return [call for call in self.calls if call[0] in ("close_tab", "close_window")]

    def titles(self) -> List[List[Optional[str]]]:
        return [[tab.title for tab in window.tabs] for window in self.windows]

    def list_windows(self):
        if not self.running:
            raise AdapterUnavailable("Google Chrome is not running")
        self.calls.append(("list_windows",))
        return list(self.windows)

    def list_tabs(self, window):
        return list(window.tabs)

    def get_title(self, tab):
        return tab.title

    def get_url(self, tab):
        return tab.url

    def get_id(self, tab):
        return tab.id

    def close_tab(self, tab):
        w_idx, t_idx = self._address(tab)
        self.calls.append(("close_tab", w_idx, t_idx))
        del self.windows[w_idx].tabs[t_idx]

    def close_window(self, window):
        w_idx = self._window_index(window)
        self.calls.append(("close_window", w_idx))
        del self.windows[w_idx]

    def set_window_visible(self, window, visible):
        self.calls.append(("set_window_visible", self._window_index(window), visible))
        window.visible = visible

    def set_active_tab(self, window, index):
        self.calls.append(("set_active_tab", self._window_index(window), index))
        window.active_tab = index

    def set_window_order(self, window, index):
        self.calls.append(("set_window_order", self._window_index(window), index))
        self.windows.remove(window)
        self.windows.insert(index, window)

    def activate_application(self):
        self.calls.append(("activate_application",))
        self.activated = True

    def show_alert(self, message):
        self.calls.append(("show_alert", message))

    def show_confirm_dialog(self, message):
        self.calls.append(("show_confirm_dialog", message))
        return self.dialog_response


class NoInput:
    """stdin stand-in that fails the test if anything tries to read it."""

    def readline(self):
        raise AssertionError("stdin must not be read")

    def read(self, *args):
        raise AssertionError("stdin must not be read")
