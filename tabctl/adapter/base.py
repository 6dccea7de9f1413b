"""Capability surface the command layer uses to reach the browser."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional


class BrowserAdapter(ABC):
    """Abstract browser automation surface.

    Window and tab handles are opaque to callers and only valid until the
    browser state changes. Indices crossing this boundary are 0-based.
    """

    @abstractmethod
    def list_windows(self) -> List[Any]:
        """Return window handles in the browser's native order."""

    @abstractmethod
    def list_tabs(self, window: Any) -> List[Any]:
        """Return tab handles of `window` in native order."""

    @abstractmethod
    def get_title(self, tab: Any) -> Optional[str]:
        pass

    @abstractmethod
    def get_url(self, tab: Any) -> Optional[str]:
        pass

    @abstractmethod
    def get_id(self, tab: Any) -> Optional[Any]:
        pass

    @abstractmethod
    def close_tab(self, tab: Any) -> None:
        pass

    @abstractmethod
    def close_window(self, window: Any) -> None:
        pass

    @abstractmethod
    def set_window_visible(self, window: Any, visible: bool) -> None:
        pass

    @abstractmethod
    def set_active_tab(self, window: Any, index: int) -> None:
        pass

    @abstractmethod
    def set_window_order(self, window: Any, index: int) -> None:
        """Move `window` to position `index` in the stacking order (0 is frontmost)."""

    @abstractmethod
    def activate_application(self) -> None:
        pass

    @abstractmethod
    def show_alert(self, message: str) -> None:
        pass

    @abstractmethod
    def show_confirm_dialog(self, message: str) -> Optional[str]:
        """Show a modal dialog. Returns the pressed button, or None when cancelled."""
