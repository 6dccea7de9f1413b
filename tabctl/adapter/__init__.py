"""Browser automation adapters."""

from .base import BrowserAdapter
from .osascript import OsascriptAdapter, TabRef, WindowRef

__all__ = ["BrowserAdapter", "OsascriptAdapter", "TabRef", "WindowRef"]
