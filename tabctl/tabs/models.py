"""Data models for one tab snapshot."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

NO_TITLE = "No Title"


class Scope(Enum):
    TITLE_ONLY = "title"
    URL_ONLY = "url"
    TITLE_OR_URL = "filter"


@dataclass(frozen=True)
class Address:
    window_index: int
    tab_index: int

    def __str__(self) -> str:
        return f"{self.window_index},{self.tab_index}"


@dataclass
class TabRecord:
    id: Optional[Any]
    title: str
    url: str
    window_index: int
    tab_index: int
    # Adapter handles; only valid for the snapshot that produced them.
    window: Any = field(default=None, repr=False, compare=False)
    tab: Any = field(default=None, repr=False, compare=False)

    @property
    def address(self) -> Address:
        return Address(self.window_index, self.tab_index)

    @property
    def arg(self) -> str:
        return str(self.address)

    @property
    def subtitle(self) -> str:
        return self.url
