"""Per-invocation context threaded through every command."""

from dataclasses import dataclass
from typing import TextIO

from tabctl.adapter.base import BrowserAdapter
from tabctl.config import Settings


@dataclass(frozen=True)
class Session:
    settings: Settings
    adapter: BrowserAdapter
    stdout: TextIO
    stdin: TextIO

    def emit(self, text: str = "") -> None:
        print(text, file=self.stdout, flush=True)

    def read_line(self) -> str:
        return self.stdin.readline()
