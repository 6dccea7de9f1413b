"""Verbose diagnostics on stderr."""

import sys
from datetime import datetime
from typing import Optional, TextIO


def log(settings, msg: str, stream: Optional[TextIO] = None) -> None:
    if settings is None or not settings.verbose:
        return
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(f"[tabctl] {ts} {msg}", file=stream or sys.stderr)
