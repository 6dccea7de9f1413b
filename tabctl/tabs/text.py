"""Title normalization and `title >> url` line helpers."""

from __future__ import annotations

from typing import Iterable, List

from .models import NO_TITLE

TITLE_URL_SEPARATOR = " >> "


def normalize_title(value: object) -> str:
    text = "" if value is None else str(value)
    return text or NO_TITLE


def title_line(title: str, url: str) -> str:
    return f"{title}{TITLE_URL_SEPARATOR}{url}"


def strip_url_decoration(line: str) -> str:
    """Drop a trailing ` >> url` suffix, as printed by `titles`."""
    text = str(line or "").rstrip("\r\n")
    head, sep, _url = text.rpartition(TITLE_URL_SEPARATOR)
    return head if sep else text


def split_title_lines(values: Iterable[str]) -> List[str]:
    joined = "\n".join(str(v) for v in values)
    return [strip_url_decoration(line) for line in joined.splitlines() if line.strip()]
