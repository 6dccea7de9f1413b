"""Parsing of `winIdx,tabIdx` tab addresses."""

from __future__ import annotations

import re

from tabctl.errors import InvalidAddress

from .models import Address

_ADDRESS_RE = re.compile(r"^\s*\d+\s*,\s*\d+\s*$")


def looks_like_address(value: object) -> bool:
    return bool(_ADDRESS_RE.match(str(value or "")))


def parse_address(value: str) -> Address:
    parts = str(value or "").split(",")
    if len(parts) != 2:
        raise InvalidAddress(value)
    try:
        window_index = int(parts[0].strip())
        tab_index = int(parts[1].strip())
    except ValueError:
        raise InvalidAddress(value) from None
    if window_index < 0 or tab_index < 0:
        raise InvalidAddress(value)
    return Address(window_index, tab_index)
