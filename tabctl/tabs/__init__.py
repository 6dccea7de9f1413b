"""Tab snapshot records and the pure operations over them."""

from .address import looks_like_address, parse_address
from .dedup import find_duplicates
from .filtering import filter_by_keywords, filter_records, find_by_address, find_by_title
from .models import NO_TITLE, Address, Scope, TabRecord
from .text import TITLE_URL_SEPARATOR, normalize_title, split_title_lines, strip_url_decoration, title_line

__all__ = [
    "looks_like_address",
    "parse_address",
    "find_duplicates",
    "filter_by_keywords",
    "filter_records",
    "find_by_address",
    "find_by_title",
    "normalize_title",
    "split_title_lines",
    "strip_url_decoration",
    "title_line",
    "Address",
    "Scope",
    "TabRecord",
    "NO_TITLE",
    "TITLE_URL_SEPARATOR",
]
