# backend/services/pageable.py
import math
from dataclasses import dataclass
from typing import Optional

DEFAULT_PAGE_SIZE = 5
MAX_PAGE_SIZE = 100
DEFAULT_PAGE_NUMBER = 0


@dataclass(frozen=True)
class Pageable:
    """Zero-based page number and page size."""

    number: int
    size: int

    @property
    def skip(self) -> int:
        return self.number * self.size


def _to_int(value: Optional[str]) -> Optional[int]:
    """Integer value of a query string, None when it is missing or not a whole number.

    A blank string counts as 0.
    """
    if value is None:
        return None
    if not str(value).strip():
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number) or not number.is_integer():
        return None
    return int(number)


def create_pageable(number: Optional[str] = None, size: Optional[str] = None) -> Pageable:
    """Normalize the 1-based page number and the page size of a request.

    An out-of-range size falls back to DEFAULT_PAGE_NUMBER (i.e. 0), not to
    DEFAULT_PAGE_SIZE. Clients relying on this get an empty page.
    """
    page_number = _to_int(number)
    if page_number is None:
        page_number = DEFAULT_PAGE_NUMBER
    else:
        page_number -= 1
        if page_number < 0:
            page_number = DEFAULT_PAGE_NUMBER

    page_size = _to_int(size)
    if page_size is None:
        page_size = DEFAULT_PAGE_SIZE
    elif page_size < 1 or page_size > MAX_PAGE_SIZE:
        page_size = DEFAULT_PAGE_NUMBER

    return Pageable(number=page_number, size=page_size)
