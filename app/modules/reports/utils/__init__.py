"""
Utilities for Reports module

Pagination parsing and month labelling shared by every record listing.
"""

import math
from dataclasses import dataclass
from typing import Optional, Union

from app.core.config import settings

# OFFSET is bound as a signed 64-bit integer
MAX_OFFSET = 2 ** 63 - 1

MONTH_NAMES = [
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
]


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def pages_for(self, total: int) -> int:
        return math.ceil(total / self.limit)


def _parse_int(value: Union[str, int, None]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def resolve_pagination(
    page: Union[str, int, None] = None,
    limit: Union[str, int, None] = None,
    default_limit: Optional[int] = None,
    max_limit: Optional[int] = None
) -> Pagination:
    """
    Parse raw query values into a valid page.

    Unparseable values fall back to defaults; limit stays within
    [1, max_limit] and page within [1, max_page_for(limit)].
    """
    default_limit = default_limit or settings.DEFAULT_PAGE_SIZE
    max_limit = max_limit or settings.MAX_PAGE_SIZE

    parsed_page = _parse_int(page)
    parsed_limit = _parse_int(limit)

    if parsed_page is None or parsed_page < 1:
        parsed_page = 1
    if parsed_limit is None:
        parsed_limit = default_limit

    parsed_limit = min(max(parsed_limit, 1), max_limit)
    return Pagination(page=min(parsed_page, max_page_for(parsed_limit)), limit=parsed_limit)


def max_page_for(limit: int) -> int:
    """Last page whose offset still fits in MAX_OFFSET"""
    return MAX_OFFSET // limit + 1


def month_name(month: int) -> str:
    """Spanish name for a 1-based month number"""
    return MONTH_NAMES[month - 1]
