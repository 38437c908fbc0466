"""Page/limit handling shared by every list endpoint"""

import math
from dataclasses import dataclass

from backend.app.core.config import settings


@dataclass(frozen=True)
class PageRequest:
    """A normalized page request; ``page`` and ``limit`` are always >= 1"""
    page: int
    limit: int
    
    @classmethod
    def build(cls, page=None, limit=None, default_limit: int = None) -> "PageRequest":
        """
        Build a page request from caller-supplied values
        
        Non-numeric or non-positive values fall back to the defaults and
        ``limit`` is capped at ``MAX_PAGE_SIZE``, so the resulting offset is
        never negative.
        """
        default_limit = default_limit or settings.DEFAULT_PAGE_SIZE
        page = _as_positive_int(page, 1)
        limit = min(_as_positive_int(limit, default_limit), settings.MAX_PAGE_SIZE)
        return cls(page=page, limit=limit)
    
    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def _as_positive_int(value, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def build_pagination(page: int, limit: int, total: int) -> dict:
    """Pagination metadata for ``total`` matching records"""
    return {
        "current": page,
        "total": math.ceil(total / limit) if limit > 0 else 0,
        "has_next": page * limit < total,
        "has_prev": page > 1,
    }
