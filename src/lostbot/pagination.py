"""Paging of clan member lists."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List

PAGE_SIZE = 10


@dataclass
class MemberPage:
    """One page of a member list. `page` is 1-based."""

    page: int
    total_pages: int
    start: int
    members: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def total_pages(count: int, page_size: int = PAGE_SIZE) -> int:
    """Number of pages for `count` items; an empty list still has one page."""
    return max(1, math.ceil(count / page_size))


def paginate(members: List[Dict[str, Any]], page: int, page_size: int = PAGE_SIZE) -> MemberPage:
    """Slice `members` for `page`, clamping out-of-range pages."""
    pages = total_pages(len(members), page_size)
    page = min(max(page, 1), pages)
    start = (page - 1) * page_size
    return MemberPage(page=page, total_pages=pages, start=start, members=members[start : start + page_size])
