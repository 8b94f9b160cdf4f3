# /nutrito/utils/pagination.py
from dataclasses import dataclass


def build_pagination(total, limit, offset):
    """Pagination block returned next to every list payload."""
    return {
        'total': total,
        'limit': limit,
        'offset': offset,
        'has_next': offset + limit < total,
        'has_prev': offset > 0,
    }


def clamp_window(limit, offset, default_limit, max_limit):
    """Bound a requested window to 1..max_limit rows starting at offset >= 0."""
    if limit is None:
        limit = default_limit
    limit = max(1, min(int(limit), max_limit))
    offset = max(0, int(offset or 0))
    return limit, offset


@dataclass
class Page:
    items: list
    total: int
    limit: int
    offset: int

    @property
    def pagination(self):
        return build_pagination(self.total, self.limit, self.offset)
