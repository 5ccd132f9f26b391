"""Offset pagination helpers."""

from __future__ import annotations

import math
from typing import Any, Dict


def page_offset(page: int, per_page: int) -> int:
    return (max(page, 1) - 1) * per_page


def pagination_meta(page: int, per_page: int, total: int) -> Dict[str, Any]:
    """Describe one page of ``total`` results."""
    return {
        "current_page": page,
        "total_pages": math.ceil(total / per_page) if per_page else 0,
        "total_entries": total,
        "has_next": page * per_page < total,
        "has_prev": page > 1,
    }
