"""Pagination helpers for in-memory row windows and page-selector controls."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Literal, Optional, Tuple

from datatable.options import DEFAULT_WINDOW_SIZE

ControlKind = Literal["previous", "first", "ellipsis", "page", "last", "next"]


@dataclass(frozen=True)
class PageControl:
    kind: ControlKind
    label: str
    page: Optional[int] = None
    active: bool = False
    disabled: bool = False


def compute_total_pages(total_rows: int, page_size: int) -> int:
    """Total pages for the page size; 0 when there are no rows."""
    if total_rows <= 0 or page_size <= 0:
        return 0
    return math.ceil(total_rows / page_size)


def clamp_page(page: int, total_pages: int) -> int:
    return min(max(page, 1), max(total_pages, 1))


def page_bounds(page: int, page_size: int, total_rows: int) -> Tuple[int, int]:
    """Start/end row offsets of the page, clamped to the available rows."""
    start = max(page - 1, 0) * page_size
    end = start + page_size
    return min(start, total_rows), min(end, total_rows)


def page_window(current_page: int, total_pages: int, window_size: int = DEFAULT_WINDOW_SIZE) -> Tuple[int, int]:
    """Inclusive (start, end) of the numbered page buttons around `current_page`.

    The window stays full near either boundary instead of shrinking.
    """
    start = max(1, current_page - window_size // 2)
    end = min(total_pages, start + window_size - 1)
    if end - start + 1 < window_size:
        start = max(1, end - window_size + 1)
    return start, end


def build_controls(current_page: int, total_pages: int, window_size: int = DEFAULT_WINDOW_SIZE) -> List[PageControl]:
    if total_pages <= 1:
        return []

    controls: List[PageControl] = [
        PageControl("previous", "Previous", page=current_page - 1, disabled=current_page <= 1)
    ]
    start, end = page_window(current_page, total_pages, window_size)

    if start > 1:
        controls.append(PageControl("first", "1", page=1))
        if start > 2:
            controls.append(PageControl("ellipsis", "..."))

    for page in range(start, end + 1):
        controls.append(PageControl("page", str(page), page=page, active=page == current_page))

    if end < total_pages:
        if end < total_pages - 1:
            controls.append(PageControl("ellipsis", "..."))
        controls.append(PageControl("last", str(total_pages), page=total_pages))

    controls.append(
        PageControl("next", "Next", page=current_page + 1, disabled=current_page >= total_pages)
    )
    return controls
