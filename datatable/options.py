from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_TABLE_ID = "dataTable"
DEFAULT_PAGE_SIZE = 10
DEFAULT_WINDOW_SIZE = 5
MAX_PAGE_SIZE = 500
MAX_WINDOW_SIZE = 25


@dataclass(frozen=True)
class TableOptions:
    sortable: bool = True
    searchable: bool = True
    pagination: bool = True
    page_size: int = DEFAULT_PAGE_SIZE
    window_size: int = DEFAULT_WINDOW_SIZE
    responsive: bool = True
    striped: bool = True
    bordered: bool = True
    hover: bool = True


def coerce_page_size(value: object, default: int = DEFAULT_PAGE_SIZE) -> int:
    return _clamped_int(value, default, 1, MAX_PAGE_SIZE)


def _clamped_int(value: object, default: int, low: int, high: int) -> int:
    try:
        out = int(value)  # type: ignore[arg-type]
    except Exception:
        out = default
    return max(low, min(high, out))


def normalize_options(raw: Optional[dict] = None) -> TableOptions:
    raw = raw or {}
    defaults = TableOptions()
    return TableOptions(
        sortable=bool(raw.get("sortable", defaults.sortable)),
        searchable=bool(raw.get("searchable", defaults.searchable)),
        pagination=bool(raw.get("pagination", defaults.pagination)),
        page_size=coerce_page_size(raw.get("page_size", defaults.page_size)),
        window_size=_clamped_int(
            raw.get("window_size", defaults.window_size), DEFAULT_WINDOW_SIZE, 1, MAX_WINDOW_SIZE
        ),
        responsive=bool(raw.get("responsive", defaults.responsive)),
        striped=bool(raw.get("striped", defaults.striped)),
        bordered=bool(raw.get("bordered", defaults.bordered)),
        hover=bool(raw.get("hover", defaults.hover)),
    )
