from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from datatable.pagination import PageControl
from datatable.rows import Row
from datatable.sorting import ASC, SortDirection

NO_DATA_MESSAGE = "No data available"
NO_MATCHES_MESSAGE = "No matching records found"
NO_ENTRIES_INFO = "No entries to show"


@dataclass
class TableState:
    current_page: int = 1
    sort_column: Optional[int] = None
    sort_direction: SortDirection = ASC
    search_query: str = ""
    page_size: int = 10
    total_pages: int = 0


@dataclass(frozen=True)
class TableView:
    """Everything a renderer needs to draw one page of the table."""

    headers: List[str]
    rows: List[Row]
    row_ids: List[int]
    header_states: List[Optional[SortDirection]]
    info: str
    empty_message: Optional[str]
    controls: List[PageControl]
    state: TableState
    total_count: int = 0
    filtered_count: int = 0
    column_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def info_text(start: int, end: int, filtered_count: int, total_count: int) -> str:
    """Entry-range summary; `start`/`end` are zero-based slice offsets."""
    if filtered_count == 0:
        return NO_ENTRIES_INFO
    text = f"Showing {start + 1} to {end} of {filtered_count} entries"
    if filtered_count != total_count:
        text += f" (filtered from {total_count} total entries)"
    return text


def empty_message(total_count: int) -> str:
    return NO_DATA_MESSAGE if total_count == 0 else NO_MATCHES_MESSAGE
