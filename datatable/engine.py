from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from datatable.options import TableOptions, coerce_page_size
from datatable.pagination import build_controls, clamp_page, compute_total_pages, page_bounds
from datatable.rows import RowCollection, RowStore, frame_from_rows, to_rows
from datatable.search import filter_rows
from datatable.sorting import SortState, header_states, sort_rows, toggle_sort
from datatable.view import TableState, TableView, empty_message, info_text

logger = logging.getLogger(__name__)


class TableEngine:
    """Search / sort / paginate state machine over one Row Store.

    Every public mutation is a complete recompute, so the last call always
    leaves the state consistent. Nothing here touches a DOM; callers turn
    `view()` into output.
    """

    def __init__(
        self,
        rows: Optional[RowCollection] = None,
        headers: Optional[Sequence[str]] = None,
        options: Optional[TableOptions] = None,
    ) -> None:
        self.options = options or TableOptions()
        self.headers: List[str] = list(headers or [])
        self.store = RowStore(rows if rows is not None else frame_from_rows([]))
        self.state = TableState(page_size=self.options.page_size)
        self._recompute()

    @property
    def column_count(self) -> int:
        return len(self.headers) if self.headers else self.store.column_count

    @property
    def sort_state(self) -> SortState:
        return SortState(column=self.state.sort_column, direction=self.state.sort_direction)

    def load(self, rows: RowCollection) -> None:
        """Replace the original rows, keeping the active query and sort."""
        self.store.capture(rows)
        self._refilter()
        self.state.current_page = 1
        self._recompute()

    def clear(self) -> None:
        self.store.clear()
        self.state.current_page = 1
        self._recompute()

    def search(self, query: Optional[str]) -> None:
        self.state.search_query = query or ""
        self._refilter()
        self.state.current_page = 1
        self._recompute()

    def sort(self, column: int) -> bool:
        if not 0 <= column < self.column_count:
            logger.debug("ignoring sort on column %s (have %s columns)", column, self.column_count)
            return False
        sort = toggle_sort(self.sort_state, column)
        self.state.sort_column = sort.column
        self.state.sort_direction = sort.direction
        self.store.set_filtered(sort_rows(self.store.filtered, column, sort.direction))
        self._recompute()
        return True

    def go_to_page(self, page: int) -> bool:
        if page < 1 or page > self.state.total_pages:
            logger.debug("ignoring page %s (total pages %s)", page, self.state.total_pages)
            return False
        self.state.current_page = page
        return True

    def next_page(self) -> bool:
        return self.go_to_page(self.state.current_page + 1)

    def previous_page(self) -> bool:
        return self.go_to_page(self.state.current_page - 1)

    def set_page_size(self, size: int) -> None:
        self.state.page_size = coerce_page_size(size, self.state.page_size)
        self.state.current_page = 1
        self._recompute()

    def get_state(self) -> TableState:
        return replace(self.state)

    def page_frame(self) -> RowCollection:
        start, end = page_bounds(self.state.current_page, self.state.page_size, self.store.filtered_count)
        return self.store.filtered.iloc[start:end]

    def view(self) -> TableView:
        total = self.store.total_count
        filtered = self.store.filtered_count
        start, end = page_bounds(self.state.current_page, self.state.page_size, filtered)
        page = self.page_frame()
        controls = (
            build_controls(self.state.current_page, self.state.total_pages, self.options.window_size)
            if self.options.pagination
            else []
        )
        return TableView(
            headers=list(self.headers),
            rows=to_rows(page),
            row_ids=[int(i) for i in page.index],
            header_states=header_states(self.column_count, self.sort_state),
            info=info_text(start, end, filtered, total),
            empty_message=empty_message(total) if len(page) == 0 else None,
            controls=controls,
            state=self.get_state(),
            total_count=total,
            filtered_count=filtered,
            column_count=self.column_count,
        )

    def export_frame(self) -> RowCollection:
        """Filtered rows in current order, columns labelled by header text."""
        frame = self.store.filtered.reset_index(drop=True)
        labels = [
            self.headers[idx] if idx < len(self.headers) else str(idx) for idx in range(frame.shape[1])
        ]
        frame.columns = labels
        return frame

    def _refilter(self) -> None:
        filtered = filter_rows(self.store.original, self.state.search_query)
        if self.state.sort_column is not None:
            filtered = sort_rows(filtered, self.state.sort_column, self.state.sort_direction)
        self.store.set_filtered(filtered)

    def _recompute(self) -> None:
        self.state.total_pages = compute_total_pages(self.store.filtered_count, self.state.page_size)
        self.state.current_page = clamp_page(self.state.current_page, self.state.total_pages)
