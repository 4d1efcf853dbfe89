from __future__ import annotations

from typing import List, Optional, Protocol

from lxml.etree import SubElement
from lxml.html import HtmlElement

from datatable.view import TableView

SORT_CLASSES = ("asc", "desc")
ARIA_SORT = {"asc": "ascending", "desc": "descending"}


class Renderer(Protocol):
    def render(self, view: TableView) -> None: ...


def clear_children(element: HtmlElement) -> None:
    for child in list(element):
        element.remove(child)
    element.text = None


class HtmlTableRenderer:
    """Writes a `TableView` into an lxml host table and its sibling controls."""

    def __init__(
        self,
        tbody: HtmlElement,
        headers: Optional[List[HtmlElement]] = None,
        info: Optional[HtmlElement] = None,
        pagination: Optional[HtmlElement] = None,
        search_input: Optional[HtmlElement] = None,
    ) -> None:
        self.tbody = tbody
        self.headers = headers or []
        self.info = info
        self.pagination = pagination
        self.search_input = search_input

    def render(self, view: TableView) -> None:
        self._render_body(view)
        self._render_headers(view)
        if self.pagination is not None:
            self._render_pagination(view)
        if self.info is not None:
            self.info.text = view.info
        if self.search_input is not None:
            self.search_input.set("value", view.state.search_query)

    def _render_body(self, view: TableView) -> None:
        clear_children(self.tbody)
        if not view.rows:
            tr = SubElement(self.tbody, "tr")
            td = SubElement(tr, "td")
            td.set("colspan", str(max(1, len(self.headers) or view.column_count)))
            td.set("class", "datatable-no-results")
            td.text = view.empty_message or ""
            return
        for row, row_id in zip(view.rows, view.row_ids):
            tr = SubElement(self.tbody, "tr")
            tr.set("data-row", str(row_id))
            for value in row:
                td = SubElement(tr, "td")
                td.text = value

    def _render_headers(self, view: TableView) -> None:
        for idx, th in enumerate(self.headers):
            for cls in SORT_CLASSES:
                th.classes.discard(cls)
            direction = view.header_states[idx] if idx < len(view.header_states) else None
            if direction:
                th.classes.add(direction)
                th.set("aria-sort", ARIA_SORT[direction])
            elif "aria-sort" in th.attrib:
                del th.attrib["aria-sort"]

    def _render_pagination(self, view: TableView) -> None:
        clear_children(self.pagination)
        for control in view.controls:
            if control.kind == "ellipsis":
                span = SubElement(self.pagination, "span")
                span.set("class", "pagination-ellipsis")
                span.text = control.label
                continue
            button = SubElement(self.pagination, "button")
            button.set("type", "button")
            button.set("data-kind", control.kind)
            button.set("data-page", str(control.page))
            button.text = control.label
            if control.active:
                button.set("class", "active")
            if control.disabled:
                button.set("disabled", "disabled")
