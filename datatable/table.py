from __future__ import annotations

import copy
import logging
from typing import List, Optional, Union

import lxml.html
from lxml.etree import SubElement
from lxml.html import HtmlElement

from datatable.engine import TableEngine
from datatable.options import DEFAULT_TABLE_ID, TableOptions
from datatable.render import HtmlTableRenderer, Renderer, clear_children
from datatable.rows import cell_text, extract, rows_from_elements
from datatable.view import TableState, TableView

logger = logging.getLogger(__name__)

STYLE_ID = "datatable-styles"

DATATABLE_CSS = """
.datatable-wrapper { margin: 20px 0; }
.datatable-top-controls { display: flex; justify-content: space-between; align-items: center;
  margin-bottom: 15px; flex-wrap: wrap; gap: 10px; }
.datatable-search { display: flex; align-items: center; gap: 8px; }
.datatable-search input { width: 250px; padding: 6px 12px; border: 1px solid var(--c-border, #dee2e6);
  border-radius: 4px; font-size: 14px; }
.datatable-info { color: var(--c-text-muted, #6c757d); font-size: 14px; margin: 0; }
.datatable-pagination { margin-top: 15px; display: flex; justify-content: center; align-items: center;
  gap: 4px; flex-wrap: wrap; }
.datatable-pagination button { background: var(--c-bkg-card, #fff); border: 1px solid var(--c-border, #dee2e6);
  padding: 8px 12px; border-radius: 4px; min-width: 40px; cursor: pointer; }
.datatable-pagination button.active { background: var(--c-primary, #007bff); color: white; }
.datatable-pagination button:disabled { opacity: 0.6; cursor: not-allowed; }
.datatable-sort { cursor: pointer; user-select: none; position: relative; padding-right: 20px !important; }
.datatable-sort::after { content: '\\2195'; position: absolute; right: 8px; opacity: 0.5; font-size: 12px; }
.datatable-sort.asc::after { content: '\\2191'; opacity: 1; }
.datatable-sort.desc::after { content: '\\2193'; opacity: 1; }
.datatable-no-results { text-align: center; color: var(--c-text-muted, #6c757d); font-style: italic; padding: 20px; }
"""

Source = Union[str, bytes, HtmlElement]


def parse_document(html: Union[str, bytes]) -> HtmlElement:
    return lxml.html.document_fromstring(html)


def find_table(document: HtmlElement, table_id: str = DEFAULT_TABLE_ID) -> Optional[HtmlElement]:
    """Look up a `<table>` by id; accepts "dataTable" or "#dataTable"."""
    matches = document.xpath("//table[@id=$tid]", tid=table_id.lstrip("#"))
    return matches[0] if matches else None


def header_cells(table: HtmlElement) -> List[HtmlElement]:
    return table.xpath("./thead/tr[1]/th")


class DataTable:
    """Search, sort and pagination bound to one host `<table>` element.

    The table must have a `<thead>` row of `<th>` cells and a `<tbody>`;
    otherwise the instance stays uninitialized and every operation is a
    no-op.
    """

    def __init__(
        self,
        element: HtmlElement,
        options: Optional[TableOptions] = None,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self.element = element
        self.options = options or TableOptions()
        self.is_initialized = False
        self.engine: Optional[TableEngine] = None
        self.renderer: Optional[Renderer] = None
        self.wrapper: Optional[HtmlElement] = None
        self.search_input: Optional[HtmlElement] = None
        self.info_element: Optional[HtmlElement] = None
        self.pagination_element: Optional[HtmlElement] = None
        self._custom_renderer = renderer
        self._body_snapshot: List[HtmlElement] = []
        self._host_class = element.get("class")
        self.init()

    @classmethod
    def attach(
        cls,
        document: HtmlElement,
        table_id: str = DEFAULT_TABLE_ID,
        options: Optional[TableOptions] = None,
        renderer: Optional[Renderer] = None,
    ) -> Optional["DataTable"]:
        table = find_table(document, table_id)
        if table is None:
            logger.warning("no table with id %r; data table not initialized", table_id)
            return None
        instance = cls(table, options=options, renderer=renderer)
        return instance if instance.is_initialized else None

    def init(self) -> None:
        if self.is_initialized:
            return
        tbody = self.element.find("tbody")
        headers = header_cells(self.element)
        if tbody is None or not headers:
            logger.warning(
                "table %r has no %s; data table not initialized",
                self.element.get("id"),
                "tbody" if tbody is None else "header row",
            )
            return

        self._body_snapshot = [copy.deepcopy(tr) for tr in tbody]
        self.engine = TableEngine(
            extract(self.element),
            headers=[cell_text(th) for th in headers],
            options=self.options,
        )
        self._create_controls()
        self._apply_styles()
        if self.options.sortable:
            self._bind_headers(headers)
        self.renderer = self._custom_renderer or HtmlTableRenderer(
            tbody,
            headers=headers,
            info=self.info_element,
            pagination=self.pagination_element,
            search_input=self.search_input,
        )
        self.is_initialized = True
        self.render()

    def destroy(self) -> None:
        """Put the original body rows back and unwrap the table."""
        if not self.is_initialized:
            return
        tbody = self.element.find("tbody")
        if tbody is not None:
            clear_children(tbody)
            for tr in self._body_snapshot:
                tbody.append(copy.deepcopy(tr))
        if self.wrapper is not None:
            parent = self.wrapper.getparent()
            if parent is not None:
                position = parent.index(self.wrapper)
                self.element.getparent().remove(self.element)
                parent.remove(self.wrapper)
                parent.insert(position, self.element)
        if self._host_class is None:
            self.element.attrib.pop("class", None)
        else:
            self.element.set("class", self._host_class)
        self.wrapper = None
        self.search_input = None
        self.info_element = None
        self.pagination_element = None
        self.renderer = None
        self.engine = None
        self.is_initialized = False

    # -- controls ---------------------------------------------------------

    def _create_controls(self) -> None:
        wrapper = lxml.html.Element("div")
        wrapper.set("class", "datatable-wrapper")
        top = SubElement(wrapper, "div")
        top.set("class", "datatable-top-controls")

        if self.options.searchable:
            search = SubElement(top, "div")
            search.set("class", "datatable-search")
            label = SubElement(search, "label")
            label.text = "Search: "
            self.search_input = SubElement(label, "input")
            self.search_input.set("type", "text")
            self.search_input.set("class", "form-control")
            self.search_input.set("placeholder", "Search...")

        if self.options.pagination:
            self.info_element = SubElement(top, "div")
            self.info_element.set("class", "datatable-info")

        parent = self.element.getparent()
        if parent is not None:
            parent.insert(parent.index(self.element), wrapper)
        wrapper.append(self.element)

        if self.options.pagination:
            self.pagination_element = SubElement(wrapper, "div")
            self.pagination_element.set("class", "datatable-pagination")
        self.wrapper = wrapper

    def _apply_styles(self) -> None:
        classes = ["table"]
        if self.options.striped:
            classes.append("table-striped")
        if self.options.bordered:
            classes.append("table-bordered")
        if self.options.hover:
            classes.append("table-hover")
        if self.options.responsive:
            responsive = lxml.html.Element("div")
            responsive.set("class", "table-responsive")
            parent = self.element.getparent()
            parent.insert(parent.index(self.element), responsive)
            responsive.append(self.element)
        for name in classes:
            self.element.classes.add(name)
        self._inject_styles()

    def _inject_styles(self) -> None:
        root = self.element.getroottree().getroot()
        if root.xpath("//style[@id=$sid]", sid=STYLE_ID):
            return
        head = root.find("head")
        if head is None:
            return
        style = SubElement(head, "style")
        style.set("id", STYLE_ID)
        style.text = DATATABLE_CSS

    def _bind_headers(self, headers: List[HtmlElement]) -> None:
        for idx, th in enumerate(headers):
            th.classes.add("datatable-sort")
            th.set("data-column", str(idx))
            th.set("tabindex", "0")
            th.set("role", "button")
            th.set("aria-label", f"Sort by {cell_text(th)}")

    # -- operations -------------------------------------------------------

    def render(self) -> None:
        if self.is_initialized:
            self.renderer.render(self.engine.view())

    def search(self, query: Optional[str]) -> None:
        if self.is_initialized:
            self.engine.search(query)
            self.render()

    def sort(self, column: int) -> None:
        if self.is_initialized and self.engine.sort(column):
            self.render()

    def go_to_page(self, page: int) -> None:
        if self.is_initialized and self.engine.go_to_page(page):
            self.render()

    def next_page(self) -> None:
        if self.is_initialized and self.engine.next_page():
            self.render()

    def previous_page(self) -> None:
        if self.is_initialized and self.engine.previous_page():
            self.render()

    def set_page_size(self, size: int) -> None:
        if self.is_initialized:
            self.engine.set_page_size(size)
            self.render()

    def refresh(self, source: Optional[Source] = None) -> None:
        """Recapture the original rows and go back to page 1.

        With no `source`, the body rows the table was initialized with are
        read again; otherwise the body rows of `source` replace them.
        """
        if not self.is_initialized:
            return
        if source is not None:
            if isinstance(source, (str, bytes)):
                source = parse_document(source)
            table = source if source.tag == "table" else source.find(".//table")
            if table is not None and table.find("tbody") is not None:
                self._body_snapshot = [copy.deepcopy(tr) for tr in table.find("tbody")]
            else:
                self._body_snapshot = []
        self.engine.load(rows_from_elements(self._body_snapshot))
        self.render()

    def clear(self) -> None:
        if self.is_initialized:
            self.engine.clear()
            self.render()

    # -- UI event entry points ---------------------------------------------

    def on_search_input(self, value: str) -> None:
        if self.options.searchable:
            self.search(value)

    def on_header_click(self, column: int) -> None:
        if self.options.sortable:
            self.sort(column)

    def on_page_click(self, page: int) -> None:
        self.go_to_page(page)

    # -- read side ----------------------------------------------------------

    def get_state(self) -> Optional[TableState]:
        return self.engine.get_state() if self.is_initialized else None

    def view(self) -> Optional[TableView]:
        return self.engine.view() if self.is_initialized else None

    def to_html(self) -> str:
        return lxml.html.tostring(self.wrapper if self.wrapper is not None else self.element, encoding="unicode")

    def document_html(self) -> str:
        return lxml.html.tostring(self.element.getroottree(), encoding="unicode")

    def export_csv(self) -> str:
        if not self.is_initialized:
            return ""
        return self.engine.export_frame().to_csv(index=False)
