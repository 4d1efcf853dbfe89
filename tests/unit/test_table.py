from __future__ import annotations

import lxml.html
import pytest

from datatable.options import TableOptions
from datatable.table import STYLE_ID, DataTable, find_table, parse_document
from datatable.view import NO_DATA_MESSAGE, NO_MATCHES_MESSAGE
from tests.helpers import build_document, build_html, numbered_rows


def attach(html: str, table_id: str = "dataTable", **kwargs):
    document = parse_document(html)
    return document, DataTable.attach(document, table_id, **kwargs)


def body_texts(table: DataTable):
    return [[td.text_content() for td in tr.xpath("./td")] for tr in table.element.xpath("./tbody/tr")]


class RecordingRenderer:
    def __init__(self) -> None:
        self.views = []

    def render(self, view) -> None:
        self.views.append(view)


class TestAttach:
    def test_missing_table_is_not_an_error(self) -> None:
        _, table = attach(build_document("<p>no table</p>"))
        assert table is None

    def test_find_table_accepts_selector_style_ids(self) -> None:
        document = parse_document(build_document(build_html([])))
        assert find_table(document, "#dataTable") is not None
        assert find_table(document, "other") is None

    @pytest.mark.parametrize(
        "html",
        [
            build_document(build_html([["a", "1"]], with_body=False)),
            build_document(build_html([["a", "1"]], headers=None)),
        ],
    )
    def test_missing_body_or_header_leaves_table_alone(self, html) -> None:
        document, table = attach(html)
        assert table is None
        assert not document.xpath("//div[contains(@class, 'datatable-wrapper')]")

    def test_uninitialized_instance_ignores_operations(self) -> None:
        document = parse_document(build_document(build_html([["a", "1"]], with_body=False)))
        table = DataTable(find_table(document))
        table.search("a")
        table.sort(0)
        table.go_to_page(2)
        assert not table.is_initialized
        assert table.get_state() is None
        assert table.export_csv() == ""


class TestControls:
    def test_wraps_table_with_controls(self, people) -> None:
        document, table = attach(build_document(build_html(people)))
        wrapper = table.wrapper
        assert wrapper.get("class") == "datatable-wrapper"
        assert wrapper.xpath(".//input[@placeholder='Search...']")
        assert wrapper.xpath(".//div[@class='datatable-info']")
        assert wrapper.xpath("./div[@class='datatable-pagination']")
        assert table.element.getparent().get("class") == "table-responsive"
        assert table.element.get("class") == "table table-striped table-bordered table-hover"

    def test_options_switch_controls_off(self, people) -> None:
        options = TableOptions(searchable=False, pagination=False, responsive=False, striped=False)
        _, table = attach(build_document(build_html(people)), options=options)
        assert table.search_input is None
        assert table.pagination_element is None
        assert table.element.getparent() is table.wrapper
        assert table.element.get("class") == "table table-bordered table-hover"

    def test_host_classes_are_kept_and_restored(self, people) -> None:
        html = build_html(people).replace("<table ", '<table class="report wide" ')
        _, table = attach(build_document(html))
        assert table.element.get("class") == "report wide table table-striped table-bordered table-hover"
        table.destroy()
        assert table.element.get("class") == "report wide"

    def test_destroy_drops_added_classes(self, people) -> None:
        _, table = attach(build_document(build_html(people)))
        table.destroy()
        assert table.element.get("class") is None

    def test_styles_injected_once_per_document(self, people) -> None:
        html = build_document(build_html(people, table_id="a"), build_html(people, table_id="b"))
        document = parse_document(html)
        assert DataTable.attach(document, "a") is not None
        assert DataTable.attach(document, "b") is not None
        assert len(document.xpath(f"//head/style[@id='{STYLE_ID}']")) == 1

    def test_headers_get_sort_attributes(self, people) -> None:
        _, table = attach(build_document(build_html(people)))
        th = table.element.xpath("./thead/tr/th")[1]
        assert "datatable-sort" in th.classes
        assert th.get("role") == "button"
        assert th.get("aria-label") == "Sort by Age"


class TestRendering:
    def test_first_page_and_pagination(self) -> None:
        _, table = attach(build_document(build_html(numbered_rows(23))))
        assert len(body_texts(table)) == 10
        assert table.info_element.text == "Showing 1 to 10 of 23 entries"
        buttons = table.pagination_element.xpath("./button")
        assert [b.text for b in buttons] == ["Previous", "1", "2", "3", "Next"]
        assert buttons[0].get("disabled") == "disabled"
        assert buttons[1].get("class") == "active"

    def test_last_page(self) -> None:
        _, table = attach(build_document(build_html(numbered_rows(23))))
        table.on_page_click(3)
        assert len(body_texts(table)) == 3
        buttons = table.pagination_element.xpath("./button")
        assert buttons[0].get("disabled") is None
        assert buttons[-1].get("disabled") == "disabled"

    def test_header_click_sorts_and_marks_one_header(self, people) -> None:
        _, table = attach(build_document(build_html(people)))
        table.on_header_click(1)
        assert body_texts(table) == [["bob", "5"], ["Alice", "30"], ["Carol", "100"]]
        name_th, age_th = table.element.xpath("./thead/tr/th")
        assert "asc" in age_th.classes and age_th.get("aria-sort") == "ascending"
        table.on_header_click(0)
        assert "asc" not in age_th.classes and age_th.get("aria-sort") is None
        assert "asc" in name_th.classes

    def test_search_without_matches_shows_placeholder(self, people) -> None:
        _, table = attach(build_document(build_html(people)))
        table.on_search_input("zzz")
        cells = table.element.xpath("./tbody/tr/td")
        assert len(cells) == 1
        assert cells[0].text == NO_MATCHES_MESSAGE
        assert cells[0].get("colspan") == "2"
        assert cells[0].get("class") == "datatable-no-results"
        assert table.search_input.get("value") == "zzz"
        assert table.info_element.text == "No entries to show"

    def test_empty_source_shows_no_data(self) -> None:
        _, table = attach(build_document(build_html([])))
        cells = table.element.xpath("./tbody/tr/td")
        assert [c.text for c in cells] == [NO_DATA_MESSAGE]
        assert len(table.pagination_element) == 0

    def test_custom_renderer_receives_views(self, people) -> None:
        renderer = RecordingRenderer()
        _, table = attach(build_document(build_html(people)), renderer=renderer)
        table.search("bob")
        table.go_to_page(5)
        assert len(renderer.views) == 2
        assert renderer.views[-1].rows == [["bob", "5"]]
        assert body_texts(table) == people

    def test_export_csv_follows_filtered_order(self, people) -> None:
        _, table = attach(build_document(build_html(people)))
        table.sort(1)
        lines = table.export_csv().splitlines()
        assert lines == ["Name,Age", "bob,5", "Alice,30", "Carol,100"]

    def test_to_html_contains_rendered_rows(self, people) -> None:
        _, table = attach(build_document(build_html(people)))
        html = table.to_html()
        assert "datatable-wrapper" in html
        assert "Carol" in html


class TestLifecycle:
    def test_destroy_restores_rows_and_unwraps(self) -> None:
        document, table = attach(build_document(build_html(numbered_rows(23))))
        table.destroy()
        assert not table.is_initialized
        assert table.element.getparent().tag == "body"
        assert len(table.element.xpath("./tbody/tr")) == 23
        assert not document.xpath("//div[contains(@class, 'datatable-wrapper')]")

    def test_refresh_without_source_recaptures_initial_rows(self) -> None:
        _, table = attach(build_document(build_html(numbered_rows(23))))
        table.go_to_page(3)
        table.refresh()
        state = table.get_state()
        assert state.current_page == 1
        assert table.view().total_count == 23

    def test_refresh_with_new_markup(self, people) -> None:
        _, table = attach(build_document(build_html(numbered_rows(23))))
        table.go_to_page(2)
        table.refresh(build_html(people))
        assert table.get_state().current_page == 1
        assert body_texts(table) == people
        table.destroy()
        assert len(table.element.xpath("./tbody/tr")) == 3

    def test_refresh_with_parsed_document(self, people) -> None:
        _, table = attach(build_document(build_html(numbered_rows(23))))
        table.refresh(parse_document(build_document(build_html(people))))
        assert body_texts(table) == people

    def test_clear(self, people) -> None:
        _, table = attach(build_document(build_html(people)))
        table.clear()
        assert [td.text for td in table.element.xpath("./tbody/tr/td")] == [NO_DATA_MESSAGE]

    def test_instances_do_not_share_state(self, people) -> None:
        html = build_document(build_html(people, table_id="a"), build_html(numbered_rows(23), table_id="b"))
        document = parse_document(html)
        first = DataTable.attach(document, "a")
        second = DataTable.attach(document, "b")
        first.search("bob")
        second.go_to_page(2)
        assert first.get_state().current_page == 1
        assert second.get_state().search_query == ""
        assert second.view().filtered_count == 23

    def test_document_html_round_trips(self, people) -> None:
        _, table = attach(build_document(build_html(people)))
        reparsed = lxml.html.document_fromstring(table.document_html())
        assert reparsed.xpath("//table[@id='dataTable']")
