from __future__ import annotations

from typing import Optional, Sequence

PEOPLE = [["Alice", "30"], ["bob", "5"], ["Carol", "100"]]


def build_html(
    rows: Sequence[Sequence[str]],
    headers: Optional[Sequence[str]] = ("Name", "Age"),
    table_id: str = "dataTable",
    with_body: bool = True,
) -> str:
    head = ""
    if headers is not None:
        head = "<thead><tr>" + "".join(f"<th>{h}</th>" for h in headers) + "</tr></thead>"
    body = ""
    if with_body:
        body = "<tbody>" + "".join(
            "<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>" for row in rows
        ) + "</tbody>"
    return f'<table id="{table_id}">{head}{body}</table>'


def build_document(*tables: str) -> str:
    return "<html><head><title>t</title></head><body>" + "".join(tables) + "</body></html>"


def numbered_rows(count: int) -> list:
    return [[f"Person {i:02d}", str(20 + i)] for i in range(1, count + 1)]
