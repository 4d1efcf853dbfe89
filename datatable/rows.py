from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Union

import lxml.html
import pandas as pd
from lxml.etree import LxmlError

Row = List[str]
RowCollection = pd.DataFrame
RowPredicate = Callable[[Row], bool]


def frame_from_rows(rows: Sequence[Sequence[str]]) -> RowCollection:
    """Build a Row Collection; ragged rows are padded with None inside the frame."""
    width = max((len(r) for r in rows), default=0)
    index = pd.RangeIndex(len(rows))
    if width == 0:
        return pd.DataFrame(index=index, columns=pd.RangeIndex(0), dtype=object)
    padded = [list(r) + [None] * (width - len(r)) for r in rows]
    return pd.DataFrame(padded, index=index, columns=pd.RangeIndex(width), dtype=object)


def _trim_padding(values: Sequence[object]) -> Row:
    out = list(values)
    while out and out[-1] is None:
        out.pop()
    return ["" if v is None else str(v) for v in out]


def to_rows(frame: RowCollection) -> List[Row]:
    if frame.shape[1] == 0:
        return [[] for _ in range(len(frame))]
    return [_trim_padding(values) for values in frame.itertuples(index=False, name=None)]


def cell_text(cell) -> str:
    return (cell.text_content() or "").strip()


def _as_table(source) -> Optional[lxml.html.HtmlElement]:
    if isinstance(source, (str, bytes)):
        try:
            doc = lxml.html.document_fromstring(source)
        except LxmlError:
            return None
        tables = doc.xpath("//table")
        return tables[0] if tables else None
    return source


def body_rows(table) -> list:
    return table.xpath("./tbody/tr")


def rows_from_elements(trs: Sequence) -> RowCollection:
    return frame_from_rows([[cell_text(td) for td in tr.xpath("./td")] for tr in trs])


def extract(source: Union[str, bytes, lxml.html.HtmlElement, None]) -> RowCollection:
    """Read `tbody > tr > td` text from a table element or HTML string.

    Header rows are never read; a table without body rows yields an empty
    collection.
    """
    table = _as_table(source) if source is not None else None
    if table is None:
        return frame_from_rows([])
    return rows_from_elements(body_rows(table))


def apply_filter(original: RowCollection, predicate: RowPredicate) -> RowCollection:
    mask = [bool(predicate(row)) for row in to_rows(original)]
    return original.loc[pd.Series(mask, index=original.index, dtype=bool)]


class RowStore:
    """Canonical and filtered row collections for one table instance."""

    def __init__(self, rows: Optional[RowCollection] = None) -> None:
        self.original: RowCollection = rows if rows is not None else frame_from_rows([])
        self.filtered: RowCollection = self.original.copy()

    def capture(self, rows: RowCollection) -> None:
        self.original = rows
        self.filtered = rows.copy()

    def reset_filter(self) -> None:
        self.filtered = self.original.copy()

    def set_filtered(self, frame: RowCollection) -> None:
        self.filtered = frame

    def clear(self) -> None:
        self.capture(frame_from_rows([]))

    @property
    def total_count(self) -> int:
        return len(self.original)

    @property
    def filtered_count(self) -> int:
        return len(self.filtered)

    @property
    def column_count(self) -> int:
        return int(self.original.shape[1])

    def is_filtered(self) -> bool:
        return self.filtered_count != self.total_count
