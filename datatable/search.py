from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd

from datatable.rows import RowCollection


def normalize_query(query: Optional[str]) -> str:
    return (query or "").strip().lower()


def row_matches(row: Sequence[object], query: Optional[str]) -> bool:
    term = normalize_query(query)
    if not term:
        return True
    return any(term in str(cell).lower() for cell in row if cell is not None)


def search_mask(frame: RowCollection, query: Optional[str]) -> pd.Series:
    """Boolean mask of rows where any cell contains the query (case-insensitive, literal)."""
    term = normalize_query(query)
    if not term:
        return pd.Series(True, index=frame.index, dtype=bool)
    if frame.shape[1] == 0 or frame.empty:
        return pd.Series(False, index=frame.index, dtype=bool)
    hits = pd.DataFrame(
        {
            col: frame[col].astype("string").str.lower().str.contains(term, regex=False, na=False)
            for col in frame.columns
        },
        index=frame.index,
    )
    return hits.any(axis=1).astype(bool)


def filter_rows(original: RowCollection, query: Optional[str]) -> RowCollection:
    """Derive the filtered collection from the full original set.

    An empty or whitespace-only query returns a copy of `original`.
    """
    if not normalize_query(query):
        return original.copy()
    return original.loc[search_mask(original, query)]

