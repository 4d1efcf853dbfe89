from __future__ import annotations

import math
import re
import unicodedata
import warnings
from dataclasses import dataclass
from functools import cmp_to_key
from typing import List, Literal, Optional, Tuple

import numpy as np
import pandas as pd

from datatable.rows import RowCollection

SortDirection = Literal["asc", "desc"]

ASC: SortDirection = "asc"
DESC: SortDirection = "desc"


@dataclass(frozen=True)
class SortState:
    column: Optional[int] = None
    direction: SortDirection = ASC


def toggle_sort(state: SortState, column: int) -> SortState:
    """Same column flips direction; a new column starts ascending."""
    if state.column == column:
        return SortState(column=column, direction=DESC if state.direction == ASC else ASC)
    return SortState(column=column, direction=ASC)


def header_states(column_count: int, state: SortState) -> List[Optional[SortDirection]]:
    return [state.direction if idx == state.column else None for idx in range(column_count)]


_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")

# pandas resolves these against the wall clock
_RELATIVE_DATE_WORDS = frozenset({"now", "today"})


def parse_number(value: object) -> float:
    """Leading-number parse: "30" -> 30.0, "45%" -> 45.0, "abc" -> nan."""
    if value is None:
        return np.nan
    match = _LEADING_NUMBER.match(str(value))
    if match is None:
        return np.nan
    return float(match.group(1))


def parse_date(value: object) -> Optional[int]:
    """Elapsed nanoseconds since the epoch (UTC), or None when not a date."""
    if value is None:
        return None
    text = str(value).strip()
    if not text or text.casefold() in _RELATIVE_DATE_WORDS:
        return None
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UserWarning)
            ts = pd.to_datetime(text, errors="coerce", dayfirst=False)
    except (ValueError, TypeError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    return int(ts.value)


def _collation_key(value: str) -> Tuple[str, str]:
    decomposed = unicodedata.normalize("NFKD", value)
    primary = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    # lowercase sorts before uppercase on otherwise equal strings
    return primary, value.swapcase()


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def collate(a: str, b: str) -> int:
    ka, kb = _collation_key(a), _collation_key(b)
    return (ka > kb) - (ka < kb)


def compare_cells(a: object, b: object) -> int:
    """Numeric, then date, then string comparison of two cell values."""
    a_text = "" if a is None else str(a)
    b_text = "" if b is None else str(b)
    return _compare_keys(
        (parse_number(a_text), parse_date(a_text), a_text),
        (parse_number(b_text), parse_date(b_text), b_text),
    )


def _compare_keys(a: Tuple[float, Optional[int], str], b: Tuple[float, Optional[int], str]) -> int:
    a_num, a_date, a_text = a
    b_num, b_date, b_text = b
    if not (math.isnan(a_num) or math.isnan(b_num)):
        return (a_num > b_num) - (a_num < b_num)
    if a_date is not None and b_date is not None:
        return _sign(a_date - b_date)
    return collate(a_text, b_text)


def _column_keys(frame: RowCollection, column: int) -> List[Tuple[float, Optional[int], str]]:
    if column in frame.columns:
        texts = ["" if v is None else str(v) for v in frame[column].tolist()]
    else:
        texts = [""] * len(frame)
    numbers = pd.Series(texts, dtype=object).map(parse_number).tolist()
    dates = [parse_date(t) for t in texts]
    return list(zip(numbers, dates, texts))


def sort_rows(frame: RowCollection, column: int, direction: SortDirection = ASC) -> RowCollection:
    """Stable sort of `frame` by one column; keys are parsed once per pass."""
    if len(frame) < 2:
        return frame
    keys = _column_keys(frame, column)
    sign = 1 if direction == ASC else -1

    def _cmp(i: int, j: int) -> int:
        return sign * _compare_keys(keys[i], keys[j])

    order = sorted(range(len(frame)), key=cmp_to_key(_cmp))
    return frame.iloc[order]
