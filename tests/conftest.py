from __future__ import annotations

from typing import Callable, Sequence

import pytest

from tests.helpers import PEOPLE, build_document, build_html


@pytest.fixture()
def people() -> list:
    return [list(r) for r in PEOPLE]


@pytest.fixture()
def make_document() -> Callable[..., str]:
    def _make(rows: Sequence[Sequence[str]], **kwargs) -> str:
        return build_document(build_html(rows, **kwargs))

    return _make
