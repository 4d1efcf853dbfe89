from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional

from lxml.html import HtmlElement

from datatable.options import DEFAULT_TABLE_ID, TableOptions
from datatable.table import DataTable

logger = logging.getLogger(__name__)


class DataTableRegistry:
    """Caller-owned map from table id to its `DataTable`.

    Every entry owns its own row store and state; nothing is shared between
    tables, even when they live in the same document.
    """

    def __init__(self) -> None:
        self._instances: Dict[str, DataTable] = {}
        self._documents: Dict[str, HtmlElement] = {}
        self._options: Dict[str, TableOptions] = {}

    def initialize(
        self,
        document: HtmlElement,
        table_id: str = DEFAULT_TABLE_ID,
        options: Optional[TableOptions] = None,
    ) -> Optional[DataTable]:
        key = table_id.lstrip("#")
        self.destroy(key)
        table = DataTable.attach(document, key, options=options)
        if table is None:
            return None
        self._instances[key] = table
        self._documents[key] = document
        self._options[key] = table.options
        return table

    def reinitialize(self, table_id: str) -> Optional[DataTable]:
        """Tear down and rebuild one table against its original document."""
        key = table_id.lstrip("#")
        document = self._documents.get(key)
        if document is None:
            return None
        return self.initialize(document, key, self._options.get(key))

    def get(self, table_id: str) -> Optional[DataTable]:
        return self._instances.get(table_id.lstrip("#"))

    def destroy(self, table_id: str) -> bool:
        key = table_id.lstrip("#")
        instance = self._instances.pop(key, None)
        self._documents.pop(key, None)
        self._options.pop(key, None)
        if instance is None:
            return False
        instance.destroy()
        logger.debug("destroyed data table %r", key)
        return True

    def destroy_all(self) -> None:
        for key in list(self._instances):
            self.destroy(key)

    def ids(self) -> List[str]:
        return sorted(self._instances)

    def __contains__(self, table_id: object) -> bool:
        return isinstance(table_id, str) and table_id.lstrip("#") in self._instances

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids())

    def __len__(self) -> int:
        return len(self._instances)
