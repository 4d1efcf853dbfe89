from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class TableOptionsModel(BaseModel):
    sortable: bool = True
    searchable: bool = True
    pagination: bool = True
    page_size: int = 10
    window_size: int = 5
    responsive: bool = True
    striped: bool = True
    bordered: bool = True
    hover: bool = True


class CreateTableRequest(BaseModel):
    html: str
    table_id: str = "dataTable"
    options: TableOptionsModel = Field(default_factory=TableOptionsModel)


class SearchRequest(BaseModel):
    query: str = ""


class RefreshRequest(BaseModel):
    html: Optional[str] = None


class TableIdsResponse(BaseModel):
    tables: List[str]
