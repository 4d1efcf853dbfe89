from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np
import pandas as pd
from fastapi import FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from lxml.etree import LxmlError

from api.schemas import CreateTableRequest, RefreshRequest, SearchRequest, TableIdsResponse
from datatable.options import normalize_options
from datatable.registry import DataTableRegistry
from datatable.table import DataTable, parse_document

app = FastAPI(title="Data Table API", version="0.1.0")
logger = logging.getLogger(__name__)

REGISTRY = DataTableRegistry()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
            },
        ),
    )


def _error(exc: Exception, context: str) -> JSONResponse:
    logger.exception("%s failed", context)
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


def _not_found(table_id: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": f"unknown table {table_id!r}"})


def _payload(table_id: str, table: DataTable) -> JSONResponse:
    view = table.view()
    return _json({"table_id": table_id, **(view.to_dict() if view else {})})


@app.post("/tables")
def create_table(request: CreateTableRequest):
    try:
        document = parse_document(request.html)
    except LxmlError as exc:
        return JSONResponse(status_code=400, content={"error": str(exc), "type": type(exc).__name__})
    try:
        options = normalize_options(request.options.model_dump())
        table = REGISTRY.initialize(document, request.table_id, options)
        if table is None:
            return JSONResponse(
                status_code=404,
                content={"error": f"no usable table with id {request.table_id!r}"},
            )
        return _payload(request.table_id.lstrip("#"), table)
    except Exception as exc:
        return _error(exc, "create_table")


@app.get("/tables")
def list_tables():
    return _json(TableIdsResponse(tables=REGISTRY.ids()).model_dump())


@app.get("/tables/{table_id}")
def get_table(table_id: str):
    table = REGISTRY.get(table_id)
    if table is None:
        return _not_found(table_id)
    try:
        return _payload(table_id, table)
    except Exception as exc:
        return _error(exc, "get_table")


@app.post("/tables/{table_id}/search")
def search_table(table_id: str, request: SearchRequest):
    table = REGISTRY.get(table_id)
    if table is None:
        return _not_found(table_id)
    try:
        table.on_search_input(request.query)
        return _payload(table_id, table)
    except Exception as exc:
        return _error(exc, "search_table")


@app.post("/tables/{table_id}/sort")
def sort_table(table_id: str, column: int = Query(...)):
    table = REGISTRY.get(table_id)
    if table is None:
        return _not_found(table_id)
    try:
        table.on_header_click(column)
        return _payload(table_id, table)
    except Exception as exc:
        return _error(exc, "sort_table")


@app.post("/tables/{table_id}/page")
def go_to_page(table_id: str, page: int = Query(...)):
    table = REGISTRY.get(table_id)
    if table is None:
        return _not_found(table_id)
    try:
        table.on_page_click(page)
        return _payload(table_id, table)
    except Exception as exc:
        return _error(exc, "go_to_page")


@app.post("/tables/{table_id}/page-size")
def set_page_size(table_id: str, size: int = Query(...)):
    table = REGISTRY.get(table_id)
    if table is None:
        return _not_found(table_id)
    try:
        table.set_page_size(size)
        return _payload(table_id, table)
    except Exception as exc:
        return _error(exc, "set_page_size")


@app.post("/tables/{table_id}/refresh")
def refresh_table(table_id: str, request: Optional[RefreshRequest] = None):
    table = REGISTRY.get(table_id)
    if table is None:
        return _not_found(table_id)
    try:
        table.refresh(request.html if request and request.html else None)
        return _payload(table_id, table)
    except Exception as exc:
        return _error(exc, "refresh_table")


@app.get("/tables/{table_id}/html")
def table_html(table_id: str):
    table = REGISTRY.get(table_id)
    if table is None:
        return _not_found(table_id)
    return Response(content=table.document_html(), media_type="text/html")


@app.get("/tables/{table_id}/export")
def export_table(table_id: str):
    table = REGISTRY.get(table_id)
    if table is None:
        return _not_found(table_id)
    csv_bytes = table.export_csv().encode("utf-8")
    return Response(
        content=csv_bytes,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={table_id}.csv"},
    )


@app.delete("/tables/{table_id}")
def delete_table(table_id: str):
    if not REGISTRY.destroy(table_id):
        return _not_found(table_id)
    return _json({"deleted": table_id})
