from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional

import streamlit as st

from datatable.options import DEFAULT_TABLE_ID, normalize_options
from datatable.registry import DataTableRegistry
from datatable.table import DataTable, parse_document

DATA_DIR = Path(__file__).resolve().parent
FILE_GLOB = "*.html"
PAGE_SIZE_CHOICES = [5, 10, 25, 50, 100]


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;}
        .datatable-no-results {text-align: center;color: #6c757d;font-style: italic;padding: 20px;}
        .datatable-sort.asc {color: #2563eb;}
        .datatable-sort.desc {color: #2563eb;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def get_source_files() -> List[Path]:
    return sorted(DATA_DIR.glob(FILE_GLOB))


def get_registry() -> DataTableRegistry:
    if "registry" not in st.session_state:
        st.session_state["registry"] = DataTableRegistry()
    return st.session_state["registry"]


def load_table(html: str, table_id: str, page_size: int) -> Optional[DataTable]:
    registry = get_registry()
    document = parse_document(html)
    return registry.initialize(document, table_id, normalize_options({"page_size": page_size}))


def header_label(label: str, direction: Optional[str]) -> str:
    arrow = {"asc": " ↑", "desc": " ↓"}.get(direction or "", " ↕")
    return f"{label}{arrow}"


# ---------- UI setup ----------
st.set_page_config(page_title="Data Table Explorer", layout="wide")
inject_base_styles()
st.title("Data Table Explorer")
st.caption("Search, sort and page through the rows of any HTML table.")

with st.sidebar:
    st.markdown("### Source")
    files = get_source_files()
    uploaded = st.file_uploader("Upload an HTML page", type=["html", "htm"])
    chosen = st.selectbox("Or pick a file next to app.py", options=files, format_func=lambda p: p.name) if files else None
    table_id = st.text_input("Table id", DEFAULT_TABLE_ID)
    page_size = st.selectbox("Rows per page", PAGE_SIZE_CHOICES, index=1)
    load_clicked = st.button("Load table")

source_key = (getattr(uploaded, "name", None), str(chosen) if chosen else None, table_id)
if load_clicked or st.session_state.get("_source_key") != source_key:
    html = uploaded.getvalue().decode("utf-8") if uploaded is not None else (chosen.read_text(encoding="utf-8") if chosen else "")
    st.session_state["_source_key"] = source_key
    if not html.strip():
        st.info("Upload an HTML page or place one next to app.py.")
        st.stop()
    if load_table(html, table_id, page_size) is None:
        st.error(f"No table with id '{table_id}' (with a header row and body) found in this page.")
        st.stop()

table = get_registry().get(table_id)
if table is None:
    st.stop()

state = table.get_state()
if state.page_size != page_size:
    table.set_page_size(page_size)

with card("Rows"):
    query = st.text_input("Search", value=table.get_state().search_query, placeholder="Search...")
    if query != table.get_state().search_query:
        table.on_search_input(query)

    view = table.view()
    header_cols = st.columns(max(1, len(view.headers)))
    for idx, (col, label) in enumerate(zip(header_cols, view.headers)):
        if col.button(header_label(label, view.header_states[idx]), key=f"sort-{idx}"):
            table.on_header_click(idx)
            st.rerun()

    st.markdown(table.to_html(), unsafe_allow_html=True)
    st.caption(view.info)

    if view.controls:
        control_cols = st.columns(len(view.controls))
        for idx, (col, control) in enumerate(zip(control_cols, view.controls)):
            if control.kind == "ellipsis":
                col.markdown("…")
                continue
            label = f"**{control.label}**" if control.active else control.label
            if col.button(label, key=f"page-{idx}-{control.label}", disabled=control.disabled):
                table.on_page_click(control.page)
                st.rerun()

    st.download_button(
        "Export CSV",
        data=table.export_csv().encode("utf-8"),
        file_name=f"{table_id}.csv",
        mime="text/csv",
    )
