"""
Table Page - Sortable institution table with CSV and JSON export.
"""

import pandas as pd
import streamlit as st

from config.settings import get_settings
from src.data.export import MIME_TYPES, export_filename, to_csv, to_json
from src.data.fields import FIELDS, COORDINATES, format_field_value, get_field_label
from src.data.institutions import get_institutions
from src.data.models import SortSpecification
from src.data.sorting import sort_institutions, toggle_sort
from src.viz.sidebar import filtered_institutions

st.set_page_config(
    page_title="Table - WAC Compare",
    page_icon="📋",
    layout="wide",
)

TABLE_FIELDS = [
    "name",
    "state",
    "institution_type",
    "carnegie_classification",
    "total_enrollment",
    "has_wac_program",
    "wac_program_established",
    "wac_budget",
    "writing_intensive_courses",
    "has_writing_center",
    "writing_center_staff",
]

SORTABLE_FIELDS = [field for field, meta in FIELDS.items() if meta["kind"] != COORDINATES]


def main():
    st.title("📋 Institution Table")

    settings = get_settings()
    results = filtered_institutions(get_institutions())

    if "sort_spec" not in st.session_state:
        st.session_state.sort_spec = SortSpecification()

    col1, col2 = st.columns([3, 1])
    with col1:
        current = st.session_state.sort_spec
        field = st.selectbox(
            "Sort by:",
            options=SORTABLE_FIELDS,
            index=SORTABLE_FIELDS.index(current.field),
            format_func=get_field_label,
        )
        if field != current.field:
            st.session_state.sort_spec = toggle_sort(current, field)
    with col2:
        st.write("")
        arrow = "▲ Ascending" if st.session_state.sort_spec.direction == "asc" else "▼ Descending"
        if st.button(arrow, width="stretch"):
            st.session_state.sort_spec = toggle_sort(st.session_state.sort_spec, field)
            st.rerun()

    ordered = sort_institutions(results, st.session_state.sort_spec)

    if not ordered:
        st.info("No institutions match the current filters.")
        return

    table_df = pd.DataFrame(
        [{get_field_label(f): format_field_value(f, getattr(inst, f)) for f in TABLE_FIELDS} for inst in ordered]
    )
    st.dataframe(table_df, width="stretch", hide_index=True)
    st.caption(f"{len(ordered)} institutions · missing values are listed last")

    st.subheader("Export")
    exp1, exp2 = st.columns(2)
    with exp1:
        st.download_button(
            "Download CSV",
            to_csv(ordered),
            file_name=export_filename("csv", prefix=settings.EXPORT_FILE_PREFIX),
            mime=MIME_TYPES["csv"],
        )
    with exp2:
        st.download_button(
            "Download JSON",
            to_json(ordered),
            file_name=export_filename("json", prefix=settings.EXPORT_FILE_PREFIX),
            mime=MIME_TYPES["json"],
        )


if __name__ == "__main__":
    main()
