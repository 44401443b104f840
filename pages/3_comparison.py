"""
Comparison Page - Compare up to five institutions side-by-side.
"""

import streamlit as st

from config.settings import get_settings
from src.data.comparison import COMPARISON_FIELDS, KEY_COMPARISON_FIELDS, comparison_table, differing_fields
from src.data.export import export_filename
from src.data.institutions import get_institution_by_id, get_institutions
from src.viz.charts import create_comparison_chart
from src.viz.sidebar import filtered_institutions

st.set_page_config(
    page_title="Compare - WAC Compare",
    page_icon="⚖️",
    layout="wide",
)

CHART_FIELDS = {
    "Program size": ["writing_intensive_courses", "writing_center_staff", "writing_tutors_available"],
    "Faculty support": ["faculty_workshops_per_year", "wac_faculty_fte", "required_wi_courses"],
}


def main():
    st.title("⚖️ Compare Institutions")

    settings = get_settings()
    max_selected = settings.MAX_COMPARISON_INSTITUTIONS
    institutions = get_institutions()
    results = filtered_institutions(institutions)

    if "compare_ids" not in st.session_state:
        st.session_state.compare_ids = []

    # Keep earlier selections even if the filters now hide them
    options = {inst.id: inst for inst in results}
    for inst_id in st.session_state.compare_ids:
        inst = get_institution_by_id(inst_id, institutions)
        if inst is not None:
            options.setdefault(inst_id, inst)

    selected_ids = st.multiselect(
        f"Select up to {max_selected} institutions:",
        options=list(options),
        default=st.session_state.compare_ids,
        format_func=lambda inst_id: options[inst_id].display_name,
        max_selections=max_selected,
    )
    st.session_state.compare_ids = selected_ids

    if len(selected_ids) < 2:
        st.info("Select at least two institutions to compare.")
        return

    selected = [options[inst_id] for inst_id in selected_ids]

    col1, col2 = st.columns(2)
    with col1:
        show_all = st.checkbox("Show all fields", value=False)
    with col2:
        only_differences = st.checkbox("Only show differences", value=False)

    fields = COMPARISON_FIELDS if show_all else KEY_COMPARISON_FIELDS
    if only_differences:
        fields = differing_fields(selected, fields)

    table = comparison_table(selected, fields)
    st.dataframe(table, width="stretch", hide_index=True)
    st.download_button(
        "Download comparison (CSV)",
        table.to_csv(index=False),
        file_name=export_filename("csv", prefix=f"{settings.EXPORT_FILE_PREFIX}-comparison"),
        mime="text/csv",
    )

    tabs = st.tabs(list(CHART_FIELDS))
    for tab, (title, chart_fields) in zip(tabs, CHART_FIELDS.items()):
        with tab:
            st.plotly_chart(create_comparison_chart(selected, chart_fields, title), width="stretch")

    with st.expander("Program descriptions"):
        for inst in selected:
            st.markdown(f"**{inst.display_name}**")
            st.markdown(inst.program_description or "_No description available._")
            if inst.wac_website_url:
                st.markdown(f"[Program website]({inst.wac_website_url})")


if __name__ == "__main__":
    main()
