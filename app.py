"""
WAC Compare

Explore Writing Across the Curriculum programs at US colleges and
universities: filter, compare, chart, export, and ask questions.
"""

import logging

import streamlit as st

from src.data.institutions import DatasetError, get_institutions
from src.data.statistics import calculate_statistics
from src.viz.charts import create_institution_map
from src.viz.sidebar import filtered_institutions

logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="WAC Compare",
    page_icon="✍️",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_data(show_spinner=False)
def _get_dataset_stats():
    """Statistics over the full dataset, computed once per session."""
    return calculate_statistics(get_institutions(), include_metadata=True)


def main():
    try:
        institutions = get_institutions()
    except DatasetError as e:
        logger.error("Dataset failed to load: %s", e)
        st.error(f"The institution dataset could not be loaded: {e}")
        return

    st.title("WAC Compare")

    st.markdown(
        """
        Explore Writing Across the Curriculum (WAC) programs and writing support
        at institutions across the United States.

        ### Getting Started

        Use the sidebar filters on any page, then navigate between pages:

        1. **Table** - Sortable institution table with CSV and JSON export
        2. **Charts** - Distributions of type, classification, enrollment, and budgets
        3. **Comparison** - Compare up to 5 institutions side-by-side
        4. **Chat** - Ask questions about the dataset using AI
        """
    )

    dataset = _get_dataset_stats()
    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric(label="Institutions", value=dataset.total_institutions)
        st.caption(f"{dataset.metadata.ground_truth.states_represented} states represented")

    with col2:
        st.metric(label="WAC Programs", value=dataset.with_wac_programs)
        st.caption(f"{dataset.wac_program_percentage} of institutions")

    with col3:
        st.metric(label="Writing Centers", value=dataset.with_writing_centers)
        st.caption(f"{dataset.writing_center_percentage} of institutions")

    with col4:
        st.metric(label="Avg. WAC Budget", value=f"${dataset.average_wac_budget:,.0f}")
        st.caption("Among institutions reporting a budget")

    st.markdown("---")

    results = filtered_institutions(institutions)
    st.plotly_chart(create_institution_map(results), width="stretch")

    if results:
        current = calculate_statistics(results)
        st.caption(
            f"{current.total_institutions} shown · {current.wac_program_percentage} with WAC programs · "
            f"average enrollment {current.average_enrollment:,.0f}"
        )


if __name__ == "__main__":
    main()
