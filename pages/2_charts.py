"""
Charts Page - Distributions across the filtered institutions.
"""

import streamlit as st

from src.data.institutions import get_institutions
from src.data.statistics import calculate_statistics
from src.viz.charts import (
    create_budget_chart,
    create_carnegie_chart,
    create_enrollment_chart,
    create_type_chart,
    create_wi_courses_chart,
)
from src.viz.sidebar import filtered_institutions

st.set_page_config(
    page_title="Charts - WAC Compare",
    page_icon="📊",
    layout="wide",
)


def main():
    st.title("📊 Charts & Analytics")

    results = filtered_institutions(get_institutions())
    if not results:
        st.info("No institutions match the current filters.")
        return

    stats = calculate_statistics(results)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Institutions", stats.total_institutions)
    col2.metric("WAC Programs", stats.with_wac_programs, help=stats.wac_program_percentage)
    col3.metric("Writing Centers", stats.with_writing_centers, help=stats.writing_center_percentage)
    col4.metric("Total WI Courses", f"{stats.total_writing_intensive_courses:,}")

    left, right = st.columns(2)
    with left:
        st.plotly_chart(create_type_chart(stats.institutions_by_type), width="stretch")
    with right:
        st.plotly_chart(create_carnegie_chart(results), width="stretch")

    st.plotly_chart(create_enrollment_chart(results), width="stretch")

    st.plotly_chart(create_budget_chart(results), width="stretch")
    missing_budget = sum(1 for inst in results if inst.wac_budget is None)
    if missing_budget:
        st.caption(f"{missing_budget} institution(s) did not report a WAC budget.")

    st.plotly_chart(create_wi_courses_chart(results), width="stretch")
    st.caption("*Hover over chart and click the camera icon to download as PNG*")


if __name__ == "__main__":
    main()
