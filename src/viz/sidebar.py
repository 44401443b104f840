"""Shared sidebar filter controls for every page."""

from typing import Sequence

import streamlit as st

from src.data.filters import count_active_constraints, filter_institutions
from src.data.institutions import (
    get_budget_range,
    get_enrollment_range,
    get_established_year_range,
    get_institution_types,
    get_unique_states,
    get_unique_values,
)
from src.data.models import BoolRequirement, FilterCriteria, Institution, NumericRange
from src.data.statistics import ordered_carnegie_classifications

CRITERIA_KEY = "filter_criteria"

BOOL_CHOICES = [member.value for member in BoolRequirement]

# Criteria attribute -> sidebar label, grouped as in the sidebar
PROGRAM_FLAGS = {
    "has_wac_program": "WAC program",
    "has_writing_center": "Writing center",
    "has_writing_fellows": "Writing fellows",
    "has_faculty_development": "Faculty development",
}
COURSE_FLAGS = {
    "has_dev_rem_writing": "Developmental/remedial writing",
    "has_fyc_required": "First-year composition required",
    "has_stretch_fyc": "Stretch FYC",
    "has_upper_div_writing": "Upper-division writing",
    "has_esl_undergrad_writing": "ESL undergraduate writing",
    "has_esl_grad_writing": "ESL graduate writing",
}
MSI_LABELS = {
    "show_only_hbcu": "HBCU",
    "show_only_hsi": "HSI",
    "show_only_aanapisi": "AANAPISI",
    "show_only_tribal": "Tribal college",
    "show_only_msi": "Any minority-serving",
}


def range_from_slider(selected: tuple, extent: tuple) -> NumericRange:
    """A slider left at the full data extent imposes no constraint."""
    if tuple(selected) == tuple(extent):
        return NumericRange()
    return NumericRange(selected[0], selected[1])


def _range_slider(label: str, extent: tuple, key: str, **kwargs) -> NumericRange:
    low, high = int(extent[0]), int(extent[1])
    if low >= high:
        return NumericRange()
    selected = st.slider(label, min_value=low, max_value=high, value=(low, high), key=key, **kwargs)
    return range_from_slider(selected, (low, high))


def _tri_state(attr: str, label: str) -> BoolRequirement:
    choice = st.radio(label, BOOL_CHOICES, horizontal=True, key=f"filter_{attr}")
    return BoolRequirement.from_choice(choice)


def render_sidebar_filters(institutions: Sequence[Institution]) -> FilterCriteria:
    """
    Render the filter controls and return the resulting criteria.

    The criteria are also stored in ``st.session_state`` so pages without
    a sidebar of their own can read them.
    """
    with st.sidebar:
        st.header("Filters")

        search_query = st.text_input(
            "Search institutions",
            placeholder="Name, city, state...",
            key="filter_search_query",
        )

        with st.expander("Institution", expanded=True):
            states = st.multiselect("State", get_unique_states(institutions), key="filter_states")
            institution_types = st.multiselect(
                "Type",
                get_institution_types(institutions),
                format_func=str.title,
                key="filter_institution_types",
            )
            carnegie_classifications = st.multiselect(
                "Carnegie classification",
                ordered_carnegie_classifications(institutions),
                key="filter_carnegie_classifications",
            )
            inst_sizes = st.multiselect("Size", get_unique_values("inst_size", institutions), key="filter_inst_sizes")
            fundings = st.multiselect(
                "Funding", get_unique_values("institution_type_funding", institutions), key="filter_fundings"
            )
            missions = st.multiselect(
                "Mission", get_unique_values("institution_type_mission", institutions), key="filter_missions"
            )
            term_systems = st.multiselect(
                "Term system", get_unique_values("term_system", institutions), key="filter_term_systems"
            )

        with st.expander("Size & budget"):
            enrollment_range = _range_slider(
                "Total enrollment", get_enrollment_range(institutions), "filter_enrollment", step=100
            )
            established_year_range = _range_slider(
                "WAC program established", get_established_year_range(institutions), "filter_established"
            )
            budget_range = _range_slider(
                "WAC budget ($)", get_budget_range(institutions), "filter_budget", step=10000
            )
            include_unreported = st.checkbox(
                "Include institutions with unreported values",
                value=True,
                key="filter_include_unreported",
            )

        with st.expander("Writing program"):
            structures = st.multiselect(
                "Program structure",
                get_unique_values("writing_program_structure", institutions),
                key="filter_structures",
            )
            admins = st.multiselect(
                "Administered by",
                get_unique_values("writing_program_admin", institutions),
                key="filter_admins",
            )
            flags = {attr: _tri_state(attr, label) for attr, label in PROGRAM_FLAGS.items()}

        with st.expander("Course offerings"):
            flags.update({attr: _tri_state(attr, label) for attr, label in COURSE_FLAGS.items()})

        with st.expander("Minority-serving"):
            toggles = {attr: st.checkbox(label, key=f"filter_{attr}") for attr, label in MSI_LABELS.items()}

    criteria = FilterCriteria().with_changes(
        search_query=search_query,
        states=states,
        institution_types=institution_types,
        carnegie_classifications=carnegie_classifications,
        inst_sizes=inst_sizes,
        institution_type_fundings=fundings,
        institution_type_missions=missions,
        term_systems=term_systems,
        writing_program_structures=structures,
        writing_program_admins=admins,
        enrollment_range=enrollment_range,
        established_year_range=established_year_range,
        budget_range=budget_range,
        include_unreported=include_unreported,
        **flags,
        **toggles,
    )
    st.session_state[CRITERIA_KEY] = criteria
    return criteria


def filtered_institutions(institutions: Sequence[Institution]) -> list[Institution]:
    """Render the sidebar and return the matching institutions, with a count caption."""
    criteria = render_sidebar_filters(institutions)
    results = filter_institutions(institutions, criteria)

    active = count_active_constraints(criteria)
    st.sidebar.caption(
        f"Showing {len(results)} of {len(institutions)} institutions"
        + (f" ({active} active filter{'s' if active != 1 else ''})" if active else "")
    )
    return results
