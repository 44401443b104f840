"""Filtering of institution records against a FilterCriteria snapshot."""

from typing import Callable, Iterable, Optional, Sequence

from .institutions import get_budget_range, get_enrollment_range, get_established_year_range
from .models import BoolRequirement, FilterCriteria, Institution, NumericRange

# Criteria attribute -> Institution attribute, for multi-select fields
MULTI_SELECT_FIELDS = {
    "states": "state",
    "institution_types": "institution_type",
    "carnegie_classifications": "carnegie_classification",
    "inst_sizes": "inst_size",
    "institution_type_fundings": "institution_type_funding",
    "institution_type_missions": "institution_type_mission",
    "term_systems": "term_system",
    "writing_program_structures": "writing_program_structure",
    "writing_program_admins": "writing_program_admin",
}

# Criteria attribute -> Institution attribute, for tri-state boolean fields
BOOLEAN_FIELDS = {
    "has_wac_program": "has_wac_program",
    "has_writing_center": "has_writing_center",
    "has_writing_fellows": "writing_fellows_program",
    "has_faculty_development": "writing_faculty_development_program",
    "has_dev_rem_writing": "has_dev_rem_writing",
    "has_fyc_required": "has_fyc_required",
    "has_stretch_fyc": "has_stretch_fyc",
    "has_upper_div_writing": "has_upper_div_writing",
    "has_esl_undergrad_writing": "has_esl_undergrad_writing",
    "has_esl_grad_writing": "has_esl_grad_writing",
}

# Criteria attribute -> Institution attribute, for numeric ranges
RANGE_FIELDS = {
    "enrollment_range": "total_enrollment",
    "established_year_range": "wac_program_established",
    "budget_range": "wac_budget",
}

# "Show only" toggle -> predicate
MSI_TOGGLES: dict[str, Callable[[Institution], bool]] = {
    "show_only_hbcu": lambda inst: inst.is_hbcu,
    "show_only_hsi": lambda inst: inst.is_hsi,
    "show_only_aanapisi": lambda inst: inst.is_aanapisi,
    "show_only_tribal": lambda inst: inst.is_tribal,
    "show_only_msi": lambda inst: inst.is_minority_serving,
}


def searchable_fields(institution: Institution) -> list[str]:
    return [
        institution.name,
        institution.short_name,
        institution.city,
        institution.state,
        institution.institution_type,
        institution.carnegie_classification,
    ]


def searchable_text(institution: Institution) -> str:
    return " ".join(searchable_fields(institution)).lower()


def matches_search(institution: Institution, query: str) -> bool:
    """
    Case-insensitive substring match over the joined searchable fields.

    Blank queries match everything. Surrounding whitespace is kept, so
    "state " matches "Gamma State CA" but not a record ending in "state".
    """
    if not query.strip():
        return True
    return query.lower() in searchable_text(institution)


def _in_range(value: Optional[float], bounds: NumericRange, include_unreported: bool) -> bool:
    if not bounds.is_bounded:
        return True
    if value is None:
        return include_unreported
    return bounds.contains(value)


def matches_criteria(institution: Institution, criteria: FilterCriteria) -> bool:
    """True when the institution satisfies every active constraint."""
    if not matches_search(institution, criteria.search_query):
        return False

    for criteria_attr, inst_attr in MULTI_SELECT_FIELDS.items():
        selected = getattr(criteria, criteria_attr)
        if selected and getattr(institution, inst_attr) not in selected:
            return False

    for criteria_attr, inst_attr in RANGE_FIELDS.items():
        bounds = getattr(criteria, criteria_attr)
        if not _in_range(getattr(institution, inst_attr), bounds, criteria.include_unreported):
            return False

    for criteria_attr, inst_attr in BOOLEAN_FIELDS.items():
        requirement: BoolRequirement = getattr(criteria, criteria_attr)
        if not requirement.matches(getattr(institution, inst_attr)):
            return False

    for toggle, predicate in MSI_TOGGLES.items():
        if getattr(criteria, toggle) and not predicate(institution):
            return False

    return True


def filter_institutions(institutions: Iterable[Institution], criteria: FilterCriteria) -> list[Institution]:
    """Return the institutions matching all constraints, in input order."""
    return [inst for inst in institutions if matches_criteria(inst, criteria)]


def search_institutions(institutions: Iterable[Institution], search_term: str) -> list[Institution]:
    """Text search only; the term must fall inside a single field."""
    institutions = list(institutions)
    if not search_term.strip():
        return institutions
    term = search_term.lower()
    return [
        inst
        for inst in institutions
        if any(term in field.lower() for field in searchable_fields(inst))
    ]


def count_active_constraints(criteria: FilterCriteria) -> int:
    """Number of constraints that can exclude a record."""
    count = 1 if criteria.search_query.strip() else 0
    count += sum(1 for attr in MULTI_SELECT_FIELDS if getattr(criteria, attr))
    count += sum(1 for attr in RANGE_FIELDS if getattr(criteria, attr).is_bounded)
    count += sum(1 for attr in BOOLEAN_FIELDS if getattr(criteria, attr) is not BoolRequirement.UNSET)
    count += sum(1 for attr in MSI_TOGGLES if getattr(criteria, attr))
    return count


def default_filter_criteria(institutions: Optional[Sequence[Institution]] = None) -> FilterCriteria:
    """Criteria with range bounds set to the data extents; matches every record."""
    enroll_min, enroll_max = get_enrollment_range(institutions)
    year_min, year_max = get_established_year_range(institutions)
    budget_min, budget_max = get_budget_range(institutions)
    return FilterCriteria(
        enrollment_range=NumericRange(enroll_min, enroll_max),
        established_year_range=NumericRange(year_min, year_max),
        budget_range=NumericRange(budget_min, budget_max),
    )
