"""Field registry: display labels, kinds, and formatting for institution fields.

Every ``Institution`` field has an entry in ``FIELDS``. Sorting, display
formatting, and export all dispatch on the entry's ``kind``.
"""

import math
from typing import Any

from .models import Institution

# Field kinds
TEXT = "text"
NUMBER = "number"
CURRENCY = "currency"
BOOLEAN = "boolean"
COORDINATES = "coordinates"

FIELDS = {
    # Basic information
    "id": {"label": "ID", "kind": TEXT, "category": "Basic"},
    "name": {"label": "Name", "kind": TEXT, "category": "Basic"},
    "short_name": {"label": "Short Name", "kind": TEXT, "category": "Basic"},
    "state": {"label": "State", "kind": TEXT, "category": "Basic"},
    "city": {"label": "City", "kind": TEXT, "category": "Basic"},
    "coordinates": {"label": "Coordinates", "kind": COORDINATES, "category": "Basic"},
    # Institutional characteristics
    "institution_type": {"label": "Institution Type", "kind": TEXT, "category": "Institution"},
    "carnegie_classification": {"label": "Carnegie Classification", "kind": TEXT, "category": "Institution"},
    "inst_size": {"label": "Institution Size", "kind": TEXT, "category": "Institution"},
    "institution_type_funding": {"label": "Funding Model", "kind": TEXT, "category": "Institution"},
    "institution_type_mission": {"label": "Mission", "kind": TEXT, "category": "Institution"},
    "religious_affiliation": {"label": "Religious Affiliation", "kind": TEXT, "category": "Institution"},
    "specialization": {"label": "Specialization", "kind": TEXT, "category": "Institution"},
    "term_system": {"label": "Term System", "kind": TEXT, "category": "Institution"},
    "total_enrollment": {"label": "Total Enrollment", "kind": NUMBER, "category": "Institution"},
    "undergraduate_enrollment": {"label": "Undergraduate Enrollment", "kind": NUMBER, "category": "Institution"},
    "graduate_enrollment": {"label": "Graduate Enrollment", "kind": NUMBER, "category": "Institution"},
    "founded_year": {"label": "Founded Year", "kind": NUMBER, "category": "Institution"},
    # WAC program
    "has_wac_program": {"label": "Has WAC Program", "kind": BOOLEAN, "category": "WAC Program"},
    "wac_program_established": {"label": "WAC Program Established", "kind": NUMBER, "category": "WAC Program"},
    "wac_director_position": {"label": "Has WAC Director", "kind": BOOLEAN, "category": "WAC Program"},
    "wac_faculty_fte": {"label": "WAC Faculty FTE", "kind": NUMBER, "category": "WAC Program"},
    "wac_budget": {"label": "WAC Annual Budget", "kind": CURRENCY, "category": "WAC Program"},
    "writing_intensive_courses": {"label": "Writing Intensive Courses", "kind": NUMBER, "category": "WAC Program"},
    "required_wi_courses": {"label": "Required WI Courses", "kind": NUMBER, "category": "WAC Program"},
    "wac_website_url": {"label": "WAC Website", "kind": TEXT, "category": "WAC Program"},
    "writing_program_structure": {"label": "Writing Program Structure", "kind": TEXT, "category": "WAC Program"},
    "writing_program_admin": {"label": "Writing Program Administration", "kind": TEXT, "category": "WAC Program"},
    # Writing support
    "has_writing_center": {"label": "Has Writing Center", "kind": BOOLEAN, "category": "Writing Support"},
    "writing_center_staff": {"label": "Writing Center Staff", "kind": NUMBER, "category": "Writing Support"},
    "writing_center_hours_per_week": {"label": "Writing Center Hours/Week", "kind": NUMBER, "category": "Writing Support"},
    "writing_fellows_program": {"label": "Writing Fellows Program", "kind": BOOLEAN, "category": "Writing Support"},
    "writing_tutors_available": {"label": "Writing Tutors Available", "kind": NUMBER, "category": "Writing Support"},
    # Faculty development
    "faculty_workshops_per_year": {"label": "Faculty Workshops/Year", "kind": NUMBER, "category": "Faculty Development"},
    "writing_faculty_development_program": {"label": "Faculty Development Program", "kind": BOOLEAN, "category": "Faculty Development"},
    "cross_disciplinary_writing_initiatives": {"label": "Cross-Disciplinary Initiatives", "kind": BOOLEAN, "category": "Faculty Development"},
    # Course offerings
    "has_dev_rem_writing": {"label": "Developmental/Remedial Writing", "kind": BOOLEAN, "category": "Course Offerings"},
    "has_fyc_required": {"label": "First-Year Composition Required", "kind": BOOLEAN, "category": "Course Offerings"},
    "has_stretch_fyc": {"label": "Stretch FYC", "kind": BOOLEAN, "category": "Course Offerings"},
    "has_upper_div_writing": {"label": "Upper-Division Writing", "kind": BOOLEAN, "category": "Course Offerings"},
    "has_esl_undergrad_writing": {"label": "ESL Undergraduate Writing", "kind": BOOLEAN, "category": "Course Offerings"},
    "has_esl_grad_writing": {"label": "ESL Graduate Writing", "kind": BOOLEAN, "category": "Course Offerings"},
    # WPA credentials
    "wpa_has_rhet_comp_phd": {"label": "WPA Has Rhet/Comp PhD", "kind": BOOLEAN, "category": "WPA Credentials"},
    "wpa_tenure_track": {"label": "WPA Tenure-Track", "kind": BOOLEAN, "category": "WPA Credentials"},
    "wpa_has_release_time": {"label": "WPA Release Time", "kind": BOOLEAN, "category": "WPA Credentials"},
    # Minority-serving institution flags
    "is_hbcu": {"label": "HBCU", "kind": BOOLEAN, "category": "Minority-Serving"},
    "is_hsi": {"label": "HSI", "kind": BOOLEAN, "category": "Minority-Serving"},
    "is_aanapisi": {"label": "AANAPISI", "kind": BOOLEAN, "category": "Minority-Serving"},
    "is_tribal": {"label": "Tribal College", "kind": BOOLEAN, "category": "Minority-Serving"},
    "is_other_msi": {"label": "Other MSI", "kind": BOOLEAN, "category": "Minority-Serving"},
    "program_description": {"label": "Program Description", "kind": TEXT, "category": "WAC Program"},
}

# Enrollment fields get thousands separators in display
_GROUPED_NUMBER_FIELDS = {"total_enrollment", "undergraduate_enrollment", "graduate_enrollment"}


def get_field_kind(field: str) -> str:
    """Return the kind of a field; raise ValueError for unknown fields."""
    try:
        return FIELDS[field]["kind"]
    except KeyError:
        raise ValueError(f"Unknown institution field: {field}") from None


def get_field_label(field: str) -> str:
    """Get display label for a field, falling back to a title-cased name."""
    if field in FIELDS:
        return FIELDS[field]["label"]
    return field.replace("_", " ").strip().title()


def get_field_value(institution: Institution, field: str) -> Any:
    get_field_kind(field)
    return getattr(institution, field)


def is_missing(value: Any) -> bool:
    """Null or NaN."""
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def format_plain_number(value: float) -> str:
    """Render a number without localization; integral floats lose the ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_field_value(field: str, value: Any) -> str:
    """Format a field value for display (N/A, Yes/No, $1,234, 12,345)."""
    if is_missing(value):
        return "N/A"

    kind = get_field_kind(field)
    if kind == BOOLEAN:
        return "Yes" if value else "No"
    if kind == CURRENCY:
        return f"${value:,.0f}"
    if kind == NUMBER:
        if field in _GROUPED_NUMBER_FIELDS:
            return f"{value:,.0f}"
        return format_plain_number(value)
    if kind == COORDINATES:
        return f"{value.lat:.4f}, {value.lng:.4f}"
    return str(value)


def fields_in_category(category: str) -> list[str]:
    return [name for name, meta in FIELDS.items() if meta["category"] == category]
