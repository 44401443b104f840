"""Side-by-side comparison helpers."""

from typing import Any, Sequence

import pandas as pd

from .fields import format_field_value, get_field_label, get_field_value
from .models import Institution

COMPARISON_FIELDS = [
    "name",
    "state",
    "city",
    "institution_type",
    "carnegie_classification",
    "total_enrollment",
    "undergraduate_enrollment",
    "graduate_enrollment",
    "founded_year",
    "has_wac_program",
    "wac_program_established",
    "wac_director_position",
    "wac_faculty_fte",
    "wac_budget",
    "writing_intensive_courses",
    "required_wi_courses",
    "has_writing_center",
    "writing_center_staff",
    "writing_center_hours_per_week",
    "writing_fellows_program",
    "writing_tutors_available",
    "faculty_workshops_per_year",
    "writing_faculty_development_program",
    "cross_disciplinary_writing_initiatives",
]

# Shown when "show all fields" is off
KEY_COMPARISON_FIELDS = COMPARISON_FIELDS[:16]


def compare_institutions(
    inst1: Institution,
    inst2: Institution,
    fields: Sequence[str] = COMPARISON_FIELDS,
) -> dict[str, dict[str, Any]]:
    """Field -> both values and whether they differ."""
    comparison = {}
    for field in fields:
        value1 = get_field_value(inst1, field)
        value2 = get_field_value(inst2, field)
        comparison[field] = {
            "inst1": value1,
            "inst2": value2,
            "different": value1 != value2,
        }
    return comparison


def comparison_table(
    institutions: Sequence[Institution],
    fields: Sequence[str] = COMPARISON_FIELDS,
) -> pd.DataFrame:
    """One row per field, one column per institution (display name), formatted values."""
    headers = [inst.display_name for inst in institutions]
    rows = [
        [get_field_label(field)] + [format_field_value(field, get_field_value(inst, field)) for inst in institutions]
        for field in fields
    ]
    return pd.DataFrame(rows, columns=["Field"] + headers)


def differing_fields(institutions: Sequence[Institution], fields: Sequence[str] = COMPARISON_FIELDS) -> list[str]:
    """Fields whose values are not identical across all given institutions."""
    return [
        field
        for field in fields
        if len({repr(get_field_value(inst, field)) for inst in institutions}) > 1
    ]
