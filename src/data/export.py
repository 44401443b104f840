"""CSV and JSON export of institution records."""

import json
from dataclasses import asdict
from datetime import date
from typing import Any, Iterable, Optional, Sequence

import pandas as pd

from .fields import BOOLEAN, COORDINATES, CURRENCY, NUMBER, get_field_kind, get_field_label, format_plain_number, is_missing
from .models import INSTITUTION_FIELD_NAMES, Institution

# Column order for full exports
DEFAULT_EXPORT_FIELDS = [
    "id",
    "name",
    "short_name",
    "state",
    "city",
    "coordinates",
    "institution_type",
    "carnegie_classification",
    "inst_size",
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
    "wac_website_url",
    "has_writing_center",
    "writing_center_staff",
    "writing_center_hours_per_week",
    "writing_fellows_program",
    "writing_tutors_available",
    "faculty_workshops_per_year",
    "writing_faculty_development_program",
    "cross_disciplinary_writing_initiatives",
]

MIME_TYPES = {
    "csv": "text/csv",
    "json": "application/json",
}


def _csv_cells(field: str, value: Any) -> list[str]:
    """Render one field as CSV cell text; coordinates span two cells."""
    kind = get_field_kind(field)
    if kind == COORDINATES:
        if value is None:
            return ["", ""]
        return [format_plain_number(value.lat), format_plain_number(value.lng)]
    if is_missing(value):
        return [""]
    if kind == BOOLEAN:
        return ["Yes" if value else "No"]
    if kind in (NUMBER, CURRENCY):
        return [format_plain_number(value)]
    return [str(value)]


def _csv_headers(fields: Sequence[str]) -> list[str]:
    headers = []
    for field in fields:
        if get_field_kind(field) == COORDINATES:
            headers += ["Latitude", "Longitude"]
        else:
            headers.append(get_field_label(field))
    return headers


def to_dataframe(institutions: Iterable[Institution], fields: Sequence[str] = DEFAULT_EXPORT_FIELDS) -> pd.DataFrame:
    """String-typed frame with display-label columns, one row per institution."""
    headers = _csv_headers(fields)
    rows = []
    for inst in institutions:
        row = []
        for field in fields:
            row += _csv_cells(field, getattr(inst, field))
        rows.append(row)
    return pd.DataFrame(rows, columns=headers, dtype=str)


def to_csv(institutions: Iterable[Institution], fields: Sequence[str] = DEFAULT_EXPORT_FIELDS) -> str:
    """
    Serialize institutions to CSV.

    Booleans are Yes/No, nulls are empty, numbers are unformatted. Values
    containing the delimiter, quotes, or newlines are quoted with embedded
    quotes doubled.
    """
    return to_dataframe(institutions, fields).to_csv(index=False, lineterminator="\n")


def _json_value(field: str, value: Any) -> Any:
    if get_field_kind(field) == COORDINATES and value is not None:
        return asdict(value)
    return value


def to_json(institutions: Iterable[Institution], fields: Optional[Sequence[str]] = None) -> str:
    """Serialize institutions to a JSON array, keeping record and field order."""
    fields = list(fields) if fields is not None else list(INSTITUTION_FIELD_NAMES)
    for field in fields:
        get_field_kind(field)
    payload = [{field: _json_value(field, getattr(inst, field)) for field in fields} for inst in institutions]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def export_filename(fmt: str, on: Optional[date] = None, prefix: str = "wac-institutions") -> str:
    """Download filename stamped with the date, e.g. wac-institutions-2025-01-31.csv."""
    if fmt not in MIME_TYPES:
        raise ValueError(f"Unsupported export format: {fmt}")
    on = on or date.today()
    return f"{prefix}-{on.isoformat()}.{fmt}"
