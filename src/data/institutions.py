"""Bundled institution dataset: loading, validation, and lookup helpers."""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional, Sequence

from config.settings import get_settings
from .models import (
    INSTITUTION_FIELD_NAMES,
    INSTITUTION_SIZES,
    INSTITUTION_TYPES,
    SPECIALIZATIONS,
    Coordinates,
    Institution,
)

logger = logging.getLogger(__name__)

# Enumerated fields and their allowed values (None is always allowed)
_ENUM_FIELDS = {
    "institution_type": INSTITUTION_TYPES,
    "inst_size": INSTITUTION_SIZES,
    "specialization": SPECIALIZATIONS,
}

_NON_NEGATIVE_FIELDS = ("total_enrollment", "undergraduate_enrollment", "graduate_enrollment", "wac_budget")


class DatasetError(ValueError):
    """Raised when the bundled dataset violates a record invariant."""


def parse_institution(raw: dict) -> Institution:
    """Build an Institution from one JSON object, rejecting unknown keys."""
    unknown = set(raw) - set(INSTITUTION_FIELD_NAMES)
    if unknown:
        raise DatasetError(f"Unknown field(s) for {raw.get('id', '?')}: {', '.join(sorted(unknown))}")

    values = dict(raw)
    coords = values.get("coordinates")
    if coords is not None:
        try:
            values["coordinates"] = Coordinates(lat=float(coords["lat"]), lng=float(coords["lng"]))
        except (KeyError, TypeError, ValueError) as e:
            raise DatasetError(f"Malformed coordinates for {raw.get('id', '?')}: {coords!r}") from e

    try:
        return Institution(**values)
    except TypeError as e:
        raise DatasetError(f"Malformed record {raw.get('id', '?')}: {e}") from e


def validate_institutions(institutions: Sequence[Institution]) -> None:
    """Check record invariants; raise DatasetError on the first violation."""
    seen = set()
    for inst in institutions:
        if inst.id in seen:
            raise DatasetError(f"Duplicate institution id: {inst.id}")
        seen.add(inst.id)

        if inst.coordinates is not None and not inst.coordinates.is_valid:
            raise DatasetError(f"Invalid coordinates for {inst.id}: {inst.coordinates}")

        for field_name in _NON_NEGATIVE_FIELDS:
            value = getattr(inst, field_name)
            if value is not None and value < 0:
                raise DatasetError(f"{field_name} must be non-negative for {inst.id}: {value}")

        for field_name, allowed in _ENUM_FIELDS.items():
            value = getattr(inst, field_name)
            if value is not None and value not in allowed:
                raise DatasetError(f"{field_name} for {inst.id} must be one of {allowed}, got {value!r}")


def load_institutions(path: Optional[Path] = None) -> tuple[Institution, ...]:
    """Read, parse, and validate a dataset file."""
    path = path or get_settings().DATA_PATH
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)

    records = payload["institutions"] if isinstance(payload, dict) else payload
    institutions = tuple(parse_institution(r) for r in records)
    validate_institutions(institutions)
    logger.info("Loaded %d institutions from %s", len(institutions), path)
    return institutions


@lru_cache
def get_institutions() -> tuple[Institution, ...]:
    """The full, immutable institution sequence for this session."""
    return load_institutions()


def get_institution_by_id(institution_id: str, institutions: Optional[Iterable[Institution]] = None) -> Optional[Institution]:
    for inst in institutions if institutions is not None else get_institutions():
        if inst.id == institution_id:
            return inst
    return None


def get_unique_values(field_name: str, institutions: Optional[Iterable[Institution]] = None) -> list[str]:
    """Sorted distinct non-null values of a field."""
    records = institutions if institutions is not None else get_institutions()
    return sorted({getattr(inst, field_name) for inst in records if getattr(inst, field_name) is not None})


def get_unique_states(institutions: Optional[Iterable[Institution]] = None) -> list[str]:
    return get_unique_values("state", institutions)


def get_institution_types(institutions: Optional[Iterable[Institution]] = None) -> list[str]:
    """Institution types present in the data, in declared order."""
    present = set(get_unique_values("institution_type", institutions))
    return [t for t in INSTITUTION_TYPES if t in present]


def _value_range(values: list) -> tuple[float, float]:
    if not values:
        return (0, 0)
    return (min(values), max(values))


def get_enrollment_range(institutions: Optional[Iterable[Institution]] = None) -> tuple[float, float]:
    records = institutions if institutions is not None else get_institutions()
    return _value_range([i.total_enrollment for i in records])


def get_budget_range(institutions: Optional[Iterable[Institution]] = None) -> tuple[float, float]:
    records = institutions if institutions is not None else get_institutions()
    return _value_range([i.wac_budget for i in records if i.wac_budget is not None])


def get_established_year_range(institutions: Optional[Iterable[Institution]] = None) -> tuple[float, float]:
    records = institutions if institutions is not None else get_institutions()
    return _value_range([i.wac_program_established for i in records if i.wac_program_established is not None])
