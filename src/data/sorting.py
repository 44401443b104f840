"""Type-aware, stable sorting of institution records."""

import unicodedata
from typing import Any, Callable, Iterable, Optional

from .fields import BOOLEAN, COORDINATES, CURRENCY, NUMBER, TEXT, get_field_kind, is_missing
from .models import Institution, SortSpecification


def _text_key(value: str) -> tuple[str, str]:
    # Accent- and case-insensitive primary key, raw value as tie-breaker
    folded = unicodedata.normalize("NFKD", value)
    folded = "".join(c for c in folded if not unicodedata.combining(c)).casefold()
    return (folded, value)


def _number_key(value: float) -> float:
    return float(value)


def _boolean_key(value: bool) -> int:
    return 1 if value else 0


# Field kind -> sort key; None means the kind has no ordering
SORT_KEYS: dict[str, Optional[Callable[[Any], Any]]] = {
    TEXT: _text_key,
    NUMBER: _number_key,
    CURRENCY: _number_key,
    BOOLEAN: _boolean_key,
    COORDINATES: None,
}


def sort_institutions(institutions: Iterable[Institution], sort_spec: SortSpecification) -> list[Institution]:
    """
    Return a new list ordered by ``sort_spec``.

    Null values always go last, whatever the direction. Records with equal
    keys keep their input order.
    """
    key_func = SORT_KEYS[get_field_kind(sort_spec.field)]

    present, missing = [], []
    for inst in institutions:
        (missing if is_missing(getattr(inst, sort_spec.field)) else present).append(inst)

    if key_func is not None:
        # list.sort stays stable with reverse=True
        present.sort(
            key=lambda inst: key_func(getattr(inst, sort_spec.field)),
            reverse=sort_spec.direction == "desc",
        )

    return present + missing


def toggle_sort(current: SortSpecification, field: str) -> SortSpecification:
    """Re-selecting the current ascending field flips to descending; anything else sorts ascending."""
    if current.field == field and current.direction == "asc":
        return SortSpecification(field=field, direction="desc")
    return SortSpecification(field=field, direction="asc")
