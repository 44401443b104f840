"""Tests for the field registry and display formatting."""

import math

import pytest

from src.data.fields import (
    BOOLEAN,
    COORDINATES,
    CURRENCY,
    FIELDS,
    fields_in_category,
    format_field_value,
    format_plain_number,
    get_field_kind,
    get_field_label,
    get_field_value,
    is_missing,
)
from src.data.models import INSTITUTION_FIELD_NAMES, Coordinates


class TestRegistry:
    def test_every_institution_field_registered(self):
        assert set(FIELDS) == set(INSTITUTION_FIELD_NAMES)

    def test_entries_have_label_kind_category(self):
        for name, meta in FIELDS.items():
            assert meta["label"], name
            assert meta["kind"], name
            assert meta["category"], name

    def test_kinds(self):
        assert get_field_kind("wac_budget") == CURRENCY
        assert get_field_kind("coordinates") == COORDINATES
        assert get_field_kind("has_writing_center") == BOOLEAN

    def test_unknown_field_raises(self):
        with pytest.raises(ValueError, match="Unknown institution field"):
            get_field_kind("favorite_color")

    def test_label_fallback(self):
        assert get_field_label("total_enrollment") == "Total Enrollment"
        assert get_field_label("some_new_field") == "Some New Field"

    def test_get_field_value_rejects_unknown(self, make_institution):
        with pytest.raises(ValueError):
            get_field_value(make_institution(), "nope")

    def test_fields_in_category(self):
        course_fields = fields_in_category("Course Offerings")
        assert "has_stretch_fyc" in course_fields
        assert "name" not in course_fields


class TestFormatting:
    def test_missing_values(self):
        assert is_missing(None)
        assert is_missing(math.nan)
        assert not is_missing(0)
        assert not is_missing(False)

    def test_null_is_na(self):
        assert format_field_value("wac_budget", None) == "N/A"
        assert format_field_value("has_stretch_fyc", None) == "N/A"

    def test_boolean(self):
        assert format_field_value("has_wac_program", True) == "Yes"
        assert format_field_value("has_wac_program", False) == "No"

    def test_currency(self):
        assert format_field_value("wac_budget", 1200000) == "$1,200,000"

    def test_enrollment_grouped(self):
        assert format_field_value("total_enrollment", 51225) == "51,225"

    def test_year_not_grouped(self):
        assert format_field_value("wac_program_established", 1978) == "1978"

    def test_coordinates(self):
        assert format_field_value("coordinates", Coordinates(42.278, -83.7382)) == "42.2780, -83.7382"

    def test_plain_number(self):
        assert format_plain_number(5.0) == "5"
        assert format_plain_number(6.5) == "6.5"
        assert format_plain_number(120000) == "120000"
