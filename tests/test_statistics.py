"""Tests for summary statistics and the ground-truth summary."""

import math

import pytest

from src.data.models import R1_CLASSIFICATION
from src.data.statistics import (
    calculate_percentage,
    calculate_statistics,
    category_breakdown,
    generate_data_summary,
    ordered_carnegie_classifications,
    simplify_carnegie_classification,
)


class TestCalculatePercentage:
    def test_one_decimal(self):
        assert calculate_percentage(8, 12) == "66.7%"

    def test_zero_decimals(self):
        assert calculate_percentage(6, 12, 0) == "50%"

    def test_zero_total(self):
        assert calculate_percentage(3, 0) == "0%"

    def test_ties_round_up(self):
        assert calculate_percentage(1, 16) == "6.3%"
        assert calculate_percentage(5, 16) == "31.3%"
        assert calculate_percentage(1, 8, 0) == "13%"


class TestEmptyInput:
    def test_zero_guard(self):
        stats = calculate_statistics([])

        assert stats.total_institutions == 0
        assert stats.with_wac_programs == 0
        assert stats.wac_program_percentage == "0%"
        assert stats.average_enrollment == 0.0
        assert not math.isnan(stats.average_enrollment)
        assert stats.average_wac_budget == 0.0
        assert stats.institutions_by_type == {}

    def test_metadata_on_empty(self):
        stats = calculate_statistics([], include_metadata=True)
        assert stats.metadata.ground_truth.total_institutions == 0
        assert stats.metadata.ground_truth.r1_institution_names == []


class TestCalculateStatistics:
    def test_counts(self, make_institution):
        records = [
            make_institution("a", has_wac_program=True, has_writing_center=False, total_enrollment=1000, wac_budget=100),
            make_institution("b", has_wac_program=False, has_writing_center=True, total_enrollment=3000, wac_budget=None),
            make_institution("c", has_wac_program=True, has_writing_center=None, total_enrollment=2000, wac_budget=300),
        ]
        stats = calculate_statistics(records)

        assert stats.total_institutions == 3
        assert stats.with_wac_programs == 2
        assert stats.wac_program_percentage == "66.7%"
        assert stats.with_writing_centers == 1
        assert stats.average_enrollment == 2000
        # Unreported budgets are left out of the average
        assert stats.average_wac_budget == 200

    def test_writing_intensive_total_skips_nulls(self, make_institution):
        records = [
            make_institution("a", writing_intensive_courses=10),
            make_institution("b", writing_intensive_courses=None),
            make_institution("c", writing_intensive_courses=5),
        ]
        assert calculate_statistics(records).total_writing_intensive_courses == 15

    def test_tied_percentage_rounds_up(self, make_institution):
        records = [make_institution(f"i{n}", has_wac_program=n == 0) for n in range(16)]
        assert calculate_statistics(records).wac_program_percentage == "6.3%"

    def test_breakdowns_sum_to_total(self, dataset):
        stats = calculate_statistics(dataset)
        for breakdown in (
            stats.institutions_by_type,
            stats.carnegie_classification_stats,
            stats.simplified_carnegie_stats,
            stats.institutions_by_size,
            stats.institutions_by_state,
        ):
            assert sum(item.count for item in breakdown.values()) == stats.total_institutions

    def test_dataset_type_counts(self, dataset):
        by_type = calculate_statistics(dataset).institutions_by_type
        assert by_type["public"].count == 12
        assert by_type["private"].count == 9
        assert by_type["community"].count == 3
        assert by_type["public"].percentage == "50.0%"

    def test_metadata(self, dataset):
        truth = calculate_statistics(dataset, include_metadata=True).metadata
        assert truth.data_integrity.all_have_valid_coordinates
        assert truth.data_integrity.total_records_processed == 24
        assert truth.ground_truth.r1_institutions == 9
        assert truth.ground_truth.r1_institution_names == sorted(truth.ground_truth.r1_institution_names)
        assert "MIT" in truth.ground_truth.r1_institution_names

    def test_metadata_omitted_by_default(self, dataset):
        assert calculate_statistics(dataset).metadata is None


class TestCategoryBreakdown:
    def test_null_is_unknown(self, make_institution):
        records = [make_institution("a", inst_size="Small"), make_institution("b", inst_size=None)]
        breakdown = category_breakdown(records, lambda inst: inst.inst_size)
        assert breakdown["Unknown"].count == 1
        assert breakdown["Small"].percentage == "50.0%"


class TestCarnegie:
    @pytest.mark.parametrize(
        "label, expected",
        [
            (R1_CLASSIFICATION, "R1 Doctoral"),
            ("R2: Doctoral Universities – High Research Activity", "R2 Doctoral"),
            ("Doctoral Universities: High Research Activity", "R2 Doctoral"),
            ("Baccalaureate Colleges: Arts & Sciences Focus", "Baccalaureate"),
            ("Master's Colleges & Universities: Larger Programs", "Masters Larger"),
            ("Associate's Colleges: High Transfer-Mixed Traditional/Nontraditional", "Associates Mixed"),
            ("Associate's Colleges: High Transfer-High Traditional", "Associates Traditional"),
            ("Special Focus Four-Year: Other Special Focus Institutions", "Special Focus"),
            ("Tribal Colleges", "Tribal Colleges"),
        ],
    )
    def test_simplify(self, label, expected):
        assert simplify_carnegie_classification(label) == expected

    def test_ordered_known_first(self, make_institution):
        records = [
            make_institution("a", carnegie_classification="Zeta Classification"),
            make_institution("b", carnegie_classification=R1_CLASSIFICATION),
            make_institution("c", carnegie_classification="Alpha Classification"),
        ]
        assert ordered_carnegie_classifications(records) == [
            R1_CLASSIFICATION,
            "Alpha Classification",
            "Zeta Classification",
        ]


class TestDataSummary:
    def test_contains_ground_truth(self, dataset):
        summary = generate_data_summary(calculate_statistics(dataset, include_metadata=True))
        assert "Total Institutions: 24" in summary
        assert "R1 Institutions: 9 (37.5%)" in summary
        assert summary.startswith("=== GROUND TRUTH DATA STATISTICS ===")
        assert summary.endswith("=== END GROUND TRUTH ===")

    def test_r1_lines_need_metadata(self, dataset):
        summary = generate_data_summary(calculate_statistics(dataset))
        assert "R1 Institutions" not in summary
