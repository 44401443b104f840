"""Tests for chart generators: figure content and empty-data handling."""

import plotly.graph_objects as go

from src.data.models import CategoryCount
from src.data.statistics import calculate_statistics
from src.viz.charts import (
    create_budget_chart,
    create_carnegie_chart,
    create_comparison_chart,
    create_distribution_chart,
    create_enrollment_chart,
    create_institution_map,
    create_type_chart,
    create_wi_courses_chart,
)


def _is_empty_chart(fig):
    return len(fig.data) == 0 and len(fig.layout.annotations) == 1


class TestInstitutionMap:
    def test_one_point_per_institution(self, dataset):
        fig = create_institution_map(dataset)
        assert sum(len(trace.lat) for trace in fig.data) == len(dataset)
        assert fig.layout.geo.scope == "usa"

    def test_empty(self):
        assert _is_empty_chart(create_institution_map([]))

    def test_skips_missing_coordinates(self, make_institution):
        fig = create_institution_map([make_institution("a"), make_institution("b", coordinates=None)])
        assert sum(len(trace.lat) for trace in fig.data) == 1


class TestDistributionCharts:
    def test_type_chart_labels(self, dataset):
        fig = create_type_chart(calculate_statistics(dataset).institutions_by_type)
        labels = {label for trace in fig.data for label in trace.y}
        assert labels == {"Public", "Private", "Community"}

    def test_carnegie_uses_short_labels(self, dataset):
        fig = create_carnegie_chart(dataset)
        labels = {label for trace in fig.data for label in trace.y}
        assert "R1 Doctoral" in labels

    def test_percentages_parsed(self):
        fig = create_distribution_chart({"A": CategoryCount(1, "25.0%"), "B": CategoryCount(3, "75.0%")}, "T")
        values = sorted(value for trace in fig.data for value in trace.x)
        assert values == [25.0, 75.0]

    def test_empty_breakdown(self):
        assert _is_empty_chart(create_distribution_chart({}, "T"))


class TestRankingCharts:
    def test_enrollment_largest_first(self, make_institution):
        records = [
            make_institution("a", short_name="A", total_enrollment=100),
            make_institution("b", short_name="B", total_enrollment=300),
            make_institution("c", short_name="C", total_enrollment=200),
        ]
        fig = create_enrollment_chart(records)
        assert list(fig.data[0].x) == ["B", "C", "A"]

    def test_budget_omits_unreported(self, make_institution):
        records = [
            make_institution("a", short_name="A", wac_budget=None),
            make_institution("b", short_name="B", wac_budget=5000),
        ]
        fig = create_budget_chart(records)
        assert list(fig.data[0].x) == ["B"]
        assert fig.layout.yaxis.tickprefix == "$"

    def test_no_values(self, make_institution):
        assert _is_empty_chart(create_wi_courses_chart([make_institution(writing_intensive_courses=None)]))


class TestComparisonChart:
    def test_one_trace_per_institution(self, make_institution):
        records = [
            make_institution("a", short_name="A", writing_center_staff=4, writing_intensive_courses=40),
            make_institution("b", short_name="B", writing_center_staff=8, writing_intensive_courses=None),
        ]
        fig = create_comparison_chart(records, ["writing_center_staff", "writing_intensive_courses"])
        assert isinstance(fig, go.Figure)
        assert {trace.name for trace in fig.data} == {"A", "B"}

    def test_no_data(self, make_institution):
        assert _is_empty_chart(create_comparison_chart([make_institution()], ["wac_budget"]))
