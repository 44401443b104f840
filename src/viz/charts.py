"""Plotly chart generators for the WAC institution dashboard."""

from typing import Optional, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from src.data.fields import get_field_label
from src.data.models import CategoryCount, Institution
from src.data.statistics import category_breakdown, simplify_carnegie_classification


# Color palette for consistent styling
COLORS = {
    "primary": "#1e3a8a",
    "secondary": "#2563eb",
    "accent": "#3b82f6",
    "muted": "#999999",
}

# Marker color per institution type
TYPE_COLORS = {
    "public": "#1f77b4",
    "private": "#ff7f0e",
    "community": "#2ca02c",
}

# Color sequence for comparing multiple entities
ENTITY_COLORS = px.colors.qualitative.Set2


def create_institution_map(institutions: Sequence[Institution]) -> go.Figure:
    """
    Create a US map with one marker per institution, colored by type.

    Institutions without coordinates are left off the map.
    """
    rows = [
        {
            "Institution": inst.name,
            "Location": inst.location,
            "Type": inst.institution_type,
            "Enrollment": inst.total_enrollment,
            "WAC Program": "Yes" if inst.has_wac_program else "No",
            "lat": inst.coordinates.lat,
            "lng": inst.coordinates.lng,
        }
        for inst in institutions
        if inst.coordinates is not None
    ]

    if not rows:
        return _empty_chart("No institutions match the current filters")

    df = pd.DataFrame(rows)

    fig = px.scatter_geo(
        df,
        lat="lat",
        lon="lng",
        color="Type",
        color_discrete_map=TYPE_COLORS,
        hover_name="Institution",
        hover_data={"Location": True, "Enrollment": ":,", "WAC Program": True, "lat": False, "lng": False},
        scope="usa",
        title="Institution Locations",
    )

    fig.update_traces(marker=dict(size=11, line=dict(width=1, color="white")))
    fig.update_layout(
        legend_title="Institution Type",
        margin=dict(l=0, r=0, t=50, b=0),
        height=520,
    )

    return fig


def create_distribution_chart(
    breakdown: dict[str, CategoryCount],
    title: str,
    category_label: str = "Category",
) -> go.Figure:
    """
    Create horizontal bar chart of category shares.

    Args:
        breakdown: Category -> count and percentage, as produced by calculate_statistics
        title: Chart title
        category_label: Axis label for the categories
    """
    if not breakdown:
        return _empty_chart("No data available")

    df = pd.DataFrame(
        [
            {
                category_label: category,
                "Count": data.count,
                "Percentage": float(data.percentage.rstrip("%")),
            }
            for category, data in breakdown.items()
        ]
    ).sort_values("Count", ascending=True)

    fig = px.bar(
        df,
        x="Percentage",
        y=category_label,
        orientation="h",
        color=category_label,
        color_discrete_sequence=ENTITY_COLORS,
        hover_data=["Count"],
        title=title,
    )

    fig.update_layout(
        xaxis_title="% of Institutions",
        xaxis_ticksuffix="%",
        yaxis_title="",
        showlegend=False,
        height=max(300, len(df) * 45 + 100),
    )

    return fig


def create_type_chart(breakdown: dict[str, CategoryCount]) -> go.Figure:
    """Institution type distribution."""
    labeled = {inst_type.title(): data for inst_type, data in breakdown.items()}
    return create_distribution_chart(labeled, "Institutions by Type", "Type")


def create_carnegie_chart(institutions: Sequence[Institution]) -> go.Figure:
    """Carnegie classification distribution using shortened labels."""
    breakdown = category_breakdown(
        list(institutions),
        lambda inst: simplify_carnegie_classification(inst.carnegie_classification),
    )
    return create_distribution_chart(breakdown, "Carnegie Classification", "Classification")


def create_ranking_chart(
    institutions: Sequence[Institution],
    field: str,
    color: Optional[str] = None,
    title: Optional[str] = None,
    currency: bool = False,
) -> go.Figure:
    """
    Create bar chart ranking institutions by a numeric field, largest first.

    Institutions with no value for the field are omitted.

    Args:
        institutions: Records to plot
        field: Numeric institution field
        color: Bar color (default: primary)
        title: Chart title (default: field label by institution)
        currency: Format the value axis as dollars
    """
    label = get_field_label(field)
    rows = [
        {"Institution": inst.short_name, label: getattr(inst, field)}
        for inst in institutions
        if getattr(inst, field) is not None
    ]

    if not rows:
        return _empty_chart(f"No {label.lower()} data available")

    df = pd.DataFrame(rows).sort_values(label, ascending=False, kind="stable")

    fig = px.bar(
        df,
        x="Institution",
        y=label,
        title=title or f"{label} by Institution",
    )
    fig.update_traces(marker_color=color or COLORS["primary"])

    fig.update_layout(
        xaxis_title="",
        xaxis_tickangle=-45,
        yaxis_title=label,
        yaxis_tickformat=",",
        showlegend=False,
    )
    if currency:
        fig.update_layout(yaxis_tickprefix="$")

    return fig


def create_enrollment_chart(institutions: Sequence[Institution]) -> go.Figure:
    return create_ranking_chart(institutions, "total_enrollment", COLORS["primary"], "Total Enrollment")


def create_budget_chart(institutions: Sequence[Institution]) -> go.Figure:
    return create_ranking_chart(
        institutions, "wac_budget", COLORS["secondary"], "WAC Program Budget", currency=True
    )


def create_wi_courses_chart(institutions: Sequence[Institution]) -> go.Figure:
    return create_ranking_chart(
        institutions, "writing_intensive_courses", COLORS["accent"], "Writing Intensive Courses Offered"
    )


def create_comparison_chart(
    institutions: Sequence[Institution],
    fields: Sequence[str],
    title: str = "Program Comparison",
) -> go.Figure:
    """
    Create grouped bar chart comparing numeric fields across institutions.

    Args:
        institutions: Institutions being compared
        fields: Numeric fields to show, one group per field
        title: Chart title
    """
    rows = []
    for inst in institutions:
        for field in fields:
            value = getattr(inst, field)
            if value is not None:
                rows.append(
                    {
                        "Institution": inst.short_name,
                        "Metric": get_field_label(field),
                        "Value": value,
                    }
                )

    if not rows:
        return _empty_chart("No comparable data available")

    df = pd.DataFrame(rows)

    fig = px.bar(
        df,
        x="Metric",
        y="Value",
        color="Institution",
        barmode="group",
        color_discrete_sequence=ENTITY_COLORS,
        title=title,
    )

    fig.update_layout(
        xaxis_title="",
        yaxis_title="",
        legend_title="",
        hovermode="x unified",
    )

    return fig


def _empty_chart(message: str) -> go.Figure:
    """Create an empty chart with a message."""
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
        showarrow=False,
        font=dict(size=16, color="gray"),
    )
    fig.update_layout(
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        height=300,
    )
    return fig
