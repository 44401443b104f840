"""Summary statistics and ground-truth counts over institution records."""

from collections import Counter
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable, Optional, Sequence

from .models import (
    R1_CLASSIFICATION,
    CategoryCount,
    DataIntegrity,
    GroundTruthCounts,
    Institution,
    InstitutionStatistics,
    ValidationMetadata,
)

# Preferred display order for Carnegie classifications
CARNEGIE_ORDER = [
    "R1: Doctoral Universities – Very High Research Activity",
    "R2: Doctoral Universities – High Research Activity",
    "Doctoral Universities: High Research Activity",
    "Baccalaureate Colleges: Arts & Sciences Focus",
    "Master's Colleges & Universities: Larger Programs",
    "Master's Colleges & Universities: Medium Programs",
    "Associate's Colleges: High Transfer-High Traditional",
    "Associate's Colleges: High Transfer-Mixed Traditional/Nontraditional",
    "Special Focus Four-Year: Other Special Focus Institutions",
]


def calculate_percentage(count: int, total: int, decimals: int = 1) -> str:
    """
    Format count/total as a percentage string.

    Examples:
        calculate_percentage(8, 12) -> "66.7%"
        calculate_percentage(6, 12, 0) -> "50%"
        calculate_percentage(1, 16) -> "6.3%"
        calculate_percentage(3, 0) -> "0%"

    Ties round half up.
    """
    if total == 0:
        return "0%"
    value = Decimal(count / total * 100).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
    return f"{value}%"


def simplify_carnegie_classification(classification: str) -> str:
    """Shorten a Carnegie label for chart axes."""
    if "R1" in classification:
        return "R1 Doctoral"
    if "R2" in classification:
        return "R2 Doctoral"
    if "Baccalaureate" in classification:
        return "Baccalaureate"
    if "Master's" in classification and "Larger" in classification:
        return "Masters Larger"
    if "Master's" in classification and "Medium" in classification:
        return "Masters Medium"
    if "Associate's" in classification and "Mixed" in classification:
        return "Associates Mixed"
    if "Associate's" in classification and "Traditional" in classification:
        return "Associates Traditional"
    if "Special Focus" in classification:
        return "Special Focus"
    # "Doctoral Universities: High Research Activity" carries no R2 prefix
    if "Doctoral" in classification and "High Research" in classification:
        return "R2 Doctoral"
    return classification


def ordered_carnegie_classifications(institutions: Iterable[Institution]) -> list[str]:
    """Distinct classifications, known labels first in display order, the rest alphabetical."""
    unique = {inst.carnegie_classification for inst in institutions}
    known = [c for c in CARNEGIE_ORDER if c in unique]
    return known + sorted(unique - set(CARNEGIE_ORDER))


def category_breakdown(
    institutions: Sequence[Institution],
    key: Callable[[Institution], Optional[str]],
    decimals: int = 1,
) -> dict[str, CategoryCount]:
    """Category value -> count and percentage of all records; null values count as "Unknown"."""
    total = len(institutions)
    counts = Counter(key(inst) or "Unknown" for inst in institutions)
    return {
        value: CategoryCount(count=count, percentage=calculate_percentage(count, total, decimals))
        for value, count in counts.items()
    }


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def build_validation_metadata(institutions: Sequence[Institution]) -> ValidationMetadata:
    r1 = [inst for inst in institutions if inst.carnegie_classification == R1_CLASSIFICATION]
    return ValidationMetadata(
        calculated_at=datetime.now(timezone.utc).isoformat(),
        data_integrity=DataIntegrity(
            all_have_wac_program_flag=all(inst.has_wac_program is not None for inst in institutions),
            all_have_writing_center_flag=all(inst.has_writing_center is not None for inst in institutions),
            all_have_valid_coordinates=all(
                inst.coordinates is not None and inst.coordinates.is_valid for inst in institutions
            ),
            total_records_processed=len(institutions),
        ),
        ground_truth=GroundTruthCounts(
            total_institutions=len(institutions),
            wac_programs=sum(1 for inst in institutions if inst.has_wac_program),
            writing_centers=sum(1 for inst in institutions if inst.has_writing_center),
            r1_institutions=len(r1),
            r1_institution_names=sorted(inst.short_name for inst in r1),
            carnegie_classifications=len({inst.carnegie_classification for inst in institutions}),
            institution_types=len({inst.institution_type for inst in institutions}),
            states_represented=len({inst.state for inst in institutions}),
        ),
    )


def calculate_statistics(
    institutions: Iterable[Institution],
    include_metadata: bool = False,
) -> InstitutionStatistics:
    """
    Compute summary statistics for a record sequence.

    An empty sequence yields zero counts, "0%" shares, and 0.0 averages.

    Args:
        institutions: Records to summarize
        include_metadata: Attach integrity checks and ground-truth counts
    """
    records = list(institutions)
    total = len(records)

    wac_count = sum(1 for inst in records if inst.has_wac_program)
    center_count = sum(1 for inst in records if inst.has_writing_center)
    budgets = [inst.wac_budget for inst in records if inst.wac_budget is not None]

    return InstitutionStatistics(
        total_institutions=total,
        with_wac_programs=wac_count,
        wac_program_percentage=calculate_percentage(wac_count, total),
        with_writing_centers=center_count,
        writing_center_percentage=calculate_percentage(center_count, total),
        average_enrollment=_mean([inst.total_enrollment for inst in records]),
        average_wac_budget=_mean(budgets),
        total_writing_intensive_courses=sum(
            inst.writing_intensive_courses for inst in records if inst.writing_intensive_courses is not None
        ),
        institutions_by_type=category_breakdown(records, lambda inst: inst.institution_type),
        carnegie_classification_stats=category_breakdown(records, lambda inst: inst.carnegie_classification),
        simplified_carnegie_stats=category_breakdown(
            records, lambda inst: simplify_carnegie_classification(inst.carnegie_classification)
        ),
        institutions_by_size=category_breakdown(records, lambda inst: inst.inst_size),
        institutions_by_state=category_breakdown(records, lambda inst: inst.state),
        metadata=build_validation_metadata(records) if include_metadata else None,
    )


def generate_data_summary(stats: InstitutionStatistics) -> str:
    """Render ground-truth statistics as a text block for prompt embedding."""
    lines = [
        "=== GROUND TRUTH DATA STATISTICS ===",
        "",
        f"Total Institutions: {stats.total_institutions}",
        "",
        "Carnegie Classifications:",
    ]
    for classification, data in stats.carnegie_classification_stats.items():
        lines.append(f"  - {classification}: {data.count} ({data.percentage})")

    lines += ["", "Institution Types:"]
    for inst_type, data in stats.institutions_by_type.items():
        lines.append(f"  - {inst_type}: {data.count} ({data.percentage})")

    lines += [
        "",
        f"WAC Programs: {stats.with_wac_programs} institutions ({stats.wac_program_percentage})",
        f"Writing Centers: {stats.with_writing_centers} institutions ({stats.writing_center_percentage})",
    ]

    if stats.metadata is not None:
        truth = stats.metadata.ground_truth
        lines += [
            "",
            f"R1 Institutions: {truth.r1_institutions} "
            f"({calculate_percentage(truth.r1_institutions, truth.total_institutions)})",
            f"R1 List: {', '.join(truth.r1_institution_names)}",
        ]

    lines += ["", "=== END GROUND TRUTH ==="]
    return "\n".join(lines)
