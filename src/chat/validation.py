"""Sanity checks for count claims in assistant replies."""

import logging
import re
from typing import Optional, Sequence

from src.data.models import InstitutionStatistics

logger = logging.getLogger(__name__)

COUNT_PATTERN = re.compile(r"(\d+)\s+(R1\s+)?institutions?", re.IGNORECASE)
LIST_ITEM_PATTERN = re.compile(r"^\d+\.\s+", re.MULTILINE)


def validate_count(claimed: int, items: Sequence) -> Optional[str]:
    """Warning text when a claimed count disagrees with the items listed, else None."""
    if claimed == len(items):
        return None
    return (
        f"Count mismatch: claimed {claimed} institutions "
        f"but provided {len(items)}"
    )


def check_response_counts(text: str, stats: InstitutionStatistics) -> Optional[str]:
    """
    Compare count claims in a reply against its numbered list and the R1 total.

    Returns a warning for the first mismatch found, or None. The R1 check
    needs ``stats`` computed with metadata; without it only the list check runs.
    """
    matches = list(COUNT_PATTERN.finditer(text))
    if not matches:
        return None

    warning = None
    list_count = len(LIST_ITEM_PATTERN.findall(text))
    if list_count:
        for match in matches:
            claimed = int(match.group(1))
            if claimed != list_count:
                warning = (
                    f"Response claimed {claimed} institutions but listed {list_count}. "
                    f"The actual count is {list_count}."
                )
                break

    if stats.metadata is not None:
        r1_total = stats.metadata.ground_truth.r1_institutions
        for match in matches:
            claimed = int(match.group(1))
            if match.group(2) and claimed != r1_total:
                warning = (
                    f"Response claimed {claimed} R1 institutions. "
                    f"The correct count is {r1_total} R1 institutions."
                )
                break

    if warning:
        logger.warning("Count validation: %s", warning)
    return warning
