"""
Step 2: Underwriting Classification
Combines condition penalties and BMI drops into a rate class or table rating.
"""

import logging
from types import MappingProxyType
from typing import Iterable, List

from atlas_quote.pipeline.models import BmiInfo, Condition, TableRating, UnderwritingResult


logger = logging.getLogger(__name__)

STANDARD_CLASSES = ("Preferred+", "Preferred", "Standard")
TABLE_ORDER = (TableRating.A, TableRating.B, TableRating.C, TableRating.D)

TABLE_MULTIPLIERS = MappingProxyType({
    TableRating.A: 1.25,
    TableRating.B: 1.50,
    TableRating.C: 1.75,
    TableRating.D: 2.00,
})

# Drops at or above this go to the substandard tables
SUBSTANDARD_DROPS = 3


def count_drops(conditions: Iterable[Condition], bmi_info: BmiInfo) -> int:
    """Total mortality rating steps from conditions and build."""
    return sum(c.class_drop for c in conditions) + bmi_info.drop


def determine_uw_class(conditions: List[Condition], bmi_info: BmiInfo) -> UnderwritingResult:
    """
    Classify a risk.

    Any excluded condition, or three or more drops, moves the client to a
    substandard table. The table advances one letter per drop beyond two and
    stops at D; an excluded condition alone still yields Table A.
    """
    drops = count_drops(conditions, bmi_info)
    excluded = any(c.exclude for c in conditions)

    if excluded or drops >= SUBSTANDARD_DROPS:
        steps = max(1, drops - 2)
        table = TABLE_ORDER[min(steps - 1, len(TABLE_ORDER) - 1)]
        return UnderwritingResult(
            label=f"Substandard (Table {table.value})",
            table=table,
            multiplier=TABLE_MULTIPLIERS[table],
        )

    return UnderwritingResult(
        label=STANDARD_CLASSES[min(drops, len(STANDARD_CLASSES) - 1)],
        table=None,
        multiplier=1.00,
    )


class UnderwritingStep:
    """
    Determines the underwriting class for the selected conditions and build.
    """

    def execute(self, conditions: List[Condition], bmi_info: BmiInfo) -> UnderwritingResult:
        result = determine_uw_class(conditions, bmi_info)
        if result.table is not None:
            refer = [c.label for c in conditions if c.exclude]
            if refer:
                logger.info(f"Refer conditions selected: {', '.join(refer)}")
        return result
