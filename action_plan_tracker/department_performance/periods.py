# action_plan_tracker/department_performance/periods.py
"""
Period classification helpers.

Maps month labels ("Jan".."Dec") to chronological indexes and quarter
labels. Anything else is unresolved: month_index() returns None and
quarter_of() returns "Unknown".
"""

import logging
from typing import Any, Optional

from .constants import MONTH_ORDER, MONTH_INDEX, QUARTER_ORDER, UNKNOWN_PERIOD

logger = logging.getLogger(__name__)

# Sort position given to labels without a month index
UNRESOLVED_SORT_INDEX = 99


def month_index(label: Any) -> Optional[int]:
    """Return 0..11 for a canonical month label, else None."""
    if not isinstance(label, str):
        return None
    return MONTH_INDEX.get(label)


def quarter_of(label: Any) -> str:
    """Return "Q1".."Q4" for a canonical month label, else "Unknown"."""
    idx = month_index(label)
    if idx is None:
        return UNKNOWN_PERIOD
    return QUARTER_ORDER[idx // 3]


def month_label_from_number(month: Any) -> Optional[str]:
    """
    Convert a 1-based month number (as stored in historical stats) to its label.

    Integral floats and numeric strings are accepted; anything else, or a
    number outside 1..12, gives None.
    """
    try:
        number = float(month)
    except (TypeError, ValueError):
        return None
    if not number.is_integer() or not 1 <= number <= 12:
        return None
    return MONTH_ORDER[int(number) - 1]


def month_sort_key(label: Any) -> int:
    """Chronological sort key; unresolved labels sort after December."""
    idx = month_index(label)
    return UNRESOLVED_SORT_INDEX if idx is None else idx
