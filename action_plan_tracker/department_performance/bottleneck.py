# action_plan_tracker/department_performance/bottleneck.py
"""
Bottleneck Calculator for Department Performance

VERSION: 1.1.0
CHANGELOG:
- v1.1.0: Entries carry the department display name
- v1.0.0: Overdue detection and department ranking

Overdue plan definition:
- status is not "Achieved" (case-insensitive; missing status counts as unresolved)
- month index is STRICTLY before the reference month
- plans with unresolvable month labels are never overdue

The reference month is always supplied by the caller, never read from the clock.
"""

import logging
from typing import Dict, List, Optional
import pandas as pd

from .constants import (
    BOTTLENECK_TOP_N,
    DEPARTMENT_NAMES,
    STATUS_ACHIEVED,
    UNKNOWN_DEPARTMENT,
)
from .metrics import PlansInput, ensure_plans_frame, text_or_sentinel
from .models import BottleneckEntry
from .periods import month_index

logger = logging.getLogger(__name__)


class BottleneckCalculator:
    """
    Find overdue, unresolved plans and rank departments by overdue count.

    Usage:
        calculator = BottleneckCalculator(reference_month_index=date.today().month - 1)
        ranking = calculator.rank_departments(plans_df)
        if not ranking:
            # all clear
            ...
    """

    def __init__(
        self,
        reference_month_index: int,
        top_n: int = BOTTLENECK_TOP_N,
        department_names: Optional[Dict[str, str]] = None
    ):
        """
        Args:
            reference_month_index: Current month, 0 = Jan .. 11 = Dec
            top_n: Number of departments to return
            department_names: code → display name lookup (defaults to DEPARTMENTS)
        """
        if not 0 <= reference_month_index <= 11:
            raise ValueError(f"reference_month_index must be 0..11, got {reference_month_index}")
        self.reference_month_index = reference_month_index
        self.top_n = top_n
        self.department_names = department_names if department_names is not None else DEPARTMENT_NAMES

    def _is_overdue(self, status, month) -> bool:
        if isinstance(status, str) and status.lower() == STATUS_ACHIEVED.lower():
            return False
        idx = month_index(month)
        if idx is None:
            return False
        return idx < self.reference_month_index

    def get_overdue_plans(self, plans: PlansInput) -> pd.DataFrame:
        """Return the subset of plans that are overdue."""
        df = ensure_plans_frame(plans)
        if df.empty:
            return df

        mask = [
            self._is_overdue(status, month)
            for status, month in zip(df['status'], df['month'])
        ]
        return df[pd.Series(mask, index=df.index, dtype=bool)]

    def rank_departments(self, plans: PlansInput) -> List[BottleneckEntry]:
        """
        Departments ranked by descending overdue count, top N only.

        An empty list means no bottlenecks (all departments on track).
        Ties keep first-encountered order.
        """
        overdue_df = self.get_overdue_plans(plans)
        if overdue_df.empty:
            return []

        departments = overdue_df['department_code'].map(lambda v: text_or_sentinel(v, UNKNOWN_DEPARTMENT))
        counts = departments.groupby(departments, sort=False).size()
        counts = counts.sort_values(ascending=False, kind='stable').head(self.top_n)

        logger.debug(
            f"[rank_departments] {len(overdue_df)} overdue plans across "
            f"{departments.nunique()} departments (ref month {self.reference_month_index})"
        )

        return [
            BottleneckEntry(
                department=str(code),
                overdue=int(count),
                name=self.department_names.get(code, str(code)),
            )
            for code, count in counts.items()
        ]

    @staticmethod
    def total_overdue(ranking: List[BottleneckEntry]) -> int:
        return sum(entry.overdue for entry in ranking)


def rank_bottlenecks(
    plans: PlansInput,
    reference_month_index: int,
    top_n: int = BOTTLENECK_TOP_N
) -> List[BottleneckEntry]:
    """Shortcut for BottleneckCalculator(...).rank_departments(plans)."""
    return BottleneckCalculator(reference_month_index, top_n=top_n).rank_departments(plans)
