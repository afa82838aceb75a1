# action_plan_tracker/department_performance/data_processor.py
"""
Data Processor for Department Performance

VERSION: 1.2.0
CHANGELOG:
- v1.2.0: process() builds only the sections whose selector is given
          (dimension → breakdown, granularity → time & benchmark)
- v1.1.0: process() returns other_year_plan_count for the empty-state message
- v1.0.0: Year filtering, comparison year resolution, dashboard datasets

Process loaded plans based on filter values.
All operations are Pandas-based (instant, no SQL).

This module implements the "Filter Many" part of the
"Load Once, Filter Many" pattern: plans are loaded once per department,
every selector change is answered from memory.
"""

import logging
import time
from datetime import date, datetime
from typing import Dict, List, Optional, Union
import pandas as pd

from .benchmark import BenchmarkComposer, HistoricalInput, has_comparison_data
from .constants import (
    AVAILABLE_YEARS_BACK,
    COMPARISON_NONE,
    COMPARISON_PREVIOUS_YEAR,
)
from .metrics import ActionPlanMetrics, PlansInput, is_blank, ensure_plans_frame
from .models import Dimension, Granularity

logger = logging.getLogger(__name__)

ComparisonSelection = Union[str, int, None]


# =============================================================================
# YEAR HELPERS
# =============================================================================

def _effective_year(value, current_year: int) -> int:
    """Plan year, or current_year when missing/blank/zero."""
    if is_blank(value):
        return current_year
    try:
        year = int(float(value))
    except (TypeError, ValueError):
        return current_year
    return year or current_year


def filter_plans_by_year(plans: PlansInput, year: int, current_year: int) -> pd.DataFrame:
    """
    Keep plans belonging to `year`.

    Plans without a year are treated as belonging to `current_year`.
    """
    df = ensure_plans_frame(plans)
    if df.empty:
        return df.copy()

    effective = df['year'].map(lambda v: _effective_year(v, current_year))
    return df[effective == year].copy()


def resolve_comparison_year(selection: ComparisonSelection, selected_year: int) -> Optional[int]:
    """
    Turn a comparison selection into a year.

    "none" (or None) → None, "prev_year" → selected_year - 1,
    an int or integer string → that year.

    Raises:
        ValueError: For any other selection
    """
    if selection is None or selection == COMPARISON_NONE:
        return None
    if selection == COMPARISON_PREVIOUS_YEAR:
        return selected_year - 1
    try:
        return int(selection)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid comparison selection: {selection!r}")


def get_available_years(current_year: int) -> List[int]:
    """Primary year choices: current year first, then the previous ones."""
    return [current_year - offset for offset in range(AVAILABLE_YEARS_BACK + 1)]


def get_comparison_options(selected_year: int, year_min: int, year_max: int) -> List[ComparisonSelection]:
    """Comparison choices: none, previous year, then fixed years except the selected one."""
    fixed = [y for y in range(year_min, year_max + 1) if y != selected_year]
    return [COMPARISON_NONE, COMPARISON_PREVIOUS_YEAR] + fixed


# =============================================================================
# PROCESSOR
# =============================================================================

class DepartmentDataProcessor:
    """
    Build the datasets the department dashboard needs.

    Every call filters the in-memory plans; sections are only computed when
    their selector is present in filter_values, so each dashboard section
    asks for exactly what it renders.

    Usage:
        processor = DepartmentDataProcessor(plans_df, current_year=2025)

        header = processor.process({'year': 2025})
        breakdown = processor.process({'year': 2025, 'dimension': Dimension.RESPONSIBLE_PARTY})['breakdown']
        timeline = processor.process({
            'year': 2025,
            'granularity': Granularity.MONTHLY,
            'comparison': 'prev_year',
            'historical_stats_df': historical_df,
        })
    """

    def __init__(self, plans: PlansInput, current_year: Optional[int] = None):
        """
        Args:
            plans: All plans of one department (every year)
            current_year: Reference calendar year, defaults to today
        """
        self.plans_df = ensure_plans_frame(plans)
        self.current_year = current_year or date.today().year

    def plans_for_year(self, year: int) -> pd.DataFrame:
        return filter_plans_by_year(self.plans_df, year, self.current_year)

    def process(self, filter_values: Dict) -> Dict:
        """
        Process data based on filter values.

        Args:
            filter_values: Dict containing:
                - year: Selected year (default: current year)
                - dimension: Breakdown dimension; adds 'breakdown'
                - granularity: Time bucket size; adds the time section
                - comparison: "none", "prev_year" (default) or a year
                - historical_stats_df: Historical stats for the comparison year

        Returns:
            Dict containing:
            - year, year_plans_df, summary, other_year_plan_count (always)
            - breakdown (with dimension)
            - time_buckets, comparison_year, comparison_plans_df,
              has_comparison_data, benchmark (with granularity;
              benchmark is None when comparison is "none")
        """
        start_time = time.perf_counter()

        year = filter_values.get('year', self.current_year)
        year_plans_df = self.plans_for_year(year)

        result = {
            'year': year,
            'year_plans_df': year_plans_df,
            'summary': ActionPlanMetrics.calculate_status_summary(year_plans_df),
            'other_year_plan_count': len(self.plans_df) - len(year_plans_df),
        }

        if filter_values.get('dimension') is not None:
            dimension = Dimension(filter_values['dimension'])
            result['breakdown'] = ActionPlanMetrics.aggregate_by_dimension(year_plans_df, dimension)

        if filter_values.get('granularity') is not None:
            granularity = Granularity(filter_values['granularity'])
            result.update(self._time_section(
                year,
                year_plans_df,
                granularity,
                filter_values.get('comparison', COMPARISON_PREVIOUS_YEAR),
                filter_values.get('historical_stats_df'),
            ))

        result['_processed_at'] = datetime.now()
        logger.debug(
            f"[process] year={year} sections={sorted(k for k in result if not k.startswith('_'))} "
            f"plans={len(year_plans_df)} in {time.perf_counter() - start_time:.3f}s"
        )
        return result

    def _time_section(
        self,
        year: int,
        year_plans_df: pd.DataFrame,
        granularity: Granularity,
        comparison: ComparisonSelection,
        historical_df: HistoricalInput
    ) -> Dict:
        comparison_year = resolve_comparison_year(comparison, year)
        section = {
            'time_buckets': ActionPlanMetrics.aggregate_by_period(year_plans_df, granularity),
            'comparison_year': comparison_year,
            'comparison_plans_df': pd.DataFrame(),
            'has_comparison_data': False,
            'benchmark': None,
        }
        if comparison_year is None:
            return section

        comparison_plans_df = self.plans_for_year(comparison_year)
        section['comparison_plans_df'] = comparison_plans_df
        section['has_comparison_data'] = has_comparison_data(comparison_plans_df, historical_df)
        section['benchmark'] = BenchmarkComposer(granularity).compose(
            year_plans_df, comparison_plans_df, historical_df
        )
        return section
