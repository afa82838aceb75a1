# action_plan_tracker/department_performance/metrics.py
"""
Completion Metrics for Department Performance

VERSION: 1.2.0
CHANGELOG:
- v1.2.0: Added calculate_strategy_distribution() (top 5 + Others)
- v1.1.0: aggregate_by_dimension() keeps first full name per bucket for tooltips
- v1.0.0: Status summary, dimension breakdown and period aggregation

All calculations are pure Pandas, no SQL and no Streamlit. Inputs are
plan collections (DataFrame, list of dicts or None); nothing is mutated.
"""

import logging
import numpy as np
from typing import Any, Iterable, List, Optional, Union
import pandas as pd

from .constants import (
    PLAN_COLUMNS,
    STATUS_ACHIEVED,
    STATUS_ON_PROGRESS,
    STATUS_PENDING,
    STATUS_NOT_ACHIEVED,
    UNCATEGORIZED_STRATEGY,
    UNKNOWN_PERIOD,
    LABEL_MAX_LENGTH,
    LABEL_TRUNCATE_LENGTH,
    LABEL_ELLIPSIS,
    STRATEGY_DISTRIBUTION_TOP_N,
    STRATEGY_DISTRIBUTION_MAX_SLICES,
    OTHERS_LABEL,
    RATE_GOOD_THRESHOLD,
    RATE_WARNING_THRESHOLD,
)
from .models import (
    AggregatedBucket,
    Dimension,
    DistributionSlice,
    Granularity,
    StatusSummary,
)
from .periods import month_sort_key, quarter_of

logger = logging.getLogger(__name__)

PlansInput = Union[pd.DataFrame, Iterable[dict], None]


# =============================================================================
# HELPERS
# =============================================================================

def round_half_up(value: float) -> int:
    """Round .5 upwards (2.5 -> 3), unlike Python's round() which rounds to even."""
    return int(np.floor(value + 0.5))


def calculate_rate(achieved: int, total: int) -> int:
    """
    Completion rate in whole percent.

    Zero total is defined as 0%, never a division error.
    """
    if total <= 0:
        return 0
    return round_half_up(achieved / total * 100)


def rate_band(rate: Optional[float]) -> str:
    """Colour band for a rate: good (>=90), warning (>=70) or critical."""
    value = rate or 0
    if value >= RATE_GOOD_THRESHOLD:
        return "good"
    if value >= RATE_WARNING_THRESHOLD:
        return "warning"
    return "critical"


def truncate_label(key: str) -> str:
    """Cut long keys to 22 chars + '...'; the result is also the group identity."""
    if len(key) > LABEL_MAX_LENGTH:
        return key[:LABEL_TRUNCATE_LENGTH] + LABEL_ELLIPSIS
    return key


def ensure_plans_frame(plans: PlansInput) -> pd.DataFrame:
    """
    Normalise a plan collection to a DataFrame carrying every plan column.

    The caller's DataFrame is only copied when columns must be added.
    """
    if plans is None:
        df = pd.DataFrame(columns=PLAN_COLUMNS)
    elif isinstance(plans, pd.DataFrame):
        df = plans
    else:
        df = pd.DataFrame(list(plans))

    missing = [col for col in PLAN_COLUMNS if col not in df.columns]
    if missing:
        df = df.copy()
        for col in missing:
            df[col] = None
    return df


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def text_or_sentinel(value: Any, sentinel: str) -> str:
    """Trimmed text value, or the sentinel when blank."""
    if is_blank(value):
        return sentinel
    return str(value).strip()


def _month_label(value: Any) -> str:
    """Literal month label, or "Unknown" when absent."""
    if is_blank(value):
        return UNKNOWN_PERIOD
    return str(value)


def status_mask(df: pd.DataFrame, status: str) -> pd.Series:
    """Exact status match; missing statuses never match (safe for nullable dtypes)."""
    return df['status'].eq(status).fillna(False).astype(bool)


def achieved_mask(df: pd.DataFrame) -> pd.Series:
    return status_mask(df, STATUS_ACHIEVED)


def _aggregate(
    keys: pd.Series,
    achieved: pd.Series,
    full_names: pd.Series = None
) -> List[AggregatedBucket]:
    """
    Group plans by key in first-encountered order and compute total/achieved/rate.
    """
    frame = pd.DataFrame({
        'key': keys.to_numpy(),
        'achieved': achieved.to_numpy(dtype=int),
        'full_name': (full_names if full_names is not None else keys).to_numpy(),
    })

    grouped = frame.groupby('key', sort=False).agg(
        total=('achieved', 'size'),
        achieved=('achieved', 'sum'),
        full_name=('full_name', 'first'),
    )

    return [
        AggregatedBucket(
            key=str(row.Index),
            total=int(row.total),
            achieved=int(row.achieved),
            rate=calculate_rate(int(row.achieved), int(row.total)),
            full_name=str(row.full_name),
        )
        for row in grouped.itertuples()
    ]


# =============================================================================
# METRICS CALCULATOR
# =============================================================================

class ActionPlanMetrics:
    """
    Aggregations over action plan collections.

    Usage:
        summary = ActionPlanMetrics.calculate_status_summary(plans_df)
        breakdown = ActionPlanMetrics.aggregate_by_dimension(plans_df, Dimension.STRATEGY)
        monthly = ActionPlanMetrics.aggregate_by_period(plans_df, Granularity.MONTHLY)

    Note: Plans are expected to be pre-filtered to one year, see
    data_processor.filter_plans_by_year().
    """

    # =========================================================================
    # STATUS SUMMARY
    # =========================================================================

    @staticmethod
    def calculate_status_summary(plans: PlansInput) -> StatusSummary:
        """
        Count plans per status and compute the completion rate.

        Empty input yields all zeros and a 0% rate (never None).
        """
        df = ensure_plans_frame(plans)
        total = len(df)
        if total == 0:
            return StatusSummary()

        achieved = int(achieved_mask(df).sum())

        return StatusSummary(
            total=total,
            achieved=achieved,
            in_progress=int(status_mask(df, STATUS_ON_PROGRESS).sum()),
            pending=int(status_mask(df, STATUS_PENDING).sum()),
            not_achieved=int(status_mask(df, STATUS_NOT_ACHIEVED).sum()),
            rate=calculate_rate(achieved, total),
            precise_rate=round_half_up(achieved / total * 1000) / 10,
        )

    # =========================================================================
    # DIMENSION BREAKDOWN
    # =========================================================================

    @staticmethod
    def aggregate_by_dimension(
        plans: PlansInput,
        dimension: Dimension = Dimension.STRATEGY
    ) -> List[AggregatedBucket]:
        """
        Group plans by strategy or PIC, sorted by descending rate.

        The truncated label is the bucket identity, so two long values
        sharing their first 22 characters land in the same bucket.
        Equal rates keep first-encountered order.
        """
        dimension = Dimension(dimension)
        df = ensure_plans_frame(plans)
        if df.empty:
            return []

        full_names = df[dimension.field].map(lambda v: text_or_sentinel(v, dimension.sentinel))
        keys = full_names.map(truncate_label)

        buckets = _aggregate(keys, achieved_mask(df), full_names)
        logger.debug(f"[aggregate_by_dimension] {dimension.name}: {len(df)} plans → {len(buckets)} buckets")

        return sorted(buckets, key=lambda b: -b.rate)

    # =========================================================================
    # PERIOD AGGREGATION
    # =========================================================================

    @staticmethod
    def period_keys(plans: PlansInput, granularity: Granularity) -> pd.Series:
        """Month label (literal, "Unknown" if absent) or quarter label per plan."""
        granularity = Granularity(granularity)
        df = ensure_plans_frame(plans)
        if granularity is Granularity.MONTHLY:
            return df['month'].map(_month_label)
        return df['month'].map(quarter_of)

    @staticmethod
    def aggregate_by_period(
        plans: PlansInput,
        granularity: Granularity = Granularity.MONTHLY
    ) -> List[AggregatedBucket]:
        """
        Group plans by month or quarter, sorted chronologically.

        Monthly: Jan..Dec, unresolved labels last in first-encountered order.
        Quarterly: Q1..Q4 then "Unknown".
        """
        granularity = Granularity(granularity)
        df = ensure_plans_frame(plans)
        if df.empty:
            return []

        keys = ActionPlanMetrics.period_keys(df, granularity)
        buckets = _aggregate(keys, achieved_mask(df))

        if granularity is Granularity.MONTHLY:
            return sorted(buckets, key=lambda b: month_sort_key(b.key))
        return sorted(buckets, key=lambda b: b.key)

    # =========================================================================
    # STRATEGY DISTRIBUTION
    # =========================================================================

    @staticmethod
    def calculate_strategy_distribution(plans: PlansInput) -> List[DistributionSlice]:
        """
        Share of plans per strategy for the donut chart.

        Groups by the full strategy text. With more than 6 strategies the
        top 5 are kept and the rest fold into a single "Others" slice.
        """
        df = ensure_plans_frame(plans)
        total = len(df)
        if total == 0:
            return []

        strategies = df['goal_strategy'].map(lambda v: text_or_sentinel(v, UNCATEGORIZED_STRATEGY))
        counts = strategies.groupby(strategies, sort=False).size()
        counts = counts.sort_values(ascending=False, kind='stable')

        slices = [
            DistributionSlice(
                name=truncate_label(str(name)),
                full_name=str(name),
                value=int(count),
                percentage=round_half_up(count / total * 100),
            )
            for name, count in counts.items()
        ]

        if len(slices) <= STRATEGY_DISTRIBUTION_MAX_SLICES:
            return slices

        top = slices[:STRATEGY_DISTRIBUTION_TOP_N]
        others = slices[STRATEGY_DISTRIBUTION_TOP_N:]
        others_total = sum(s.value for s in others)

        return top + [
            DistributionSlice(
                name=OTHERS_LABEL,
                full_name=f"{OTHERS_LABEL} ({len(others)} strategies)",
                value=others_total,
                percentage=round_half_up(others_total / total * 100),
            )
        ]


# =============================================================================
# MODULE-LEVEL SHORTCUTS
# =============================================================================

calculate_status_summary = ActionPlanMetrics.calculate_status_summary
aggregate_by_dimension = ActionPlanMetrics.aggregate_by_dimension
aggregate_by_period = ActionPlanMetrics.aggregate_by_period
calculate_strategy_distribution = ActionPlanMetrics.calculate_strategy_distribution
