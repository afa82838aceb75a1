# action_plan_tracker/department_performance/benchmark.py
"""
Year-over-Year Benchmark for Department Performance

VERSION: 1.1.0
CHANGELOG:
- v1.1.0: REFACTORED comparison precedence into PeriodLookup:
          - primary = live comparison-year plans, fallback = historical stats
          - resolve(period) = primary → fallback → None
- v1.0.0: Monthly and quarterly benchmark series

Comparison value precedence per period:
1. Live comparison-year plans, if the period has at least one plan
2. Archived historical completion rate (monthly value, or the mean of the
   monthly values inside a quarter, rounded once)
3. None

Live data always wins, even when a historical value exists for the period.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union
import pandas as pd

from .constants import HISTORICAL_COLUMNS, MONTH_ORDER, QUARTER_ORDER
from .metrics import ActionPlanMetrics, PlansInput, ensure_plans_frame, round_half_up
from .models import BenchmarkPoint, Granularity
from .periods import month_label_from_number, quarter_of

logger = logging.getLogger(__name__)

HistoricalInput = Union[pd.DataFrame, Iterable[dict], None]


def ensure_historical_frame(historical_stats: HistoricalInput) -> pd.DataFrame:
    """Normalise historical stats to a DataFrame with the expected columns."""
    if historical_stats is None:
        df = pd.DataFrame(columns=HISTORICAL_COLUMNS)
    elif isinstance(historical_stats, pd.DataFrame):
        df = historical_stats
    else:
        df = pd.DataFrame(list(historical_stats))

    missing = [col for col in HISTORICAL_COLUMNS if col not in df.columns]
    if missing:
        df = df.copy()
        for col in missing:
            df[col] = None
    return df


def _to_rate(value) -> Optional[float]:
    try:
        rate = float(value)
    except (TypeError, ValueError):
        return None
    if pd.isna(rate):
        return None
    return rate


@dataclass
class PeriodLookup:
    """Two-tier period → rate table: primary values shadow fallback values."""
    primary: Dict[str, int] = field(default_factory=dict)
    fallback: Dict[str, int] = field(default_factory=dict)

    def resolve(self, period: str) -> Optional[int]:
        if period in self.primary:
            return self.primary[period]
        return self.fallback.get(period)


class BenchmarkComposer:
    """
    Merge current-year rates with comparison-year rates per period.

    Usage:
        composer = BenchmarkComposer(Granularity.QUARTERLY)
        points = composer.compose(current_df, comparison_df, historical_df)

    Not called when the comparison year is "none"; that is the caller's choice.
    """

    def __init__(self, granularity: Granularity = Granularity.MONTHLY):
        self.granularity = Granularity(granularity)

    @property
    def periods(self) -> List[str]:
        """Canonical periods, always emitted in this order."""
        if self.granularity is Granularity.MONTHLY:
            return list(MONTH_ORDER)
        return list(QUARTER_ORDER)

    # =========================================================================
    # RATE TABLES
    # =========================================================================

    def live_rates(self, plans: PlansInput) -> Dict[str, int]:
        """Rate per period that has at least one plan."""
        buckets = ActionPlanMetrics.aggregate_by_period(plans, self.granularity)
        return {b.key: b.rate for b in buckets if b.total > 0}

    def historical_rates(self, historical_stats: HistoricalInput) -> Dict[str, int]:
        """
        Rate per period from archived monthly stats.

        Monthly: the record's rate (a later record for the same month wins).
        Quarterly: simple mean of the quarter's monthly rates, rounded at the end.
        """
        df = ensure_historical_frame(historical_stats)
        if df.empty:
            return {}

        monthly: Dict[str, float] = {}
        by_quarter: Dict[str, List[float]] = {q: [] for q in QUARTER_ORDER}
        skipped = 0

        for month, value in zip(df['month'], df['completion_rate']):
            label = month_label_from_number(month)
            rate = _to_rate(value)
            if label is None or rate is None:
                skipped += 1
                continue
            monthly[label] = rate
            by_quarter[quarter_of(label)].append(rate)

        if skipped:
            logger.debug(f"[historical_rates] skipped {skipped} historical records without month/rate")

        if self.granularity is Granularity.MONTHLY:
            return {label: round_half_up(rate) for label, rate in monthly.items()}

        return {
            quarter: round_half_up(sum(rates) / len(rates))
            for quarter, rates in by_quarter.items()
            if rates
        }

    def build_comparison_lookup(
        self,
        comparison_plans: PlansInput,
        historical_stats: HistoricalInput
    ) -> PeriodLookup:
        return PeriodLookup(
            primary=self.live_rates(comparison_plans),
            fallback=self.historical_rates(historical_stats),
        )

    # =========================================================================
    # COMPOSITION
    # =========================================================================

    def compose(
        self,
        current_plans: PlansInput,
        comparison_plans: PlansInput = None,
        historical_stats: HistoricalInput = None
    ) -> List[BenchmarkPoint]:
        """
        One BenchmarkPoint per canonical period (12 months or Q1..Q4).

        current is None when the current year has no plans in the period;
        comparison is None when neither live nor historical data exist.
        """
        current = self.live_rates(current_plans)
        comparison = self.build_comparison_lookup(comparison_plans, historical_stats)

        points = [
            BenchmarkPoint(
                period=period,
                current=current.get(period),
                comparison=comparison.resolve(period),
            )
            for period in self.periods
        ]

        logger.debug(
            f"[compose] {self.granularity.value}: "
            f"{sum(p.current is not None for p in points)} current / "
            f"{sum(p.comparison is not None for p in points)} comparison periods with data"
        )
        return points


def compose_benchmark(
    current_plans: PlansInput,
    comparison_plans: PlansInput = None,
    historical_stats: HistoricalInput = None,
    granularity: Granularity = Granularity.MONTHLY
) -> List[BenchmarkPoint]:
    """Shortcut for BenchmarkComposer(granularity).compose(...)."""
    return BenchmarkComposer(granularity).compose(current_plans, comparison_plans, historical_stats)


def has_comparison_data(comparison_plans: PlansInput, historical_stats: HistoricalInput) -> bool:
    """True when either live comparison plans or historical stats exist."""
    return not ensure_plans_frame(comparison_plans).empty or not ensure_historical_frame(historical_stats).empty
