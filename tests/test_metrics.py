# tests/test_metrics.py
import pandas as pd
import pytest

from action_plan_tracker.department_performance.constants import STATUS_ACHIEVED, STATUS_PENDING
from action_plan_tracker.department_performance.metrics import (
    ActionPlanMetrics,
    calculate_rate,
    ensure_plans_frame,
    rate_band,
    round_half_up,
    truncate_label,
)
from action_plan_tracker.department_performance.models import Dimension, Granularity, StatusSummary


def _keys(buckets):
    return [b.key for b in buckets]


# =============================================================================
# HELPERS
# =============================================================================

class TestRounding:

    @pytest.mark.parametrize("value, expected", [(2.5, 3), (12.5, 13), (66.666, 67), (0.4, 0), (99.5, 100)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_calculate_rate(self):
        assert calculate_rate(2, 3) == 67
        assert calculate_rate(1, 8) == 13
        assert calculate_rate(4, 4) == 100

    def test_zero_total_is_zero_rate(self):
        assert calculate_rate(0, 0) == 0


@pytest.mark.parametrize("rate, band", [(100, "good"), (90, "good"), (89, "warning"), (70, "warning"), (69, "critical"), (None, "critical")])
def test_rate_band(rate, band):
    assert rate_band(rate) == band


class TestTruncateLabel:

    def test_short_label_unchanged(self):
        assert truncate_label("Cost Efficiency") == "Cost Efficiency"

    def test_exactly_max_length_unchanged(self):
        label = "x" * 25
        assert truncate_label(label) == label

    def test_long_label_cut(self):
        assert truncate_label("Digital Transformation Of Core Services") == "Digital Transformation..."
        assert len(truncate_label("y" * 26)) == 25


def test_ensure_plans_frame_adds_missing_columns():
    df = ensure_plans_frame([{"status": STATUS_ACHIEVED}])
    assert {"department_code", "month", "year", "goal_strategy", "pic"} <= set(df.columns)
    assert df.loc[0, "month"] is None


def test_ensure_plans_frame_does_not_touch_caller_frame():
    original = pd.DataFrame([{"status": STATUS_ACHIEVED}])
    ensure_plans_frame(original)
    assert list(original.columns) == ["status"]


# =============================================================================
# STATUS SUMMARY
# =============================================================================

class TestStatusSummary:

    def test_all_achieved(self, plan_factory):
        plans = [plan_factory(status=STATUS_ACHIEVED) for _ in range(4)]
        summary = ActionPlanMetrics.calculate_status_summary(plans)
        assert summary == StatusSummary(
            total=4, achieved=4, in_progress=0, pending=0, not_achieved=0, rate=100, precise_rate=100.0
        )

    def test_mixed_statuses(self, mixed_plans_df):
        summary = ActionPlanMetrics.calculate_status_summary(mixed_plans_df)
        assert summary.total == 8
        assert summary.achieved == 4
        assert summary.in_progress == 1
        assert summary.pending == 2
        assert summary.not_achieved == 1
        assert summary.rate == 50
        assert summary.needs_attention == 3

    def test_counts_do_not_exceed_total(self, plan_factory):
        plans = [plan_factory(status=STATUS_ACHIEVED), plan_factory(status="Cancelled"), plan_factory(status=None)]
        summary = ActionPlanMetrics.calculate_status_summary(plans)
        assert summary.total == 3
        assert summary.achieved + summary.in_progress + summary.pending + summary.not_achieved == 1
        assert summary.rate == 33
        assert summary.precise_rate == 33.3

    def test_status_match_is_exact(self, plan_factory):
        summary = ActionPlanMetrics.calculate_status_summary([plan_factory(status="achieved")])
        assert summary.achieved == 0

    def test_precise_rate_rounds_half_up(self, plan_factory):
        plans = [plan_factory(status=STATUS_ACHIEVED)] + [plan_factory() for _ in range(15)]
        summary = ActionPlanMetrics.calculate_status_summary(plans)
        assert summary.precise_rate == 6.3
        assert summary.rate == 6

    @pytest.mark.parametrize("empty", [None, [], pd.DataFrame()])
    def test_empty_input(self, empty):
        summary = ActionPlanMetrics.calculate_status_summary(empty)
        assert summary == StatusSummary()
        assert summary.rate == 0


# =============================================================================
# DIMENSION BREAKDOWN
# =============================================================================

class TestAggregateByDimension:

    def test_long_strategy_and_blank_strategy(self, plan_factory):
        long_name = "Digital Transformation Of Core Services"
        plans = [
            plan_factory(goal_strategy=long_name, status=STATUS_ACHIEVED),
            plan_factory(goal_strategy=long_name, status=STATUS_ACHIEVED),
            plan_factory(goal_strategy=long_name, status=STATUS_PENDING),
            plan_factory(goal_strategy="", status=STATUS_PENDING),
        ]
        buckets = ActionPlanMetrics.aggregate_by_dimension(plans, Dimension.STRATEGY)

        assert [(b.key, b.rate, b.total, b.achieved) for b in buckets] == [
            ("Digital Transformation...", 67, 3, 2),
            ("Uncategorized", 0, 1, 0),
        ]
        assert buckets[0].full_name == long_name

    def test_strategy_sorted_by_rate(self, mixed_plans_df):
        buckets = ActionPlanMetrics.aggregate_by_dimension(mixed_plans_df, Dimension.STRATEGY)
        assert [(b.key, b.total, b.achieved, b.rate) for b in buckets] == [
            ("Cost Efficiency", 3, 2, 67),
            ("Uncategorized", 2, 1, 50),
            ("Employee Engagement", 3, 1, 33),
        ]

    def test_responsible_party(self, mixed_plans):
        buckets = ActionPlanMetrics.aggregate_by_dimension(mixed_plans, Dimension.RESPONSIBLE_PARTY)
        assert [(b.key, b.total, b.rate) for b in buckets] == [
            ("Alice", 4, 75),
            ("Unassigned", 2, 50),
            ("Bob", 2, 0),
        ]

    def test_dimension_accepts_enum_value(self, mixed_plans):
        by_value = ActionPlanMetrics.aggregate_by_dimension(mixed_plans, "pic")
        by_enum = ActionPlanMetrics.aggregate_by_dimension(mixed_plans, Dimension.RESPONSIBLE_PARTY)
        assert by_value == by_enum

    def test_unknown_dimension_rejected(self, mixed_plans):
        with pytest.raises(ValueError):
            ActionPlanMetrics.aggregate_by_dimension(mixed_plans, "department")

    def test_equal_rates_keep_first_seen_order(self, plan_factory):
        plans = [
            plan_factory(goal_strategy="Zeta", status=STATUS_ACHIEVED),
            plan_factory(goal_strategy="Alpha", status=STATUS_ACHIEVED),
            plan_factory(goal_strategy="Mid", status=STATUS_PENDING),
        ]
        buckets = ActionPlanMetrics.aggregate_by_dimension(plans)
        assert _keys(buckets) == ["Zeta", "Alpha", "Mid"]

    def test_truncated_labels_collide(self, plan_factory):
        plans = [
            plan_factory(goal_strategy="Digital Transformation Of Core Services", status=STATUS_ACHIEVED),
            plan_factory(goal_strategy="Digital Transformation Roadmap 2025", status=STATUS_PENDING),
        ]
        buckets = ActionPlanMetrics.aggregate_by_dimension(plans)
        assert len(buckets) == 1
        assert buckets[0].total == 2
        assert buckets[0].rate == 50
        assert buckets[0].full_name == "Digital Transformation Of Core Services"

    def test_whitespace_is_trimmed(self, plan_factory):
        plans = [plan_factory(pic="  Alice "), plan_factory(pic="Alice")]
        buckets = ActionPlanMetrics.aggregate_by_dimension(plans, Dimension.RESPONSIBLE_PARTY)
        assert _keys(buckets) == ["Alice"]
        assert buckets[0].total == 2

    def test_totals_sum_to_plan_count(self, mixed_plans):
        buckets = ActionPlanMetrics.aggregate_by_dimension(mixed_plans)
        assert sum(b.total for b in buckets) == len(mixed_plans)

    def test_empty(self):
        assert ActionPlanMetrics.aggregate_by_dimension([]) == []


# =============================================================================
# PERIOD AGGREGATION
# =============================================================================

class TestAggregateByPeriod:

    def test_monthly_chronological(self, mixed_plans):
        buckets = ActionPlanMetrics.aggregate_by_period(mixed_plans, Granularity.MONTHLY)
        assert [(b.key, b.total, b.rate) for b in buckets] == [
            ("Jan", 2, 50),
            ("Feb", 1, 100),
            ("Apr", 1, 0),
            ("May", 1, 0),
            ("Jul", 2, 100),
            ("Aug", 1, 0),
        ]

    def test_quarterly(self, mixed_plans):
        buckets = ActionPlanMetrics.aggregate_by_period(mixed_plans, Granularity.QUARTERLY)
        assert [(b.key, b.total, b.achieved, b.rate) for b in buckets] == [
            ("Q1", 3, 2, 67),
            ("Q2", 2, 0, 0),
            ("Q3", 3, 2, 67),
        ]

    def test_unknown_months(self, plan_factory):
        plans = [
            plan_factory(month="Smarch"),
            plan_factory(month=None),
            plan_factory(month="Feb", status=STATUS_ACHIEVED),
        ]
        monthly = ActionPlanMetrics.aggregate_by_period(plans, Granularity.MONTHLY)
        assert _keys(monthly) == ["Feb", "Smarch", "Unknown"]

        quarterly = ActionPlanMetrics.aggregate_by_period(plans, Granularity.QUARTERLY)
        assert [(b.key, b.total) for b in quarterly] == [("Q1", 1), ("Unknown", 2)]

    def test_unknown_granularity_rejected(self, mixed_plans):
        with pytest.raises(ValueError):
            ActionPlanMetrics.aggregate_by_period(mixed_plans, "weekly")

    def test_empty(self):
        assert ActionPlanMetrics.aggregate_by_period(None, Granularity.QUARTERLY) == []


# =============================================================================
# STRATEGY DISTRIBUTION
# =============================================================================

class TestStrategyDistribution:

    def test_small_set_not_folded(self, mixed_plans):
        slices = ActionPlanMetrics.calculate_strategy_distribution(mixed_plans)
        assert [(s.name, s.value, s.percentage) for s in slices] == [
            ("Employee Engagement", 3, 38),
            ("Cost Efficiency", 3, 38),
            ("Uncategorized", 2, 25),
        ]

    def test_folds_tail_into_others(self, plan_factory):
        counts = {"A": 3, "B": 2, "C": 2, "D": 1, "E": 1, "F": 1, "G": 1}
        plans = [plan_factory(goal_strategy=name) for name, n in counts.items() for _ in range(n)]

        slices = ActionPlanMetrics.calculate_strategy_distribution(plans)

        assert [s.name for s in slices] == ["A", "B", "C", "D", "E", "Others"]
        others = slices[-1]
        assert others.value == 2
        assert others.full_name == "Others (2 strategies)"
        assert others.percentage == 18
        assert sum(s.value for s in slices) == len(plans)

    def test_long_names_truncated_for_display(self, plan_factory):
        slices = ActionPlanMetrics.calculate_strategy_distribution(
            [plan_factory(goal_strategy="Digital Transformation Of Core Services")]
        )
        assert slices[0].name == "Digital Transformation..."
        assert slices[0].full_name == "Digital Transformation Of Core Services"
        assert slices[0].percentage == 100

    def test_empty(self):
        assert ActionPlanMetrics.calculate_strategy_distribution([]) == []


# =============================================================================
# NULLABLE DTYPES
# =============================================================================

class TestNullableDtypes:
    """Frames coming out of convert_dtypes() carry pd.NA instead of None."""

    @pytest.fixture
    def nullable_plans(self, plan_factory):
        return pd.DataFrame([
            plan_factory(month="Jan", status=STATUS_ACHIEVED, goal_strategy="Retention"),
            plan_factory(month="Jan", status=None, goal_strategy="Retention"),
            plan_factory(month=None, status=STATUS_PENDING, goal_strategy=None, pic=None),
        ]).convert_dtypes()

    def test_status_summary(self, nullable_plans):
        summary = ActionPlanMetrics.calculate_status_summary(nullable_plans)
        assert (summary.total, summary.achieved, summary.pending, summary.rate) == (3, 1, 1, 33)

    def test_breakdown(self, nullable_plans):
        buckets = ActionPlanMetrics.aggregate_by_dimension(nullable_plans, Dimension.STRATEGY)
        assert [(b.key, b.total, b.achieved) for b in buckets] == [
            ("Retention", 2, 1),
            ("Uncategorized", 1, 0),
        ]

    def test_period_aggregation(self, nullable_plans):
        monthly = ActionPlanMetrics.aggregate_by_period(nullable_plans, Granularity.MONTHLY)
        assert [(b.key, b.total, b.rate) for b in monthly] == [("Jan", 2, 50), ("Unknown", 1, 0)]

        quarterly = ActionPlanMetrics.aggregate_by_period(nullable_plans, Granularity.QUARTERLY)
        assert [b.key for b in quarterly] == ["Q1", "Unknown"]
