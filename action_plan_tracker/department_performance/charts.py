# action_plan_tracker/department_performance/charts.py
"""
Altair Chart Builders for Department Performance

VERSION: 1.2.0
CHANGELOG:
- v1.2.0: ADDED build_strategy_distribution_chart() donut
- v1.1.0: build_benchmark_chart(): None periods render as gaps, not 0%
          - Comparison line drawn only when comparison data exists
- v1.0.0: Status cards, breakdown, time and bottleneck charts
"""

import logging
from typing import List, Optional
import pandas as pd
import altair as alt
import streamlit as st

from .constants import COLORS, DISTRIBUTION_COLORS, MONTH_ORDER, QUARTER_ORDER, CHART_WIDTH, CHART_HEIGHT
from .metrics import rate_band
from .models import (
    AggregatedBucket,
    BenchmarkPoint,
    BottleneckEntry,
    DistributionSlice,
    Granularity,
    StatusSummary,
)

logger = logging.getLogger(__name__)


def _bar_color(rate: Optional[float]) -> str:
    return COLORS[rate_band(rate)]


class DepartmentCharts:
    """Chart builders for the department performance dashboard."""

    # =========================================================================
    # STATUS CARDS
    # =========================================================================

    @staticmethod
    def render_status_cards(summary: StatusSummary):
        """Render KPI summary cards using Streamlit metrics."""
        with st.container(border=True):
            st.markdown("**🎯 PERFORMANCE SUMMARY**")

            col1, col2, col3, col4, col5 = st.columns(5)

            with col1:
                st.metric(
                    label="Total Plans",
                    value=f"{summary.total:,}",
                    help="All action plans in the selected year"
                )
            with col2:
                st.metric(
                    label="Completion Rate",
                    value=f"{summary.rate}%",
                    help=f"Achieved ÷ Total = {summary.precise_rate:.1f}%"
                )
            with col3:
                st.metric(label="Achieved", value=f"{summary.achieved:,}")
            with col4:
                st.metric(label="In Progress", value=f"{summary.in_progress:,}")
            with col5:
                st.metric(
                    label="Needs Attention",
                    value=f"{summary.needs_attention:,}",
                    help=f"Pending ({summary.pending}) + Not Achieved ({summary.not_achieved})"
                )

            st.progress(min(max(summary.rate, 0), 100) / 100, text=f"Overall Progress: {summary.rate}%")

    # =========================================================================
    # BREAKDOWN & TIME CHARTS
    # =========================================================================

    @staticmethod
    def buckets_to_df(buckets: List[AggregatedBucket]) -> pd.DataFrame:
        df = pd.DataFrame([b.to_dict() for b in buckets],
                          columns=['key', 'total', 'achieved', 'rate', 'full_name'])
        df['color'] = df['rate'].map(_bar_color)
        df['order'] = range(len(df))
        return df

    @staticmethod
    def build_rate_bar_chart(
        buckets: List[AggregatedBucket],
        title: str = "",
        label_angle: int = -30
    ) -> alt.Chart:
        """
        Bar chart of completion rate per bucket, coloured by rate band.

        Bars keep the order of `buckets` (already sorted by the aggregator).
        """
        if not buckets:
            return DepartmentCharts._empty_chart()

        chart_df = DepartmentCharts.buckets_to_df(buckets)

        bars = alt.Chart(chart_df).mark_bar(
            cornerRadiusTopLeft=4,
            cornerRadiusTopRight=4
        ).encode(
            x=alt.X('key:N',
                    sort=alt.EncodingSortField(field='order', order='ascending'),
                    title=None,
                    axis=alt.Axis(labelAngle=label_angle, labelLimit=160)),
            y=alt.Y('rate:Q', title='Completion %', scale=alt.Scale(domain=[0, 100])),
            color=alt.Color('color:N', scale=None),
            tooltip=[
                alt.Tooltip('full_name:N', title='Name'),
                alt.Tooltip('rate:Q', title='Rate %'),
                alt.Tooltip('achieved:Q', title='Achieved'),
                alt.Tooltip('total:Q', title='Total'),
            ]
        )

        labels = alt.Chart(chart_df).mark_text(
            align='center',
            baseline='bottom',
            dy=-4,
            fontSize=10
        ).encode(
            x=alt.X('key:N', sort=alt.EncodingSortField(field='order', order='ascending')),
            y=alt.Y('rate:Q'),
            text=alt.Text('rate:Q', format='.0f'),
            color=alt.value(COLORS['text_dark'])
        )

        return (bars + labels).properties(width=CHART_WIDTH, height=CHART_HEIGHT, title=title)

    # =========================================================================
    # BENCHMARK CHART
    # =========================================================================

    @staticmethod
    def build_benchmark_chart(
        points: List[BenchmarkPoint],
        granularity: Granularity,
        current_year: int,
        comparison_year: Optional[int],
        show_comparison: bool = True
    ) -> alt.Chart:
        """
        Current-year bars with the comparison year as a dashed line.

        Periods without data stay empty (no bar, no point) instead of 0%.
        """
        if not points:
            return DepartmentCharts._empty_chart()

        granularity = Granularity(granularity)
        period_order = MONTH_ORDER if granularity is Granularity.MONTHLY else QUARTER_ORDER

        chart_df = pd.DataFrame([p.to_dict() for p in points])
        chart_df['current'] = pd.to_numeric(chart_df['current'], errors='coerce')
        chart_df['comparison'] = pd.to_numeric(chart_df['comparison'], errors='coerce')
        chart_df['color'] = chart_df['current'].map(lambda v: _bar_color(None if pd.isna(v) else v))

        x_enc = alt.X('period:N', sort=period_order, title=None, axis=alt.Axis(labelAngle=0))

        bars = alt.Chart(chart_df).transform_filter(
            'isValid(datum.current)'
        ).mark_bar(
            cornerRadiusTopLeft=4,
            cornerRadiusTopRight=4,
            size=60 if granularity is Granularity.QUARTERLY else 22
        ).encode(
            x=x_enc,
            y=alt.Y('current:Q', title='Completion %', scale=alt.Scale(domain=[0, 100])),
            color=alt.Color('color:N', scale=None),
            tooltip=[
                alt.Tooltip('period:N', title='Period'),
                alt.Tooltip('current:Q', title=str(current_year)),
                alt.Tooltip('comparison:Q', title=str(comparison_year or '')),
            ]
        )

        chart = bars

        if show_comparison and comparison_year is not None:
            line = alt.Chart(chart_df).transform_filter(
                'isValid(datum.comparison)'
            ).mark_line(
                color=COLORS['comparison_year'],
                strokeWidth=2,
                strokeDash=[5, 5],
                point=alt.OverlayMarkDef(color=COLORS['comparison_year'], size=40)
            ).encode(
                x=x_enc,
                y=alt.Y('comparison:Q', scale=alt.Scale(domain=[0, 100])),
                tooltip=[
                    alt.Tooltip('period:N', title='Period'),
                    alt.Tooltip('comparison:Q', title=str(comparison_year)),
                ]
            )
            chart = alt.layer(bars, line)

        return chart.properties(width=CHART_WIDTH, height=CHART_HEIGHT)

    # =========================================================================
    # BOTTLENECK CHART
    # =========================================================================

    @staticmethod
    def build_bottleneck_chart(ranking: List[BottleneckEntry]) -> alt.Chart:
        """Horizontal bars of overdue plans per department (top N)."""
        if not ranking:
            return DepartmentCharts._empty_chart("No Bottlenecks Detected")

        chart_df = pd.DataFrame([e.to_dict() for e in ranking])
        chart_df['order'] = range(len(chart_df))

        return alt.Chart(chart_df).mark_bar(
            color=COLORS['overdue'],
            cornerRadiusTopRight=4,
            cornerRadiusBottomRight=4
        ).encode(
            x=alt.X('overdue:Q', title='Overdue plans', axis=alt.Axis(tickMinStep=1)),
            y=alt.Y('department:N',
                    sort=alt.EncodingSortField(field='order', order='ascending'),
                    title=None),
            tooltip=[
                alt.Tooltip('name:N', title='Department'),
                alt.Tooltip('overdue:Q', title='Overdue'),
            ]
        ).properties(width=CHART_WIDTH, height=max(120, len(chart_df) * 36))

    # =========================================================================
    # STRATEGY DISTRIBUTION
    # =========================================================================

    @staticmethod
    def build_strategy_distribution_chart(slices: List[DistributionSlice]) -> alt.Chart:
        """Donut chart of plan share per strategy."""
        if not slices:
            return DepartmentCharts._empty_chart()

        chart_df = pd.DataFrame([s.to_dict() for s in slices])
        chart_df['order'] = range(len(chart_df))

        return alt.Chart(chart_df).mark_arc(innerRadius=50, outerRadius=80).encode(
            theta=alt.Theta('value:Q', stack=True),
            order=alt.Order('order:Q'),
            color=alt.Color(
                'name:N',
                sort=chart_df['name'].tolist(),
                scale=alt.Scale(range=DISTRIBUTION_COLORS),
                legend=alt.Legend(title=None, orient='bottom', columns=2)
            ),
            tooltip=[
                alt.Tooltip('full_name:N', title='Strategy'),
                alt.Tooltip('value:Q', title='Plans'),
                alt.Tooltip('percentage:Q', title='% of Plans'),
            ]
        ).properties(width=CHART_WIDTH, height=240)

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _empty_chart(message: str = "No data available") -> alt.Chart:
        """Return an empty chart with a message."""
        return alt.Chart(pd.DataFrame({'text': [message]})).mark_text(
            fontSize=14,
            color='gray'
        ).encode(
            text='text:N'
        ).properties(
            width=400,
            height=200
        )
