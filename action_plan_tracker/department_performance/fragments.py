# action_plan_tracker/department_performance/fragments.py
"""
Streamlit Fragments for Department Performance.

VERSION: 1.2.0
CHANGELOG:
- v1.2.0: Breakdown and time analysis read their datasets from DepartmentDataProcessor.process()
- v1.1.0: Comparison selector moved into time_analysis_fragment
          - Historical stats loaded through a callback (one call per year/department)
- v1.0.0: Breakdown, time analysis, bottleneck radar, strategy focus

Contains:
- breakdown_fragment: Performance by Strategy / PIC
- time_analysis_fragment: Monthly / Quarterly progress with YoY benchmark
- bottleneck_fragment: Top departments with overdue plans
- strategy_distribution_fragment: Strategic focus donut
"""

import logging
from typing import Callable
import pandas as pd
import streamlit as st

from .bottleneck import BottleneckCalculator
from .charts import DepartmentCharts
from .constants import COMPARISON_NONE, COMPARISON_PREVIOUS_YEAR
from .data_processor import (
    DepartmentDataProcessor,
    get_comparison_options,
    resolve_comparison_year,
)
from .metrics import ActionPlanMetrics
from .models import Dimension, Granularity

logger = logging.getLogger(__name__)


def _comparison_label(option, selected_year: int) -> str:
    if option == COMPARISON_NONE:
        return "None"
    if option == COMPARISON_PREVIOUS_YEAR:
        return f"Previous Year ({selected_year - 1})"
    return str(option)


# =============================================================================
# BREAKDOWN FRAGMENT
# =============================================================================

@st.fragment
def breakdown_fragment(
    processor: DepartmentDataProcessor,
    selected_year: int,
    fragment_key: str = "dept_breakdown"
):
    """Performance breakdown by Goal/Strategy or PIC."""
    dimension = st.selectbox(
        "Group by",
        options=list(Dimension),
        format_func=lambda d: d.label,
        key=f"{fragment_key}_dimension",
        label_visibility="collapsed"
    )

    buckets = processor.process({'year': selected_year, 'dimension': dimension})['breakdown']

    if dimension is Dimension.STRATEGY:
        st.markdown("#### Performance by Strategy")
        st.caption(f"{len(buckets)} strategies tracked")
    else:
        st.markdown("#### Performance by PIC")
        st.caption(f"{len(buckets)} team members")

    st.altair_chart(DepartmentCharts.build_rate_bar_chart(buckets), use_container_width=True)


# =============================================================================
# TIME ANALYSIS FRAGMENT
# =============================================================================

@st.fragment
def time_analysis_fragment(
    processor: DepartmentDataProcessor,
    selected_year: int,
    load_historical: Callable[[int], pd.DataFrame],
    year_min: int,
    year_max: int,
    fragment_key: str = "dept_time"
):
    """
    Monthly / Quarterly progress.

    With a comparison year selected, shows the benchmark chart (current bars,
    comparison dashed line); otherwise the plain rate bar chart.
    """
    col_granularity, col_compare = st.columns(2)
    with col_granularity:
        granularity = st.selectbox(
            "Granularity",
            options=list(Granularity),
            format_func=lambda g: g.label,
            key=f"{fragment_key}_granularity"
        )
    with col_compare:
        options = get_comparison_options(selected_year, year_min, year_max)
        comparison = st.selectbox(
            "Compare",
            options=options,
            index=options.index(COMPARISON_PREVIOUS_YEAR),
            format_func=lambda o: _comparison_label(o, selected_year),
            key=f"{fragment_key}_comparison"
        )

    if granularity is Granularity.MONTHLY:
        st.markdown("#### Monthly Progress")
        st.caption("Completion rate by month")
    else:
        st.markdown("#### Quarterly Progress")
        st.caption("Completion rate by quarter")

    comparison_year = resolve_comparison_year(comparison, selected_year)
    result = processor.process({
        'year': selected_year,
        'granularity': granularity,
        'comparison': comparison,
        'historical_stats_df': load_historical(comparison_year) if comparison_year is not None else None,
    })

    if result['benchmark'] is None:
        st.altair_chart(
            DepartmentCharts.build_rate_bar_chart(result['time_buckets'], label_angle=0),
            use_container_width=True
        )
        return

    if not result['has_comparison_data']:
        st.warning(f"⚠️ No data available for {comparison_year}. The comparison line will not be shown.")

    st.altair_chart(
        DepartmentCharts.build_benchmark_chart(
            result['benchmark'],
            granularity,
            current_year=selected_year,
            comparison_year=comparison_year,
            show_comparison=result['has_comparison_data']
        ),
        use_container_width=True
    )


# =============================================================================
# COMPANY-WIDE FRAGMENTS
# =============================================================================

def bottleneck_fragment(plans_df: pd.DataFrame, reference_month_index: int):
    """Bottleneck Radar: departments with the most overdue plans."""
    with st.container(border=True):
        st.markdown("#### ⚠️ Bottleneck Radar")

        calculator = BottleneckCalculator(reference_month_index)
        ranking = calculator.rank_departments(plans_df)

        if not ranking:
            st.success("✅ No Bottlenecks Detected - all departments are on track")
            return

        total = calculator.total_overdue(ranking)
        plural = "s" if len(ranking) != 1 else ""
        st.caption(f"{total} overdue items across {len(ranking)} department{plural}")
        st.altair_chart(DepartmentCharts.build_bottleneck_chart(ranking), use_container_width=True)
        st.caption(f"Top {len(ranking)} departments with overdue action plans")


def strategy_distribution_fragment(plans_df: pd.DataFrame):
    """Strategic Focus Distribution donut."""
    with st.container(border=True):
        st.markdown("#### 🧭 Strategic Focus Distribution")

        slices = ActionPlanMetrics.calculate_strategy_distribution(plans_df)
        if not slices:
            st.info("No data available")
            return

        st.caption(f"{len(slices)} strategies tracked")
        st.altair_chart(
            DepartmentCharts.build_strategy_distribution_chart(slices),
            use_container_width=True
        )
