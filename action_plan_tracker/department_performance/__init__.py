# action_plan_tracker/department_performance/__init__.py
"""
Department Performance Module

Analytics over per-department action plans: status summary, breakdown by
strategy or PIC, monthly/quarterly progress, bottleneck radar and
year-over-year benchmark with historical fallback.

VERSION: 1.2.0
CHANGELOG:
- v1.2.0: ADDED strategy distribution (metrics.py, charts.py, fragments.py)
- v1.1.0: REFACTORED benchmark precedence into PeriodLookup (benchmark.py)
          - Dimension / Granularity enums replace free-form strings
          - Reference month injected into BottleneckCalculator
- v1.0.0: Initial module

Components:
- ActionPlanMetrics: Status summary, breakdown, period aggregation
- BottleneckCalculator: Overdue detection and department ranking
- BenchmarkComposer: Current vs comparison year series
- DepartmentDataProcessor: Year filtering + all dashboard datasets
- ActionPlanQueries: Database queries
- DepartmentCharts: Visualization components

Usage:
    from action_plan_tracker.department_performance import (
        ActionPlanMetrics,
        BenchmarkComposer,
        BottleneckCalculator,
        DepartmentDataProcessor,
        Dimension,
        Granularity,
    )
"""

# Selectors & results
from .models import (
    Dimension,
    Granularity,
    StatusSummary,
    AggregatedBucket,
    BenchmarkPoint,
    BottleneckEntry,
    DistributionSlice,
)

# Period classification
from .periods import (
    month_index,
    quarter_of,
    month_label_from_number,
)

# Metrics Calculator
from .metrics import (
    ActionPlanMetrics,
    calculate_rate,
    rate_band,
    calculate_status_summary,
    aggregate_by_dimension,
    aggregate_by_period,
    calculate_strategy_distribution,
)

# Bottleneck
from .bottleneck import BottleneckCalculator, rank_bottlenecks

# Benchmark
from .benchmark import (
    BenchmarkComposer,
    PeriodLookup,
    compose_benchmark,
    has_comparison_data,
)

# Data Processor
from .data_processor import (
    DepartmentDataProcessor,
    filter_plans_by_year,
    resolve_comparison_year,
    get_available_years,
    get_comparison_options,
)

# Queries
from .queries import ActionPlanQueries

# Charts
from .charts import DepartmentCharts

# Constants
from .constants import DEPARTMENTS, DEPARTMENT_NAMES, MONTH_ORDER, QUARTER_ORDER

__all__ = [
    # Models
    'Dimension',
    'Granularity',
    'StatusSummary',
    'AggregatedBucket',
    'BenchmarkPoint',
    'BottleneckEntry',
    'DistributionSlice',

    # Periods
    'month_index',
    'quarter_of',
    'month_label_from_number',

    # Metrics
    'ActionPlanMetrics',
    'calculate_rate',
    'rate_band',
    'calculate_status_summary',
    'aggregate_by_dimension',
    'aggregate_by_period',
    'calculate_strategy_distribution',

    # Bottleneck
    'BottleneckCalculator',
    'rank_bottlenecks',

    # Benchmark
    'BenchmarkComposer',
    'PeriodLookup',
    'compose_benchmark',
    'has_comparison_data',

    # Data Processor
    'DepartmentDataProcessor',
    'filter_plans_by_year',
    'resolve_comparison_year',
    'get_available_years',
    'get_comparison_options',

    # Queries
    'ActionPlanQueries',

    # Charts
    'DepartmentCharts',

    # Constants
    'DEPARTMENTS',
    'DEPARTMENT_NAMES',
    'MONTH_ORDER',
    'QUARTER_ORDER',
]

__version__ = '1.2.0'
