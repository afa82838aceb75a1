# action_plan_tracker/department_performance/constants.py
"""
Constants for Department Performance Module

VERSION: 1.1.0
CHANGELOG:
- v1.1.0: Added STRATEGY_DISTRIBUTION_* settings and RATE_BANDS colors
"""

# =====================================================================
# DEPARTMENTS
# =====================================================================

DEPARTMENTS = [
    {"code": "BAS", "name": "Business & Administration Services"},
    {"code": "PD", "name": "Product Development"},
    {"code": "CFC", "name": "Corporate Finance Controller"},
    {"code": "SS", "name": "Strategic Sourcing"},
    {"code": "ACC", "name": "Accounting"},
    {"code": "HR", "name": "Human Resources"},
    {"code": "BID", "name": "Business & Innovation Development"},
    {"code": "TEP", "name": "Tour and Event Planning"},
    {"code": "GA", "name": "General Affairs"},
    {"code": "ACS", "name": "Art & Creative Support"},
    {"code": "SO", "name": "Sales Operation"},
]

DEPARTMENT_NAMES = {d["code"]: d["name"] for d in DEPARTMENTS}

# =====================================================================
# MONTH / QUARTER ORDER
# =====================================================================

MONTH_ORDER = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"
]

MONTH_INDEX = {month: idx for idx, month in enumerate(MONTH_ORDER)}

QUARTER_ORDER = ["Q1", "Q2", "Q3", "Q4"]

UNKNOWN_PERIOD = "Unknown"

# =====================================================================
# PLAN STATUS
# =====================================================================

STATUS_PENDING = "Pending"
STATUS_ON_PROGRESS = "On Progress"
STATUS_ACHIEVED = "Achieved"
STATUS_NOT_ACHIEVED = "Not Achieved"

# Columns every plan frame is normalised to carry
PLAN_COLUMNS = ["department_code", "month", "year", "status", "goal_strategy", "pic"]

HISTORICAL_COLUMNS = ["department_code", "year", "month", "completion_rate"]

# =====================================================================
# DIMENSION SENTINELS & LABELS
# =====================================================================

UNCATEGORIZED_STRATEGY = "Uncategorized"
UNASSIGNED_PIC = "Unassigned"
UNKNOWN_DEPARTMENT = "Unknown"

# Keys longer than LABEL_MAX_LENGTH are cut to LABEL_TRUNCATE_LENGTH + "..."
LABEL_MAX_LENGTH = 25
LABEL_TRUNCATE_LENGTH = 22
LABEL_ELLIPSIS = "..."

# =====================================================================
# BOTTLENECK / DISTRIBUTION SETTINGS
# =====================================================================

BOTTLENECK_TOP_N = 5

STRATEGY_DISTRIBUTION_TOP_N = 5
STRATEGY_DISTRIBUTION_MAX_SLICES = 6
OTHERS_LABEL = "Others"

# =====================================================================
# COMPARISON YEAR SELECTION
# =====================================================================

COMPARISON_NONE = "none"
COMPARISON_PREVIOUS_YEAR = "prev_year"

AVAILABLE_YEARS_BACK = 2

# =====================================================================
# COLOR SCHEME
# =====================================================================

RATE_GOOD_THRESHOLD = 90
RATE_WARNING_THRESHOLD = 70

COLORS = {
    # Rate bands
    "good": "#15803d",                 # Green (>=90%)
    "warning": "#b45309",              # Amber (>=70%)
    "critical": "#b91c1c",             # Red (<70%)

    # Benchmark
    "current_year": "#0d9488",         # Teal
    "comparison_year": "#f59e0b",      # Amber

    # Bottleneck
    "overdue": "#ef4444",              # Red

    # Status cards
    "achieved": "#16a34a",
    "in_progress": "#d97706",
    "pending": "#9ca3af",
    "not_achieved": "#dc2626",

    # Misc
    "text_dark": "#333333",
    "text_light": "#6b7280",
    "grid": "#f0f0f0",
}

DISTRIBUTION_COLORS = ["#0d9488", "#0891b2", "#6366f1", "#8b5cf6", "#ec4899", "#94a3b8"]

# =====================================================================
# CHART DIMENSIONS
# =====================================================================

CHART_WIDTH = 'container'
CHART_HEIGHT = 280
