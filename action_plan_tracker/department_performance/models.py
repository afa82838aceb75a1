# action_plan_tracker/department_performance/models.py
"""
Selectors and result containers for Department Performance.

All result objects are derived, recomputed on every filter change and
never persisted.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Optional

from .constants import UNCATEGORIZED_STRATEGY, UNASSIGNED_PIC


# =============================================================================
# SELECTORS
# =============================================================================

class Dimension(Enum):
    """Plan field used to group the performance breakdown."""
    STRATEGY = "goal_strategy"
    RESPONSIBLE_PARTY = "pic"

    @property
    def field(self) -> str:
        return self.value

    @property
    def sentinel(self) -> str:
        """Key used when the field is blank."""
        if self is Dimension.STRATEGY:
            return UNCATEGORIZED_STRATEGY
        return UNASSIGNED_PIC

    @property
    def label(self) -> str:
        if self is Dimension.STRATEGY:
            return "Goal/Strategy"
        return "PIC"


class Granularity(Enum):
    """Time bucket size for temporal and benchmark views."""
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"

    @property
    def label(self) -> str:
        return self.value.capitalize()


# =============================================================================
# RESULTS
# =============================================================================

@dataclass
class StatusSummary:
    """Per-status counts and completion rate for one plan collection."""
    total: int = 0
    achieved: int = 0
    in_progress: int = 0
    pending: int = 0
    not_achieved: int = 0
    rate: int = 0
    precise_rate: float = 0.0

    @property
    def needs_attention(self) -> int:
        return self.pending + self.not_achieved

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class AggregatedBucket:
    """
    One aggregation group.

    `key` is the group identity (truncated label for dimension buckets);
    `full_name` is the first untruncated value seen for the group.
    """
    key: str
    total: int
    achieved: int
    rate: int
    full_name: Optional[str] = None

    def __post_init__(self):
        if self.full_name is None:
            self.full_name = self.key

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class BenchmarkPoint:
    """
    Current vs comparison rate for one period.

    None means "no data for this period" and is distinct from a 0% rate.
    """
    period: str
    current: Optional[int] = None
    comparison: Optional[int] = None

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class BottleneckEntry:
    """Overdue plan count for one department."""
    department: str
    overdue: int
    name: Optional[str] = None

    def __post_init__(self):
        if self.name is None:
            self.name = self.department

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class DistributionSlice:
    """Share of plans belonging to one strategy."""
    name: str
    full_name: str
    value: int
    percentage: int

    def to_dict(self) -> Dict:
        return asdict(self)
