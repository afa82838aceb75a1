# tests/conftest.py
"""
Shared fixtures for the department performance tests.

Plans are plain dicts shaped like rows of the action_plans table; helpers
build DataFrames from them so tests exercise both input forms.
"""

import pandas as pd
import pytest

from action_plan_tracker.department_performance.constants import (
    STATUS_ACHIEVED,
    STATUS_NOT_ACHIEVED,
    STATUS_ON_PROGRESS,
    STATUS_PENDING,
)


def make_plan(
    department_code="HR",
    month="Jan",
    year=2025,
    status=STATUS_PENDING,
    goal_strategy="Employee Engagement",
    pic="Alice",
):
    return {
        "department_code": department_code,
        "month": month,
        "year": year,
        "status": status,
        "goal_strategy": goal_strategy,
        "pic": pic,
    }


@pytest.fixture
def plan_factory():
    return make_plan


@pytest.fixture
def mixed_plans():
    """Eight 2025 HR plans covering every status and three quarters."""
    return [
        make_plan(month="Jan", status=STATUS_ACHIEVED),
        make_plan(month="Jan", status=STATUS_PENDING, pic="Bob"),
        make_plan(month="Feb", status=STATUS_ACHIEVED, goal_strategy="Cost Efficiency"),
        make_plan(month="Apr", status=STATUS_ON_PROGRESS, goal_strategy="Cost Efficiency", pic="Bob"),
        make_plan(month="May", status=STATUS_NOT_ACHIEVED),
        make_plan(month="Jul", status=STATUS_ACHIEVED, goal_strategy=None, pic=None),
        make_plan(month="Jul", status=STATUS_ACHIEVED, goal_strategy="Cost Efficiency"),
        make_plan(month="Aug", status=STATUS_PENDING, goal_strategy="   ", pic=""),
    ]


@pytest.fixture
def mixed_plans_df(mixed_plans):
    return pd.DataFrame(mixed_plans)


@pytest.fixture
def multi_year_plans():
    """Plans spread over 2023..2025 plus one without a year."""
    return pd.DataFrame([
        make_plan(year=2025, month="Mar", status=STATUS_ACHIEVED),
        make_plan(year=2025, month="Mar", status=STATUS_PENDING),
        make_plan(year=2024, month="Mar", status=STATUS_ACHIEVED),
        make_plan(year=2024, month="Jun", status=STATUS_NOT_ACHIEVED),
        make_plan(year=2023, month="Jan", status=STATUS_ACHIEVED),
        make_plan(year=None, month="Apr", status=STATUS_ACHIEVED),
    ])
