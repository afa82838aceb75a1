# tests/test_queries.py
"""
ActionPlanQueries against an in-memory SQLite database.

The production engine is MySQL; the queries only use portable SQL so the
same statements run unchanged here.
"""

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from action_plan_tracker.department_performance.constants import HISTORICAL_COLUMNS, PLAN_COLUMNS
from action_plan_tracker.department_performance.queries import ActionPlanQueries


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    with engine.begin() as conn:
        conn.execute(text("""
            CREATE TABLE action_plans (
                id INTEGER PRIMARY KEY,
                department_code TEXT,
                year INTEGER,
                month TEXT,
                goal_strategy TEXT,
                action_plan TEXT,
                indicator TEXT,
                pic TEXT,
                report_format TEXT,
                status TEXT,
                outcome_link TEXT,
                remark TEXT
            )
        """))
        conn.execute(text("""
            CREATE TABLE historical_stats (
                id INTEGER PRIMARY KEY,
                department_code TEXT,
                year INTEGER,
                month INTEGER,
                completion_rate REAL
            )
        """))
    yield engine
    engine.dispose()


@pytest.fixture
def seeded_engine(engine):
    with engine.begin() as conn:
        conn.execute(
            text("""
                INSERT INTO action_plans (id, department_code, year, month, goal_strategy, pic, status)
                VALUES (:id, :dept, :year, :month, :strategy, :pic, :status)
            """),
            [
                {"id": 1, "dept": "HR", "year": 2024, "month": "Jan", "strategy": "Retention", "pic": "Alice", "status": "Achieved"},
                {"id": 2, "dept": "HR", "year": 2025, "month": "Feb", "strategy": "Retention", "pic": "Bob", "status": "Pending"},
                {"id": 3, "dept": "PD", "year": 2025, "month": "Mar", "strategy": "Launch", "pic": "Cara", "status": "On Progress"},
            ]
        )
        conn.execute(
            text("""
                INSERT INTO historical_stats (department_code, year, month, completion_rate)
                VALUES (:dept, :year, :month, :rate)
            """),
            [
                {"dept": "HR", "year": 2023, "month": 6, "rate": 73.0},
                {"dept": "HR", "year": 2023, "month": 4, "rate": 67.0},
                {"dept": "PD", "year": 2023, "month": 4, "rate": 10.0},
            ]
        )
    return engine


class TestActionPlanQueries:

    def test_all_departments_newest_year_first(self, seeded_engine):
        df = ActionPlanQueries(seeded_engine).get_action_plans()
        assert list(df['id']) == [2, 3, 1]
        assert set(PLAN_COLUMNS) <= set(df.columns)

    def test_single_department(self, seeded_engine):
        df = ActionPlanQueries(seeded_engine).get_action_plans('HR')
        assert set(df['department_code']) == {"HR"}
        assert len(df) == 2

    def test_no_rows_returns_plan_columns(self, engine):
        df = ActionPlanQueries(engine).get_action_plans('GA')
        assert df.empty
        assert list(df.columns) == PLAN_COLUMNS

    def test_historical_stats_filtered_and_ordered(self, seeded_engine):
        df = ActionPlanQueries(seeded_engine).get_historical_stats(2023, 'HR')
        assert list(df['month']) == [4, 6]
        assert list(df['completion_rate']) == [67.0, 73.0]

    def test_historical_stats_missing(self, seeded_engine):
        df = ActionPlanQueries(seeded_engine).get_historical_stats(2019, 'HR')
        assert df.empty
        assert list(df.columns) == HISTORICAL_COLUMNS

    def test_query_failure_returns_empty_frame(self):
        broken = create_engine("sqlite://", poolclass=StaticPool)
        df = ActionPlanQueries(broken).get_action_plans()
        assert df.empty
