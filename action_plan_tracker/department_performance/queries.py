# action_plan_tracker/department_performance/queries.py
"""
SQL Queries and Data Loading for Department Performance

Handles all database interactions:
- Action plans from action_plans (all departments or one department)
- Archived monthly completion rates from historical_stats

Read-only: creating and editing plans belongs to the plan management app.

VERSION: 1.0.0
"""

import logging
from typing import Optional
import pandas as pd

from action_plan_tracker.db import execute_query_df, get_db_engine
from .constants import HISTORICAL_COLUMNS, PLAN_COLUMNS

logger = logging.getLogger(__name__)


class ActionPlanQueries:
    """
    Data loading class for Department Performance.

    Usage:
        queries = ActionPlanQueries()

        plans_df = queries.get_action_plans('HR')
        historical_df = queries.get_historical_stats(2024, 'HR')
    """

    def __init__(self, engine=None):
        """
        Args:
            engine: SQLAlchemy engine (defaults to the shared singleton)
        """
        self._engine = engine

    @property
    def engine(self):
        """Lazy load database engine."""
        if self._engine is None:
            self._engine = get_db_engine()
        return self._engine

    # =========================================================================
    # ACTION PLANS
    # =========================================================================

    def get_action_plans(self, department_code: Optional[str] = None) -> pd.DataFrame:
        """
        Get action plans, optionally scoped to one department.

        Returns:
            DataFrame with columns: id, department_code, year, month, goal_strategy,
                                   action_plan, indicator, pic, report_format,
                                   status, outcome_link, remark
        """
        query = """
            SELECT
                id,
                department_code,
                year,
                month,
                goal_strategy,
                action_plan,
                indicator,
                pic,
                report_format,
                status,
                outcome_link,
                remark
            FROM action_plans
            WHERE 1 = 1
        """
        params = {}

        if department_code:
            query += " AND department_code = :department_code"
            params['department_code'] = department_code

        query += " ORDER BY year DESC, id"

        df = self._execute_query(query, params, "action_plans")
        if df.empty:
            return pd.DataFrame(columns=PLAN_COLUMNS)
        return df

    # =========================================================================
    # HISTORICAL STATS
    # =========================================================================

    def get_historical_stats(self, year: int, department_code: str) -> pd.DataFrame:
        """
        Get archived monthly completion rates for one department and year.

        Returns:
            DataFrame with columns: department_code, year, month (1-12), completion_rate (0-100)
        """
        query = """
            SELECT
                department_code,
                year,
                month,
                completion_rate
            FROM historical_stats
            WHERE year = :year
              AND department_code = :department_code
            ORDER BY month
        """
        params = {'year': int(year), 'department_code': department_code}

        df = self._execute_query(query, params, "historical_stats")
        if df.empty:
            return pd.DataFrame(columns=HISTORICAL_COLUMNS)
        return df

    # =========================================================================
    # HELPER METHODS
    # =========================================================================

    def _execute_query(
        self,
        query: str,
        params: dict,
        query_name: str = "query"
    ) -> pd.DataFrame:
        """
        Execute SQL query and return DataFrame.

        Failures are logged and answered with an empty DataFrame.
        """
        try:
            logger.debug(f"Executing {query_name}")
            df = execute_query_df(query, params, engine=self.engine)
            logger.debug(f"{query_name} returned {len(df)} rows")
            return df
        except Exception as e:
            logger.error(f"Error executing {query_name}: {e}")
            return pd.DataFrame()
