# action_plan_tracker/__init__.py
"""
Action Plan Tracker - Shared Utilities Package

- config: Settings from .env or Streamlit secrets
- db: Shared engine, health check and query helper
- department_performance: Action plan analytics, queries and charts

Usage:
    from action_plan_tracker import config, check_db_connection
"""

# Configuration
from .config import config, Config

# Database
from .db import (
    get_db_engine,
    check_db_connection,
    reset_db_engine,
    execute_query_df,
)

__all__ = [
    # Config
    'config',
    'Config',

    # Database
    'get_db_engine',
    'check_db_connection',
    'reset_db_engine',
    'execute_query_df',
]

__version__ = '1.1.0'
