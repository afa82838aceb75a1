# action_plan_tracker/db.py
"""
Database access for the action plan dashboards

Version: 1.1.0
CHANGELOG:
- v1.1.0: execute_query_df() accepts an explicit engine (used by ActionPlanQueries)
          - Removed pool status helper
- v1.0.0: Shared read-only MySQL engine and health check
"""

import logging
import threading
from typing import Dict, Optional, Tuple

import pandas as pd
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, URL
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import QueuePool

from .config import config

logger = logging.getLogger(__name__)

# ==================== SHARED ENGINE ====================

_engine: Optional[Engine] = None
_engine_lock = threading.Lock()


def get_db_engine() -> Engine:
    """
    Shared engine for every page and session.

    Built on first use, so a missing database configuration only surfaces
    here (ValueError) and never at import time.
    """
    global _engine

    if _engine is None:
        with _engine_lock:
            if _engine is None:
                _engine = _create_engine()

    return _engine


def _build_url(db_config: Dict) -> URL:
    return URL.create(
        "mysql+pymysql",
        username=db_config["user"],
        password=str(db_config["password"]),
        host=db_config["host"],
        port=db_config["port"],
        database=db_config["database"],
    )


def _create_engine() -> Engine:
    db_config = config.get_db_config()
    url = _build_url(db_config)
    pool_size = config.get_app_setting("DB_POOL_SIZE", 5)
    pool_recycle = config.get_app_setting("DB_POOL_RECYCLE", 3600)

    logger.info(f"🔌 Connecting to {url.render_as_string(hide_password=True)}")

    engine = create_engine(
        url,
        poolclass=QueuePool,
        pool_size=pool_size,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=pool_recycle,
        pool_pre_ping=True,
    )

    logger.info(f"✅ Engine ready (pool_size={pool_size}, recycle={pool_recycle}s)")
    return engine


# ==================== HEALTH ====================

def check_db_connection() -> Tuple[bool, Optional[str]]:
    """
    Run a trivial query against the shared engine.

    Returns:
        (True, None) when reachable, else (False, message for the UI)
    """
    try:
        with get_db_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        return True, None
    except ValueError as e:
        logger.error(f"❌ Database not configured: {e}")
        return False, str(e)
    except OperationalError as e:
        logger.error(f"❌ Database unreachable: {e}")
        return False, "Cannot reach the action plan database. Check your network/VPN connection."
    except Exception as e:
        logger.error(f"❌ Database error: {e}")
        return False, f"Database error: {e}"


def reset_db_engine():
    """Dispose the shared engine; the next query reconnects with fresh settings."""
    global _engine

    with _engine_lock:
        if _engine is not None:
            _engine.dispose()
            _engine = None
            logger.info("🔄 Database engine reset")


# ==================== QUERIES ====================

def execute_query_df(query: str, params: Optional[Dict] = None, engine: Optional[Engine] = None) -> pd.DataFrame:
    """
    Run a SELECT and return its rows as a DataFrame.

    Uses the shared engine unless one is given. Errors propagate; callers
    decide how to degrade.
    """
    return pd.read_sql(text(query), engine if engine is not None else get_db_engine(), params=params or {})


__all__ = [
    'get_db_engine',
    'check_db_connection',
    'reset_db_engine',
    'execute_query_df',
]
