# action_plan_tracker/config.py
"""
Configuration for the action plan dashboards

Version: 1.1.0
CHANGELOG:
- v1.1.0: Settings reduced to what the dashboards read
- v1.0.0: .env (local) and secrets.toml (Streamlit Cloud) sources

Database credentials are only validated when the engine is built, so the
analytics package imports and runs without a database.
"""

import os
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "action_plans"


def is_running_on_streamlit_cloud() -> bool:
    """True when Streamlit secrets are available (secrets.toml or Cloud)."""
    try:
        import streamlit as st
        return len(st.secrets) > 0
    except Exception:
        return False


@dataclass
class DatabaseConfig:
    """MySQL connection settings."""
    host: str
    port: int
    user: str
    password: str
    database: str = DEFAULT_DATABASE

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def is_configured(self) -> bool:
        return bool(self.host and self.user and self.password)


class Config:
    """
    Process-wide settings, loaded once.

    Usage:
        from action_plan_tracker.config import config

        db_config = config.get_db_config()
        ttl = config.get_app_setting("CACHE_TTL_SECONDS", 300)
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self.is_cloud = is_running_on_streamlit_cloud()
        self._db_config = self._read_cloud_db() if self.is_cloud else self._read_local_db()
        self._app_config = self._read_app_settings()
        self._initialized = True

        if self._db_config.is_configured():
            logger.info(f"✅ Database: {self._db_config.host}/{self._db_config.database}")
        else:
            logger.warning("⚠️ Database: Not configured")

    # ==================== SOURCES ====================

    @staticmethod
    def _read_cloud_db() -> DatabaseConfig:
        import streamlit as st

        secrets = st.secrets.get("DB_CONFIG", {})
        logger.info("☁️ Reading settings from Streamlit secrets")
        return DatabaseConfig(
            host=secrets.get("host", ""),
            port=int(secrets.get("port", 3306)),
            user=secrets.get("user", ""),
            password=secrets.get("password", ""),
            database=secrets.get("database", DEFAULT_DATABASE),
        )

    @staticmethod
    def _read_local_db() -> DatabaseConfig:
        for env_path in (Path.cwd() / ".env", Path(__file__).parent.parent / ".env"):
            if env_path.exists():
                load_dotenv(env_path)
                logger.info(f"💻 Loaded .env from: {env_path}")
                break

        return DatabaseConfig(
            host=os.getenv("DB_HOST", ""),
            port=int(os.getenv("DB_PORT", "3306")),
            user=os.getenv("DB_USER", ""),
            password=os.getenv("DB_PASSWORD", ""),
            database=os.getenv("DB_NAME", DEFAULT_DATABASE),
        )

    @staticmethod
    def _read_app_settings() -> Dict[str, Any]:
        return {
            "DB_POOL_SIZE": int(os.getenv("DB_POOL_SIZE", "5")),
            "DB_POOL_RECYCLE": int(os.getenv("DB_POOL_RECYCLE", "3600")),
            "CACHE_TTL_SECONDS": int(os.getenv("CACHE_TTL_SECONDS", "300")),
            # Fixed years offered by the benchmark comparison selector
            "COMPARISON_YEAR_MIN": int(os.getenv("COMPARISON_YEAR_MIN", "2023")),
            "COMPARISON_YEAR_MAX": int(os.getenv("COMPARISON_YEAR_MAX", "2030")),
        }

    # ==================== GETTERS ====================

    def get_db_config(self) -> Dict[str, Any]:
        """
        Raises:
            ValueError: If host, user or password is missing
        """
        if not self._db_config.is_configured():
            raise ValueError("Missing required database configuration. Please check .env file.")
        return self._db_config.to_dict()

    def get_app_setting(self, key: str, default: Any = None) -> Any:
        return self._app_config.get(key, default)


config = Config()

__all__ = [
    'config',
    'Config',
    'DatabaseConfig',
]
