"""
Dashboard settings and logging setup.

Settings come from ``MEDAL_*`` environment variables or a local ``.env``.
"""
import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class DashboardSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MEDAL_", env_file=".env", extra="ignore")

    api_base: str = Field(default="http://127.0.0.1:8000", description="Backend base URL")
    leader_count: int = Field(default=3, ge=1)
    table_limit: int = Field(default=10, ge=1)
    chart_limit: int = Field(default=10, ge=1)
    donut_ceiling: float = Field(default=3000, gt=0, description="Total that fills a leader donut")
    default_year: int = 2016
    request_timeout: float = Field(default=10, gt=0)
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> DashboardSettings:
    return DashboardSettings()


def configure_logging(level="INFO"):
    """Attach one stream handler to the root logger; repeat calls only set the level."""
    root = logging.getLogger()
    if not any(getattr(h, "_medal_dashboard", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._medal_dashboard = True
        root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
