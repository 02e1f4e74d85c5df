import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables from .env file
load_dotenv()


class ImportSettings(BaseModel):
    """Runtime settings for the API and the order import engine."""

    database_url: str = "sqlite:///partbin.db"
    log_level: str = "INFO"
    cors_origins: str = "*"

    # Order import
    header_scan_limit: int = Field(default=50, ge=1)
    default_min_stock: int = Field(default=10, ge=0)
    reorder_ratio: float = Field(default=0.2, ge=0)
    reorder_floor: int = Field(default=5, ge=0)


def load_settings() -> ImportSettings:
    """Build settings from PARTBIN_* environment variables, falling back to defaults."""
    defaults = ImportSettings()
    return ImportSettings(
        database_url=os.getenv("PARTBIN_DATABASE_URL", defaults.database_url),
        log_level=os.getenv("PARTBIN_LOG_LEVEL", defaults.log_level).upper(),
        cors_origins=os.getenv("PARTBIN_CORS_ORIGINS", defaults.cors_origins),
        header_scan_limit=int(os.getenv("PARTBIN_HEADER_SCAN_LIMIT", defaults.header_scan_limit)),
        default_min_stock=int(os.getenv("PARTBIN_DEFAULT_MIN_STOCK", defaults.default_min_stock)),
        reorder_ratio=float(os.getenv("PARTBIN_REORDER_RATIO", defaults.reorder_ratio)),
        reorder_floor=int(os.getenv("PARTBIN_REORDER_FLOOR", defaults.reorder_floor)),
    )


@lru_cache
def get_settings() -> ImportSettings:
    return load_settings()
