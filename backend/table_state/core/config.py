"""
Application Configuration
Environment variables and settings
"""
import logging
from pydantic_settings import BaseSettings
from typing import List, Literal

class Settings(BaseSettings):
    """Application settings from environment variables"""

    # =========================================================================
    # QUERY NAMESPACE
    # =========================================================================
    # Standard-Präfix für alle Query-Keys einer Tabelle (table_keyword, table_page, ...).
    # Leerer String = Keys ohne Präfix (keyword, page, ...).
    TABLE_QUERY_PREFIX: str = "table"

    # Schema der Filter-Keys: "filter" -> <prefix>_filter_<spalte>, "f" -> <prefix>_f_<spalte>
    TABLE_FILTER_SCHEME: Literal["filter", "f"] = "filter"

    # Logging
    LOG_LEVEL: str = "INFO"

    # API
    APP_TITLE: str = "Table State API"
    APP_VERSION: str = "1.0.0"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:5174", "http://localhost:3000"]

    class Config:
        env_file = ".env"
        extra = "ignore"


def configure_logging(level: str) -> None:
    """Root-Logger einmalig konfigurieren (weitere Aufrufe ändern nur das Level)."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level.upper())


settings = Settings()
