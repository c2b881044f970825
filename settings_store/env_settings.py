from functools import lru_cache

from pydantic_settings import BaseSettings
from pydantic import Field


class EnvSettings(BaseSettings):
    # DB: an explicit SQLAlchemy URL wins over the SQLite path
    database_url: str = Field("", alias="SETTINGS_DATABASE_URL")
    sqlite_path: str = Field("data/settings.db", alias="SQLITE_PATH")
    table_name: str = Field("settings", alias="SETTINGS_TABLE")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_dir: str = Field("", alias="LOG_DIR")  # empty -> console only
    log_retention_days: int = Field(30, alias="LOG_RETENTION_DAYS")

    class Config:
        populate_by_name = True


@lru_cache(maxsize=1)
def get_env() -> EnvSettings:
    return EnvSettings()
