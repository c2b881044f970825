"""Wiring of the settings manager.

Builds the SQLAlchemy collaborators around a session and hands them to the
manager; the manager itself never touches SQLAlchemy.
"""

from contextlib import contextmanager
from typing import Any, Iterator, Mapping

from sqlalchemy.orm import Session

from .env_settings import get_env
from .log_config import setup_logging
from .repo import SqlAlchemySettingsGateway, db_session
from .schema import SettingsSchemaInitializer
from .services.settings import SettingsManager


def build_settings_manager(
    db: Session,
    *,
    table_name: str | None = None,
    defaults: Mapping[str, Any] | None = None,
) -> SettingsManager:
    """Create a manager over `db`, making sure the settings table exists."""
    return SettingsManager(
        SqlAlchemySettingsGateway(db),
        SettingsSchemaInitializer(db.get_bind()),
        table_name=table_name or get_env().table_name,
        defaults=defaults,
    )


@contextmanager
def open_settings_manager(defaults: Mapping[str, Any] | None = None) -> Iterator[SettingsManager]:
    """Configure logging from the environment and yield a manager on a fresh session."""
    env = get_env()
    setup_logging(level=env.log_level, log_dir=env.log_dir or None, retention_days=env.log_retention_days)
    with db_session() as db:
        yield build_settings_manager(db, table_name=env.table_name, defaults=defaults)
