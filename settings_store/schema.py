from __future__ import annotations

"""DB schema bootstrap for the settings table.

No migrations here: the table is created when missing and left alone otherwise.
Only tables mapped on the package metadata can be created.
"""

import logging
from typing import Protocol

from sqlalchemy import Engine, inspect
from sqlalchemy.exc import SQLAlchemyError

from .errors import SettingsTableInitializationError
from .models import Base

log = logging.getLogger(__name__)


class SchemaInitializer(Protocol):
    def ensure_table_exists(self, table_name: str) -> bool: ...


class SettingsSchemaInitializer:
    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def ensure_table_exists(self, table_name: str = "settings") -> bool:
        """Create `table_name` if it does not exist yet.

        Returns True when the table was created, False when it was already there.
        """

        if not isinstance(table_name, str) or not table_name.strip():
            raise SettingsTableInitializationError(
                f"An error occurred during settings table initialization: invalid table name {table_name!r}"
            )

        table = Base.metadata.tables.get(table_name)
        if table is None:
            raise SettingsTableInitializationError(
                f"An error occurred during settings table initialization: no mapped table named '{table_name}'"
            )

        try:
            if inspect(self.engine).has_table(table_name):
                return False
            table.create(bind=self.engine)
        except SQLAlchemyError as e:
            raise SettingsTableInitializationError(
                f"An error occurred during settings table initialization: {e}"
            ) from e

        log.info("Created settings table '%s'", table_name)
        return True
