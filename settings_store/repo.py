from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .db import get_session_factory
from .models import Setting


class SettingsGateway(Protocol):
    """Persistence capability the settings manager depends on."""

    def find_by_name(self, name: str) -> Setting | None: ...

    def find_all(self) -> list[Setting]: ...

    def add(self, setting: Setting) -> None: ...

    def remove(self, setting: Setting) -> None: ...

    def commit(self) -> None: ...


@contextmanager
def db_session() -> Iterator[Session]:
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


class SqlAlchemySettingsGateway:
    """`SettingsGateway` over a SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_name(self, name: str) -> Setting | None:
        return self.db.get(Setting, name)

    def find_all(self) -> list[Setting]:
        return list(self.db.scalars(select(Setting).order_by(Setting.created_at, Setting.name)))

    def add(self, setting: Setting) -> None:
        self.db.add(setting)

    def remove(self, setting: Setting) -> None:
        self.db.delete(setting)

    def commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
