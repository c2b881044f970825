from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base
from .utils.datetime_fmt import utcnow
from .value_types import SettingType, from_storage, resolve_type, to_storage


class Setting(Base):
    """A single named, typed, timestamped value.

    The value is kept as text (`raw_value`) together with the declared type;
    `value` decodes it on access. Every mutator goes through `touch()`, so
    `updated_at` always reflects the last change of name, type or value.
    """

    __tablename__ = "settings"

    name: Mapped[str] = mapped_column(String(255), primary_key=True)
    raw_value: Mapped[str] = mapped_column("value", Text, nullable=False)
    type_name: Mapped[str] = mapped_column("type", String(50), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    # Equal to created_at right after construction.
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    def __init__(self, name: str, type: SettingType | str, value: Any) -> None:
        _check_name(name)
        resolved = resolve_type(type, value)
        now = utcnow()
        super().__init__(
            name=name,
            raw_value=to_storage(resolved, value),
            type_name=resolved.value,
            created_at=now,
            updated_at=now,
        )

    @property
    def type(self) -> SettingType:
        return SettingType(self.type_name)

    @property
    def value(self) -> Any:
        return from_storage(self.type, self.raw_value)

    def touch(self) -> None:
        self.updated_at = utcnow()

    def rename(self, name: str) -> Setting:
        _check_name(name)
        self.name = name
        self.touch()
        return self

    def set_value(self, value: Any) -> Setting:
        """Replace the value, keeping the declared type."""
        self.raw_value = to_storage(self.type, value)
        self.touch()
        return self

    def set_type(self, type: SettingType | str) -> Setting:
        """Change the declared type, re-encoding the current value under it."""
        new_type = SettingType.parse(type)
        raw = to_storage(new_type, self.value)
        self.type_name = new_type.value
        self.raw_value = raw
        self.touch()
        return self

    def assign(self, type: SettingType | str, value: Any) -> Setting:
        """Replace type and value together; nothing changes if validation fails."""
        resolved = resolve_type(type, value)
        raw = to_storage(resolved, value)
        self.type_name = resolved.value
        self.raw_value = raw
        self.touch()
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "type": self.type_name,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def __str__(self) -> str:
        return self.raw_value

    def __repr__(self) -> str:
        return f"Setting(name={self.name!r}, type={self.type_name!r}, raw_value={self.raw_value!r})"


def _check_name(name: str) -> None:
    if not isinstance(name, str) or not name:
        raise ValueError("Setting name must be a non-empty string.")
