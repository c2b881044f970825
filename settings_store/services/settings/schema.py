from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...value_types import SettingType

MAX_NAME_LENGTH = 255  # matches the `settings.name` column


class SettingRecord(BaseModel):
    """One record of a bulk import: `{name, type, value}`.

    Extra keys (for example the timestamps of an export) are ignored.
    """

    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    type: SettingType
    value: Any = None

    @field_validator("type")
    @classmethod
    def _concrete_type(cls, v: SettingType) -> SettingType:
        if not v.is_concrete:
            raise ValueError("type 'auto' is not allowed in settings records")
        return v


class ExportedSetting(BaseModel):
    """Flat snapshot of a stored setting. Field order is the export key order."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    value: Any
    type: SettingType
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")


class DefaultSetting(BaseModel):
    """Seed value for a setting that does not exist yet."""

    value: Any
    type: SettingType = Field(default=SettingType.AUTO)
