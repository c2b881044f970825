from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from ...errors import SettingsImportExportError
from ...models import Setting
from ...utils.datetime_fmt import fmt_dt_iso
from ...value_types import SettingType

from .manager import SettingsManager
from .schema import ExportedSetting, SettingRecord

log = logging.getLogger(__name__)


def _export_record(setting: Setting) -> dict[str, Any]:
    return ExportedSetting(
        name=setting.name,
        value=setting.value,
        type=setting.type,
        created_at=fmt_dt_iso(setting.created_at),
        updated_at=fmt_dt_iso(setting.updated_at),
    ).model_dump(mode="json", by_alias=True)


def export_settings(manager: SettingsManager) -> list[dict[str, Any]]:
    """Export every setting as a flat record.

    Keys per record, in order: name, value (decoded native form), type,
    createdAt, updatedAt (ISO-8601 text).
    """

    try:
        return [_export_record(s) for s in manager.all()]
    except Exception as e:
        raise SettingsImportExportError(f"Failed to export settings: {e}", e) from e


def export_settings_json(manager: SettingsManager, *, indent: int | None = 2) -> str:
    records = export_settings(manager)
    try:
        return json.dumps(records, indent=indent, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SettingsImportExportError(f"Failed to export settings to JSON: {e}", e) from e


def _check_records_shape(records: Any) -> list[Mapping[str, Any]]:
    if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
        raise SettingsImportExportError(
            f"Invalid settings payload: a list of records expected, got {type(records).__name__}"
        )
    items = list(records)
    for i, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise SettingsImportExportError(
                f"Invalid settings payload: record #{i} is {type(item).__name__}, an object expected"
            )
    return items


def import_settings(manager: SettingsManager, records: Iterable[Mapping[str, Any]]) -> int:
    """Apply records `{name, type, value}` in order via `manager.set`.

    Not transactional: the first failing record stops the import, records
    before it stay applied. Returns the number of applied records.
    """

    items = _check_records_shape(records)

    applied = 0
    for i, item in enumerate(items):
        try:
            record = SettingRecord.model_validate(item)
            value = record.value
            if record.type is SettingType.JSON:
                # records carry the decoded structure; hand the manager JSON text
                value = json.dumps(value, ensure_ascii=False, allow_nan=False)
            manager.set(record.name, value, record.type)
        except (ValidationError, ValueError, TypeError) as e:
            raise SettingsImportExportError(
                f"Failed to import settings: record #{i} ({item.get('name')!r}): {e}", e
            ) from e
        except Exception as e:
            log.warning("Settings import aborted at record #%d after %d applied", i, applied, exc_info=True)
            raise SettingsImportExportError(f"Failed to import settings: record #{i}: {e}", e) from e
        applied += 1

    log.info("Imported %d settings", applied)
    return applied


def import_settings_json(manager: SettingsManager, payload: str | bytes) -> int:
    """Parse a JSON payload (list of records) and import it.

    Accepts string/bytes. Nothing is applied when the payload does not parse.
    """

    try:
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")
        raw = json.loads(payload)
    except (UnicodeDecodeError, ValueError) as e:
        raise SettingsImportExportError(f"Failed to import settings: invalid JSON: {e}", e) from e

    return import_settings(manager, raw)
