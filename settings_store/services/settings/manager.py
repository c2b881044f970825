from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from ...errors import SettingAlreadyExistsError, SettingNotFoundError
from ...models import Setting
from ...repo import SettingsGateway
from ...schema import SchemaInitializer
from ...value_types import SettingType, UpdateType, detect_type

from .schema import DefaultSetting

log = logging.getLogger(__name__)


def _is_valid_name(name: Any) -> bool:
    return isinstance(name, str) and bool(name)


class SettingsManager:
    """Add, read, update and remove typed settings.

    Persistence is injected as a `SettingsGateway`; every mutating call commits
    through it before returning. Uniqueness of names is checked here
    (check-then-act), the primary key of the table is the storage-level backstop.
    """

    def __init__(
        self,
        gateway: SettingsGateway,
        schema: SchemaInitializer | None = None,
        *,
        table_name: str = "settings",
        defaults: Mapping[str, Any] | None = None,
    ) -> None:
        self.gateway = gateway
        self.table_name = table_name
        if schema is not None:
            schema.ensure_table_exists(table_name)
        if defaults:
            self.seed_defaults(defaults)

    def add(self, name: str, type: SettingType | str, value: Any) -> Setting:
        if self._find(name) is not None:
            raise SettingAlreadyExistsError(name)
        return self._create(name, type, value)

    def set(
        self,
        name: str,
        value: Any,
        type: SettingType | str = SettingType.AUTO,
        allow_update: bool = True,
    ) -> Setting:
        """Create the setting, or overwrite type and value of an existing one.

        With `allow_update=False` an existing setting is an error instead.
        """
        setting = self._find(name)
        if setting is None:
            return self._create(name, type, value)
        if not allow_update:
            raise SettingAlreadyExistsError(name)

        setting.assign(type, value)
        self.gateway.commit()
        log.debug("Setting '%s' overwritten (type=%s)", name, setting.type_name)
        return setting

    def update(self, name: str, value: Any, update_type: UpdateType | str = UpdateType.OVERRIDE) -> Setting:
        setting = self._find(name)
        if setting is None:
            raise SettingNotFoundError(name, "update")

        if UpdateType(update_type) is UpdateType.KEEP_CURRENT:
            setting.set_value(value)
        else:
            setting.assign(detect_type(value), value)

        self.gateway.commit()
        log.debug("Setting '%s' updated (type=%s)", name, setting.type_name)
        return setting

    def get(self, name: str) -> Setting | None:
        """Absence is not an error: a name that cannot exist yields None."""
        if not _is_valid_name(name):
            return None
        return self.gateway.find_by_name(name)

    def get_value(self, name: str, default: Any = None) -> Any:
        setting = self.get(name)
        return default if setting is None else setting.value

    def exists(self, name: str) -> bool:
        return self.get(name) is not None

    def remove(self, name: str) -> None:
        setting = self._find(name)
        if setting is None:
            raise SettingNotFoundError(name, "remove")
        self.gateway.remove(setting)
        self.gateway.commit()
        log.info("Setting '%s' removed", name)

    def all(self) -> list[Setting]:
        return list(self.gateway.find_all())

    def seed_defaults(self, defaults: Mapping[str, Any]) -> list[str]:
        """Create every default whose name is still absent; never overwrites.

        Values are `DefaultSetting` instances or mappings like
        `{"value": 1, "type": "integer"}` (type optional, auto-detected).
        Returns the names that were created.
        """

        created: list[str] = []
        for name, spec in defaults.items():
            try:
                default = spec if isinstance(spec, DefaultSetting) else DefaultSetting.model_validate(spec)
            except ValidationError as e:
                raise ValueError(f"Invalid default for setting '{name}': {e}") from e

            if self.exists(name):
                continue
            self.set(name, default.value, default.type, allow_update=False)
            created.append(name)

        if created:
            log.info("Seeded default settings: %s", ", ".join(created))
        return created

    def _find(self, name: str) -> Setting | None:
        if not _is_valid_name(name):
            raise ValueError("Setting name must be a non-empty string.")
        return self.gateway.find_by_name(name)

    def _create(self, name: str, type: SettingType | str, value: Any) -> Setting:
        setting = Setting(name, type, value)
        self.gateway.add(setting)
        self.gateway.commit()
        log.debug("Setting '%s' created (type=%s)", name, setting.type_name)
        return setting
