"""Typed settings store: named configuration values with an enforced value type."""

from .errors import (
    SettingAlreadyExistsError,
    SettingNotFoundError,
    SettingsError,
    SettingsImportExportError,
    SettingsTableInitializationError,
    SettingTypeMismatchError,
    UnsupportedValueTypeError,
)
from .models import Setting
from .repo import SettingsGateway, SqlAlchemySettingsGateway
from .schema import SettingsSchemaInitializer
from .services.settings import (
    DefaultSetting,
    SettingsManager,
    export_settings,
    export_settings_json,
    import_settings,
    import_settings_json,
)
from .value_types import SettingType, UpdateType, detect_type, from_storage, to_storage

__all__ = [
    "DefaultSetting",
    "Setting",
    "SettingAlreadyExistsError",
    "SettingNotFoundError",
    "SettingType",
    "SettingTypeMismatchError",
    "SettingsError",
    "SettingsGateway",
    "SettingsImportExportError",
    "SettingsManager",
    "SettingsSchemaInitializer",
    "SettingsTableInitializationError",
    "SqlAlchemySettingsGateway",
    "UnsupportedValueTypeError",
    "UpdateType",
    "detect_type",
    "export_settings",
    "export_settings_json",
    "from_storage",
    "import_settings",
    "import_settings_json",
    "to_storage",
]
