"""Settings service package.

Typed settings manager (manager), bulk record schemas (schema) and
settings export/import (export_import).
"""

from .schema import DefaultSetting, ExportedSetting, SettingRecord
from .manager import SettingsManager
from .export_import import export_settings, export_settings_json, import_settings, import_settings_json

__all__ = [
    "DefaultSetting",
    "ExportedSetting",
    "SettingRecord",
    "SettingsManager",
    "export_settings",
    "export_settings_json",
    "import_settings",
    "import_settings_json",
]
