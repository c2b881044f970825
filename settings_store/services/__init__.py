"""Application service layer.

We keep a stable import surface:
    from settings_store.services import ...
"""

from .settings import (
    DefaultSetting,
    SettingsManager,
    export_settings,
    export_settings_json,
    import_settings,
    import_settings_json,
)

__all__ = [
    "DefaultSetting",
    "SettingsManager",
    "export_settings",
    "export_settings_json",
    "import_settings",
    "import_settings_json",
]
