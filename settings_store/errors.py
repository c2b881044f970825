from __future__ import annotations

"""Error taxonomy of the settings store.

Everything raised on purpose by the package derives from `SettingsError`, so
callers can catch the whole family with one clause.
"""


class SettingsError(Exception):
    """Base class for settings store errors."""


class SettingAlreadyExistsError(SettingsError):
    def __init__(self, name: str) -> None:
        super().__init__(f"A setting with the name '{name}' already exists.")
        self.name = name


class SettingNotFoundError(SettingsError):
    def __init__(self, name: str, action: str = "") -> None:
        prefix = f"Cannot {action}. " if action else ""
        super().__init__(f"{prefix}No setting found with the name '{name}'.")
        self.name = name


class SettingTypeMismatchError(SettingsError, TypeError):
    """A value's kind disagrees with the declared (or kept) setting type."""


class UnsupportedValueTypeError(SettingsError, TypeError):
    """Auto-detection was given a value that maps to no setting type."""


class SettingsImportExportError(SettingsError):
    """Bulk import/export failed. The original error is kept in `cause`."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class SettingsTableInitializationError(SettingsError, RuntimeError):
    """The settings table could not be verified or created."""
