"""
Service-level exceptions.

The cycle engine itself never raises for expected data variation; these
exceptions belong to the settings store boundary.
"""

class SettingsStoreError(Exception):
    """Base exception for settings persistence errors."""
    pass

class SettingsSaveError(SettingsStoreError):
    """Raised when the settings blob cannot be written."""
    pass

class SettingsClearError(SettingsStoreError):
    """Raised when the settings blob cannot be removed."""
    pass
