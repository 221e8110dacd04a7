"""Module de configuration."""

from otp_vault.config.loader import ConfigLoader, FileConfigLoader
from otp_vault.config.settings import (
    RECORD_KEY,
    LoggingSettings,
    StorageSettings,
    TotpSettings,
    VaultSettings,
    default_search_paths,
    load_settings,
)

__all__ = [
    "ConfigLoader",
    "FileConfigLoader",
    "RECORD_KEY",
    "LoggingSettings",
    "StorageSettings",
    "TotpSettings",
    "VaultSettings",
    "default_search_paths",
    "load_settings",
]
