"""Module de logging."""

from otp_vault.logging.base import Logger
from otp_vault.logging.file_logger import FileLogger
from otp_vault.logging.security_logger import (
    SecurityLogger,
    VaultEvent,
    VaultEventType,
)

__all__ = [
    "Logger",
    "FileLogger",
    "SecurityLogger",
    "VaultEvent",
    "VaultEventType",
]
