"""Module de gestion des erreurs."""

from otp_vault.errors.base import ErrorHandler, ErrorHandlerChain
from otp_vault.errors.exceptions import (
    ApplicationError,
    ConfigurationError,
    FileConfigurationError,
    ValidationError,
)
from otp_vault.errors.logger_handler import LoggerErrorHandler


__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "FileConfigurationError",
    "ValidationError",
    "ErrorHandler",
    "ErrorHandlerChain",
    "LoggerErrorHandler",
]
