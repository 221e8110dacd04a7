"""Backends de stockage persistant du coffre."""

from otp_vault.storage.providers.encrypted_file import (
    EncryptedFileRecordStorage,
)
from otp_vault.storage.providers.keyring import KeyringRecordStorage

__all__ = [
    "KeyringRecordStorage",
    "EncryptedFileRecordStorage",
]
