"""Coffre persistant des comptes OTP.

Exemple d'utilisation :

    from otp_vault.storage import CredentialStore, KeyringRecordStorage

    store = CredentialStore(KeyringRecordStorage())
    accounts = store.add(draft)
"""

from otp_vault.storage.base import RecordStorage
from otp_vault.storage.exceptions import (
    CorruptRecordError,
    CredentialStoreError,
    DuplicateCredentialError,
    StorageError,
    StorageUnavailableError,
)
from otp_vault.storage.passphrase import (
    DotEnvPassphraseProvider,
    EnvPassphraseProvider,
    PassphraseChain,
    PassphraseProvider,
)
from otp_vault.storage.providers import (
    EncryptedFileRecordStorage,
    KeyringRecordStorage,
)
from otp_vault.storage.store import CredentialStore, normalize_secret

__all__ = [
    # Coffre
    "CredentialStore",
    "normalize_secret",
    # Backends
    "RecordStorage",
    "KeyringRecordStorage",
    "EncryptedFileRecordStorage",
    # Phrase de passe
    "PassphraseProvider",
    "EnvPassphraseProvider",
    "DotEnvPassphraseProvider",
    "PassphraseChain",
    # Exceptions
    "CredentialStoreError",
    "StorageError",
    "StorageUnavailableError",
    "CorruptRecordError",
    "DuplicateCredentialError",
]
