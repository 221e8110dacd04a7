"""
OTP Vault - Generateur de codes TOTP et coffre de comptes.

Modules disponibles:
- otpauth: Parseur d'URI otpauth:// et modeles de comptes
- totp: Moteur TOTP (RFC 6238), horloges, tableau des codes
- storage: Coffre persistant (keyring, fichier chiffre)
- config: Chargement et validation de la configuration (TOML, JSON)
- logging: Gestion des logs (Logger, FileLogger, SecurityLogger)
- errors: Hierarchie d'exceptions et handlers d'erreurs
"""

__version__ = "1.0.0"

from otp_vault.config import VaultSettings, load_settings
from otp_vault.errors import ApplicationError
from otp_vault.logging import FileLogger, Logger
from otp_vault.otpauth import (
    Credential,
    CredentialDraft,
    ParseError,
    build_uri,
    parse_uri,
)
from otp_vault.storage import (
    CredentialStore,
    CredentialStoreError,
    DuplicateCredentialError,
    EncryptedFileRecordStorage,
    KeyringRecordStorage,
    StorageError,
)
from otp_vault.totp import (
    CodeBoard,
    CodeView,
    GenerationError,
    TotpEngine,
    current_code,
    seconds_remaining,
    verify_code,
)
from otp_vault.vault import Authenticator

__all__ = [
    # Facade
    "Authenticator",
    # URI otpauth
    "parse_uri",
    "build_uri",
    "Credential",
    "CredentialDraft",
    "ParseError",
    # TOTP
    "current_code",
    "seconds_remaining",
    "verify_code",
    "TotpEngine",
    "CodeBoard",
    "CodeView",
    "GenerationError",
    # Coffre
    "CredentialStore",
    "KeyringRecordStorage",
    "EncryptedFileRecordStorage",
    "CredentialStoreError",
    "StorageError",
    "DuplicateCredentialError",
    # Configuration et logs
    "VaultSettings",
    "load_settings",
    "Logger",
    "FileLogger",
    "ApplicationError",
]
