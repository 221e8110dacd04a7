"""Facade du coffre : configuration, stockage, moteur et journal.

Exemple d'utilisation :

    from otp_vault import Authenticator

    vault = Authenticator.from_settings()
    vault.import_uri(scanned_text)
    for view in vault.codes():
        print(view.issuer, view.name, view.code, view.seconds_remaining)
"""

from pathlib import Path
from typing import List, Optional, Union

from otp_vault.config.settings import VaultSettings, load_settings
from otp_vault.errors.base import ErrorHandler
from otp_vault.errors.logger_handler import LoggerErrorHandler
from otp_vault.logging.base import Logger
from otp_vault.logging.file_logger import FileLogger
from otp_vault.otpauth.models import Credential
from otp_vault.otpauth.parser import build_uri, parse_uri
from otp_vault.storage.base import RecordStorage
from otp_vault.storage.passphrase import PassphraseChain
from otp_vault.storage.providers import (
    EncryptedFileRecordStorage,
    KeyringRecordStorage,
)
from otp_vault.storage.store import CredentialStore
from otp_vault.totp.board import CodeBoard, CodeView
from otp_vault.totp.clock import Clock
from otp_vault.totp.engine import TotpEngine, verify_code


def build_storage(
    settings: VaultSettings, logger: Optional[Logger] = None
) -> RecordStorage:
    """Instancie le backend decrit par la section [storage].

    Args:
        settings: Configuration complete.
        logger: Logger optionnel partage.

    Returns:
        KeyringRecordStorage ou EncryptedFileRecordStorage.
    """
    storage = settings.storage
    if storage.backend == "file":
        passphrase = PassphraseChain.default(
            variable=storage.passphrase_env,
            dotenv_path=storage.dotenv_path,
            logger=logger,
        )
        return EncryptedFileRecordStorage(
            path=storage.file_path,
            passphrase_provider=passphrase,
            iterations=storage.kdf_iterations,
            logger=logger,
        )
    return KeyringRecordStorage(service=storage.service, logger=logger)


class Authenticator:
    """Point d'entree du coffre pour le collaborateur d'affichage.

    Attributes:
        _store: Coffre persistant.
        _engine: Moteur TOTP.
        _board: Tableau des codes.
        _verify_window: Tolerance de verify() en pas.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        store: CredentialStore,
        engine: Optional[TotpEngine] = None,
        error_handler: Optional[ErrorHandler] = None,
        logger: Optional[Logger] = None,
        verify_window: int = 1,
    ) -> None:
        """Initialise la facade.

        Args:
            store: Coffre persistant.
            engine: Moteur TOTP (defaut: horloge systeme).
            error_handler: Handler des erreurs de generation.
            logger: Logger optionnel (injection de dependance).
            verify_window: Pas toleres par verify().
        """
        self._store = store
        self._engine = engine or TotpEngine()
        self._logger = logger
        self._board = CodeBoard(
            engine=self._engine,
            error_handler=error_handler,
            logger=logger,
        )
        self._verify_window = verify_window

    @classmethod
    def from_settings(
        cls,
        settings: Optional[VaultSettings] = None,
        config_path: Optional[Union[str, Path]] = None,
        clock: Optional[Clock] = None,
        storage: Optional[RecordStorage] = None,
    ) -> "Authenticator":
        """Construit la facade depuis la configuration.

        Args:
            settings: Configuration deja chargee. Si None, elle est
                lue via load_settings(config_path).
            config_path: Chemin explicite du fichier de configuration.
            clock: Horloge injectable (tests).
            storage: Backend injectable, remplace celui de la
                configuration.

        Returns:
            Instance de Authenticator.

        Raises:
            ConfigurationError: si la configuration est invalide.
        """
        if settings is None:
            settings = load_settings(config_path)
        logger = FileLogger.from_settings(settings.logging)
        if storage is None:
            storage = build_storage(settings, logger)
        store = CredentialStore(
            storage,
            record_key=settings.storage.record_key,
            logger=logger,
        )
        return cls(
            store,
            engine=TotpEngine(clock),
            error_handler=LoggerErrorHandler(logger) if logger else None,
            logger=logger,
            verify_window=settings.totp.verify_window,
        )

    @property
    def store(self) -> CredentialStore:
        """Coffre persistant sous-jacent."""
        return self._store

    def import_uri(self, uri: str) -> List[Credential]:
        """Parse une URI otpauth scannee et l'ajoute au coffre.

        Args:
            uri: Texte decode du QR code.

        Returns:
            Nouvelle liste complete des comptes.

        Raises:
            ParseError: si l'URI est invalide (rien n'est ecrit).
            DuplicateCredentialError: si le secret est deja stocke.
            StorageError: si la persistance echoue.
        """
        draft = parse_uri(uri)
        if self._logger:
            self._logger.log_info(
                f"Import du compte {draft.issuer} / {draft.name}"
            )
        return self._store.add(draft)

    def credentials(self) -> List[Credential]:
        """Comptes stockes dans l'ordre d'insertion."""
        return self._store.list()

    def remove(self, credential_id: str) -> List[Credential]:
        """Supprime un compte ; identifiant inconnu sans effet."""
        return self._store.remove(credential_id)

    def codes(self) -> List[CodeView]:
        """Calcule le code courant de chaque compte stocke.

        Returns:
            Une vue par compte, dans l'ordre d'insertion.
        """
        return self._board.snapshot(self._store.list())

    def verify(self, credential_id: str, code: str) -> bool:
        """Verifie un code saisi pour un compte stocke.

        Args:
            credential_id: Identifiant du compte.
            code: Code saisi.

        Returns:
            True si le code est valide dans la fenetre configuree,
            False sinon (y compris pour un identifiant inconnu).
        """
        credential = self._store.get(credential_id)
        if credential is None:
            return False
        return verify_code(
            credential.secret,
            code,
            self._engine.now(),
            algorithm=credential.algorithm,
            digits=credential.digits,
            period=credential.period,
            window=self._verify_window,
        )

    def export_uri(self, credential_id: str) -> Optional[str]:
        """Exporte un compte en URI otpauth (sauvegarde, QR).

        Args:
            credential_id: Identifiant du compte.

        Returns:
            URI otpauth ou None si l'identifiant est inconnu.
        """
        credential = self._store.get(credential_id)
        if credential is None:
            return None
        return build_uri(credential.draft)
