"""Backend de stockage dans le keyring systeme.

Ce module fournit KeyringRecordStorage qui persiste l'enregistrement
du coffre via le module keyring. Le chiffrement au repos est assure
par le trousseau de la plateforme :

- GNOME Keyring, KWallet (KDE Plasma 6), KeePassXC (Secret Service)
- Trousseau macOS
- Windows Credential Locker

set_password remplace la valeur existante en une seule operation.
"""

from typing import Any, Optional

from otp_vault.logging.base import Logger
from otp_vault.storage.base import RecordStorage
from otp_vault.storage.exceptions import (
    StorageError,
    StorageUnavailableError,
)


class KeyringRecordStorage(RecordStorage):
    """Lit et ecrit l'enregistrement du coffre dans le keyring.

    Contrairement a une lecture de credential isolee, un echec du
    keyring n'est jamais masque : il est remonte en StorageError
    afin de ne pas confondre "coffre vide" et "coffre illisible".

    Attributes:
        _service: Nom du service dans le trousseau.
        _logger: Logger optionnel.
        _backend: Backend keyring injecte (pour tests unitaires).
    """

    def __init__(
        self,
        service: str = "otp-vault",
        logger: Optional[Logger] = None,
        keyring_backend: Optional[Any] = None,
    ) -> None:
        """Initialise le backend keyring.

        Args:
            service: Nom du service dans le trousseau.
            logger: Logger optionnel (injection de dependance).
            keyring_backend: Backend keyring optionnel. Permet
                d'injecter un mock pour les tests sans keyring
                systeme reel.
        """
        self._service = service
        self._logger = logger
        self._backend = keyring_backend

    def _get_keyring(self) -> Any:
        """Retourne le module keyring ou le backend injecte.

        Raises:
            StorageUnavailableError: si keyring est absent ou si
                aucun trousseau n'est configure sur la machine.
        """
        if self._backend is not None:
            return self._backend
        try:
            import keyring
            from keyring.backends import fail
        except ImportError:
            raise StorageUnavailableError(
                "Le module 'keyring' n'est pas installe. "
                "Installez-le avec : pip install keyring"
            )
        if isinstance(keyring.get_keyring(), fail.Keyring):
            raise StorageUnavailableError(
                "Aucun trousseau systeme n'est disponible."
            )
        return keyring

    def read(self, key: str) -> Optional[str]:
        """Lit l'enregistrement depuis le keyring.

        Args:
            key: Cle logique de l'enregistrement.

        Returns:
            Contenu serialise ou None si absent.

        Raises:
            StorageError: si le trousseau est indisponible,
                verrouille ou en erreur.
        """
        kr = self._get_keyring()
        try:
            value = kr.get_password(self._service, key)
        except Exception as exc:
            raise StorageError(
                f"Erreur lors de la lecture keyring : {exc}"
            ) from exc
        return value if value else None

    def write(self, key: str, value: str) -> None:
        """Remplace l'enregistrement dans le keyring.

        Args:
            key: Cle logique de l'enregistrement.
            value: Contenu serialise.

        Raises:
            StorageError: si le trousseau est indisponible ou si
                l'operation echoue.
        """
        kr = self._get_keyring()
        try:
            kr.set_password(self._service, key, value)
        except Exception as exc:
            raise StorageError(
                f"Erreur lors du stockage keyring : {exc}"
            ) from exc
        if self._logger:
            self._logger.log_info(
                f"Enregistrement stocke dans le keyring : "
                f"service={self._service!r}, key={key!r}"
            )

    def is_available(self) -> bool:
        """Indique si le keyring est operationnel.

        Returns:
            True si un backend a ete injecte ou si un trousseau
            systeme est configure.
        """
        try:
            self._get_keyring()
        except StorageUnavailableError:
            return False
        return True

    @property
    def source_name(self) -> str:
        """Nom court de la source.

        Returns:
            "keyring"
        """
        return "keyring"
