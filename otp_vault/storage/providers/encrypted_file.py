"""Backend de stockage dans un fichier chiffre.

Ce module fournit EncryptedFileRecordStorage, alternative au keyring
pour les machines sans trousseau systeme (serveurs, conteneurs).

Format du fichier (JSON) :

    {
        "version": 1,
        "salt": "<base64>",
        "iterations": 480000,
        "records": {"<cle>": "<jeton Fernet>"}
    }

La cle Fernet est derivee de la phrase de passe par PBKDF2-HMAC-SHA256
avec le sel du fichier. Chaque ecriture passe par un fichier
temporaire du meme repertoire puis os.replace : le fichier precedent
reste intact si l'ecriture echoue.
"""

import base64
import hashlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from otp_vault.logging.base import Logger
from otp_vault.storage.base import RecordStorage
from otp_vault.storage.exceptions import (
    CorruptRecordError,
    StorageError,
    StorageUnavailableError,
)
from otp_vault.storage.passphrase import PassphraseProvider

FILE_FORMAT_VERSION = 1
DEFAULT_ITERATIONS = 480000
SALT_SIZE = 16


def derive_key(passphrase: str, salt: bytes, iterations: int) -> bytes:
    """Derive une cle Fernet depuis une phrase de passe.

    Args:
        passphrase: Phrase de passe en clair.
        salt: Sel aleatoire du fichier.
        iterations: Nombre d'iterations PBKDF2.

    Returns:
        Cle Fernet encodee en base64 urlsafe.
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=iterations,
    )
    return base64.urlsafe_b64encode(kdf.derive(passphrase.encode()))


class EncryptedFileRecordStorage(RecordStorage):
    """Lit et ecrit les enregistrements dans un fichier chiffre.

    Attributes:
        _path: Chemin du fichier coffre.
        _passphrase: Source de la phrase de passe.
        _iterations: Iterations PBKDF2 pour un nouveau fichier.
        _logger: Logger optionnel.
        _fernet_cache: Instance Fernet par (sel, iterations,
            empreinte de la phrase de passe).
    """

    def __init__(
        self,
        path: Union[str, Path],
        passphrase_provider: PassphraseProvider,
        iterations: int = DEFAULT_ITERATIONS,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialise le backend fichier.

        Args:
            path: Chemin du fichier coffre (cree a la premiere
                ecriture).
            passphrase_provider: Source de la phrase de passe.
            iterations: Iterations PBKDF2 pour un nouveau fichier.
                Un fichier existant conserve les siennes.
            logger: Logger optionnel (injection de dependance).
        """
        self._path = Path(path).expanduser()
        self._passphrase = passphrase_provider
        self._iterations = iterations
        self._logger = logger
        self._fernet_cache: Dict[tuple, Fernet] = {}

    @property
    def path(self) -> Path:
        """Chemin du fichier coffre."""
        return self._path

    def read(self, key: str) -> Optional[str]:
        """Dechiffre l'enregistrement associe a la cle.

        Args:
            key: Cle logique de l'enregistrement.

        Returns:
            Contenu en clair ou None si le fichier ou la cle
            n'existent pas encore.

        Raises:
            StorageUnavailableError: si aucune phrase de passe n'est
                disponible.
            CorruptRecordError: si le fichier est illisible ou si le
                dechiffrement echoue (phrase de passe incorrecte).
            StorageError: si le fichier ne peut pas etre lu.
        """
        envelope = self._load_envelope()
        if envelope is None:
            return None
        token = envelope["records"].get(key)
        if token is None:
            return None
        if not isinstance(token, str):
            raise CorruptRecordError(
                f"Enregistrement {key!r} mal forme dans {self._path}"
            )
        fernet = self._fernet_for(envelope)
        try:
            return fernet.decrypt(token.encode()).decode()
        except InvalidToken as exc:
            raise CorruptRecordError(
                f"Dechiffrement impossible de {self._path} "
                f"(phrase de passe incorrecte ou fichier altere)"
            ) from exc

    def write(self, key: str, value: str) -> None:
        """Chiffre et remplace l'enregistrement associe a la cle.

        Args:
            key: Cle logique de l'enregistrement.
            value: Contenu en clair.

        Raises:
            StorageUnavailableError: si aucune phrase de passe n'est
                disponible.
            CorruptRecordError: si le fichier existant est illisible.
            StorageError: si l'ecriture echoue.
        """
        envelope = self._load_envelope()
        if envelope is None:
            envelope = {
                "version": FILE_FORMAT_VERSION,
                "salt": base64.b64encode(
                    os.urandom(SALT_SIZE)
                ).decode(),
                "iterations": self._iterations,
                "records": {},
            }
        fernet = self._fernet_for(envelope)
        envelope["records"][key] = fernet.encrypt(value.encode()).decode()
        self._atomic_write(json.dumps(envelope, indent=2))
        if self._logger:
            self._logger.log_info(
                f"Enregistrement stocke dans {self._path} : key={key!r}"
            )

    def is_available(self) -> bool:
        """Indique si une phrase de passe est disponible.

        Returns:
            True si le coffre peut etre dechiffre ou cree.
        """
        return bool(self._passphrase.get())

    @property
    def source_name(self) -> str:
        return "file"

    def _load_envelope(self) -> Optional[Dict[str, Any]]:
        if not self._path.exists():
            return None
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(
                f"Lecture impossible de {self._path} : {exc}"
            ) from exc
        try:
            envelope = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CorruptRecordError(
                f"Fichier coffre illisible : {self._path}"
            ) from exc
        if (
            not isinstance(envelope, dict)
            or envelope.get("version") != FILE_FORMAT_VERSION
            or not isinstance(envelope.get("records"), dict)
            or "salt" not in envelope
        ):
            raise CorruptRecordError(
                f"Format de fichier coffre non reconnu : {self._path}"
            )
        return envelope

    def _fernet_for(self, envelope: Dict[str, Any]) -> Fernet:
        salt = envelope["salt"]
        iterations = envelope.get("iterations", self._iterations)
        if not isinstance(salt, str) or not isinstance(iterations, int):
            raise CorruptRecordError(
                f"Parametres de derivation invalides dans {self._path}"
            )
        passphrase = self._passphrase.get()
        if not passphrase:
            raise StorageUnavailableError(
                "Aucune phrase de passe disponible pour le "
                "coffre chiffre"
            )
        # la phrase de passe peut changer entre deux appels
        fingerprint = hashlib.sha256(passphrase.encode()).hexdigest()
        cache_key = (salt, iterations, fingerprint)
        if cache_key not in self._fernet_cache:
            try:
                salt_bytes = base64.b64decode(salt)
            except ValueError as exc:
                raise CorruptRecordError(
                    f"Sel invalide dans {self._path}"
                ) from exc
            self._fernet_cache[cache_key] = Fernet(
                derive_key(passphrase, salt_bytes, iterations)
            )
        return self._fernet_cache[cache_key]

    def _atomic_write(self, content: str) -> None:
        directory = self._path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(
                f"Ecriture impossible de {self._path} : {exc}"
            ) from exc
