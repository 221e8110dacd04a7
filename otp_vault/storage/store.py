"""Coffre de comptes OTP persiste en un seul enregistrement.

Ce module fournit CredentialStore : une collection ordonnee et
dedoublonnee de comptes, serialisee en tableau JSON sous une cle
fixe d'un RecordStorage.

Chaque operation lit l'enregistrement complet, le modifie en memoire
puis le remplace entierement. Le cycle lecture-modification-ecriture
est protege par un verrou : deux ajouts concurrents ne s'ecrasent
jamais.
"""

import json
import threading
import uuid
from typing import Callable, List, Optional

from otp_vault.config.settings import RECORD_KEY
from otp_vault.logging.base import Logger
from otp_vault.logging.security_logger import (
    SecurityLogger,
    VaultEvent,
    VaultEventType,
)
from otp_vault.otpauth.models import Credential, CredentialDraft
from otp_vault.storage.base import RecordStorage
from otp_vault.storage.exceptions import (
    CorruptRecordError,
    DuplicateCredentialError,
    StorageError,
)


def normalize_secret(secret: str) -> str:
    """Forme canonique d'un secret pour la detection des doublons.

    Args:
        secret: Secret base32 tel que recu.

    Returns:
        Secret en majuscules, sans espaces ni padding '='.
    """
    return secret.replace(" ", "").rstrip("=").upper()


class CredentialStore:
    """Collection persistante des comptes OTP.

    Attributes:
        _storage: Backend de stockage de l'enregistrement.
        _record_key: Cle fixe de l'enregistrement.
        _logger: Logger optionnel.
        _audit: Journal d'audit (si un logger est fourni).
        _id_factory: Generateur d'identifiants.
        _lock: Verrou du cycle lecture-modification-ecriture.
    """

    def __init__(
        self,
        storage: RecordStorage,
        record_key: str = RECORD_KEY,
        logger: Optional[Logger] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        """Initialise le coffre.

        Args:
            storage: Backend de stockage (keyring, fichier chiffre).
            record_key: Cle fixe de l'enregistrement.
            logger: Logger optionnel (injection de dependance).
            id_factory: Generateur d'identifiants (defaut: uuid4 hex).
        """
        self._storage = storage
        self._record_key = record_key
        self._logger = logger
        self._audit = SecurityLogger(logger) if logger else None
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)
        self._lock = threading.RLock()

    @property
    def storage(self) -> RecordStorage:
        """Backend de stockage utilise."""
        return self._storage

    def list(self) -> List[Credential]:
        """Retourne tous les comptes dans l'ordre d'insertion.

        Returns:
            Liste des comptes (vide si aucun enregistrement).

        Raises:
            StorageError: si l'enregistrement ne peut pas etre lu
                ou dechiffre.
        """
        with self._lock:
            return self._load()

    def get(self, credential_id: str) -> Optional[Credential]:
        """Retourne le compte portant l'identifiant donne.

        Args:
            credential_id: Identifiant du compte.

        Returns:
            Compte trouve ou None.
        """
        for credential in self.list():
            if credential.id == credential_id:
                return credential
        return None

    def add(self, draft: CredentialDraft) -> List[Credential]:
        """Ajoute un compte et persiste la nouvelle liste.

        Args:
            draft: Compte issu du parseur, sans identifiant.

        Returns:
            Nouvelle liste complete des comptes.

        Raises:
            DuplicateCredentialError: si un compte avec le meme
                secret existe deja (aucune ecriture).
            StorageError: si la lecture ou l'ecriture echoue.
        """
        with self._lock:
            credentials = self._load()
            wanted = normalize_secret(draft.secret)
            for existing in credentials:
                if normalize_secret(existing.secret) == wanted:
                    self._log_event(
                        VaultEventType.CREDENTIAL_DUPLICATE,
                        existing.id,
                        {"issuer": draft.issuer, "name": draft.name},
                        severity="warning",
                    )
                    raise DuplicateCredentialError(existing, credentials)

            credential = draft.with_id(self._new_id(credentials))
            updated = credentials + [credential]
            self._save(updated)
            self._log_event(
                VaultEventType.CREDENTIAL_ADDED,
                credential.id,
                {"issuer": credential.issuer, "name": credential.name},
            )
            return updated

    def remove(self, credential_id: str) -> List[Credential]:
        """Supprime un compte et persiste la liste restante.

        Un identifiant inconnu n'est pas une erreur : la liste est
        retournee inchangee sans ecriture.

        Args:
            credential_id: Identifiant du compte a supprimer.

        Returns:
            Liste des comptes restants.

        Raises:
            StorageError: si la lecture ou l'ecriture echoue.
        """
        with self._lock:
            credentials = self._load()
            remaining = [c for c in credentials if c.id != credential_id]
            if len(remaining) == len(credentials):
                return credentials
            self._save(remaining)
            self._log_event(
                VaultEventType.CREDENTIAL_REMOVED, credential_id, {}
            )
            return remaining

    def _new_id(self, credentials: List[Credential]) -> str:
        taken = {c.id for c in credentials}
        while True:
            candidate = self._id_factory()
            if candidate not in taken:
                return candidate

    def _load(self) -> List[Credential]:
        try:
            raw = self._storage.read(self._record_key)
        except StorageError as exc:
            self._report_failure("read", exc)
            raise
        if raw is None:
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("l'enregistrement n'est pas une liste")
            return [Credential.from_dict(item) for item in data]
        except (ValueError, KeyError, TypeError) as exc:
            error = CorruptRecordError(
                f"Enregistrement {self._record_key!r} illisible : {exc}"
            )
            self._report_failure("decode", error)
            raise error from exc

    def _save(self, credentials: List[Credential]) -> None:
        payload = json.dumps([c.to_dict() for c in credentials])
        try:
            self._storage.write(self._record_key, payload)
        except StorageError as exc:
            self._report_failure("write", exc)
            raise

    def _report_failure(self, operation: str, exc: Exception) -> None:
        self._log_event(
            VaultEventType.STORAGE_FAILURE,
            None,
            {
                "operation": operation,
                "backend": self._storage.source_name,
                "error": str(exc),
            },
            severity="error",
        )

    def _log_event(
        self,
        event_type: VaultEventType,
        credential_id: Optional[str],
        details: dict,
        severity: str = "info",
    ) -> None:
        if self._audit:
            self._audit.log_event(
                VaultEvent(
                    event_type=event_type,
                    credential_id=credential_id,
                    details=details,
                    severity=severity,
                )
            )
