"""Exceptions du coffre de comptes.

Ce module definit les exceptions levees par le store et ses
backends. Toutes heritent de ApplicationError pour s'integrer
dans la chaine d'error handlers.
"""

from typing import TYPE_CHECKING, List

from otp_vault.errors.exceptions import ApplicationError

if TYPE_CHECKING:
    from otp_vault.otpauth.models import Credential


class CredentialStoreError(ApplicationError):
    """Exception de base pour toutes les erreurs du coffre."""


class StorageError(CredentialStoreError):
    """Levee quand la lecture ou l'ecriture persistante echoue."""


class StorageUnavailableError(StorageError):
    """Levee quand le backend est absent, verrouille ou sans cle."""


class CorruptRecordError(StorageError):
    """Levee quand l'enregistrement est indechiffrable ou illisible."""


class DuplicateCredentialError(CredentialStoreError):
    """Levee quand un compte avec le meme secret existe deja.

    Le coffre n'est pas modifie et aucune ecriture n'a lieu.

    Attributes:
        existing: Compte deja stocke partageant le secret.
        credentials: Liste complete, inchangee.
    """

    def __init__(
        self,
        existing: "Credential",
        credentials: List["Credential"],
    ) -> None:
        super().__init__(
            f"Un compte avec ce secret existe deja : "
            f"{existing.issuer} / {existing.name} (id={existing.id})"
        )
        self.existing = existing
        self.credentials = credentials
