"""Interface abstraite du stockage persistant du coffre.

Le contrat exige deux proprietes du backend :
- confidentialite au repos (chiffrement ou stockage a acces controle) ;
- remplacement atomique : une ecriture remplace entierement
  l'enregistrement ou echoue sans corrompre l'etat precedent.
"""

from abc import ABC, abstractmethod
from typing import Optional


class RecordStorage(ABC):
    """Stockage cle-valeur d'enregistrements texte complets."""

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Lit l'enregistrement associe a la cle.

        Args:
            key: Cle logique fixe de l'enregistrement.

        Returns:
            Contenu serialise ou None si aucun enregistrement
            n'existe encore.

        Raises:
            StorageError: si le backend ne peut pas etre lu.
        """
        pass  # pragma: no cover

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Remplace entierement l'enregistrement associe a la cle.

        Args:
            key: Cle logique fixe de l'enregistrement.
            value: Nouveau contenu serialise.

        Raises:
            StorageError: si l'ecriture echoue (l'ancien contenu
                reste intact).
        """
        pass  # pragma: no cover

    @abstractmethod
    def is_available(self) -> bool:
        """Indique si ce backend est operationnel.

        Returns:
            True si le backend peut etre utilise.
        """
        pass  # pragma: no cover

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Nom court du backend (ex: "keyring", "file")."""
        pass  # pragma: no cover
