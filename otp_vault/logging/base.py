"""Contrat de journalisation partage par les composants du coffre."""

from abc import ABC, abstractmethod


class Logger(ABC):
    """Destination des messages du coffre OTP.

    Le store, les backends et le tableau des codes recoivent un
    Logger optionnel par injection. Un message ne contient jamais
    de secret partage ni de phrase de passe.
    """

    @abstractmethod
    def log_info(self, message: str) -> None:
        """Trace une operation reussie (ajout, ecriture, import)."""
        pass  # pragma: no cover

    @abstractmethod
    def log_warning(self, message: str) -> None:
        """Trace un incident recupere (doublon, code indisponible)."""
        pass  # pragma: no cover

    @abstractmethod
    def log_error(self, message: str) -> None:
        """Trace un echec remonte a l'appelant (stockage, config)."""
        pass  # pragma: no cover
