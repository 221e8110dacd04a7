"""Interfaces abstraites pour la gestion des erreurs."""

from abc import ABC, abstractmethod


class ErrorHandler(ABC):
    """Interface de base pour les handlers d'erreurs.

    Chaque implementation concrete definit une strategie de
    traitement (journalisation, remontee vers l'interface, etc.).
    """

    @abstractmethod
    def handle(self, error: Exception) -> None:
        """Traite une erreur.

        Args:
            error: L'exception a traiter.
        """
        pass


class ErrorHandlerChain(ErrorHandler):
    """Diffuse les erreurs a tous les handlers enregistres.

    Chaque erreur est transmise a tous les handlers dans l'ordre
    d'ajout. La chaine est elle-meme un ErrorHandler et peut donc
    etre injectee partout ou un handler simple est attendu.
    """

    def __init__(self) -> None:
        """Initialise la chaine avec une liste vide de handlers."""
        self.handlers: list[ErrorHandler] = []

    def add_handler(self, handler: ErrorHandler) -> None:
        """Ajoute un handler a la chaine.

        Args:
            handler: Le handler d'erreurs a ajouter.
        """
        self.handlers.append(handler)

    def handle(self, error: Exception) -> None:
        """Fait passer l'erreur a travers tous les handlers.

        Args:
            error: L'exception a diffuser.
        """
        for handler in self.handlers:
            handler.handle(error)
