"""Implementation concrete du logger avec fichier."""

import logging
import os
from typing import Any, Optional

from otp_vault.logging.base import Logger

DEFAULT_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class FileLogger(Logger):
    """
    Logger qui ecrit dans un fichier avec option console.

    Caracteristiques:
    - Logger unique par fichier (evite les conflits)
    - Encodage UTF-8 explicite
    - Flush immediat apres chaque log
    - Pas de propagation (evite les logs en double)
    - Support optionnel de la sortie console
    """

    def __init__(
        self,
        log_file: str,
        level: str = "INFO",
        log_format: str = DEFAULT_FORMAT,
        console_output: bool = False
    ) -> None:
        """
        Initialise le logger.

        Args:
            log_file: Chemin du fichier de log
            level: Niveau de log (DEBUG, INFO, WARNING, ERROR)
            log_format: Format des lignes de log
            console_output: Activer la sortie console en plus du fichier
        """
        self.log_file = os.path.expanduser(log_file)

        log_dir = os.path.dirname(self.log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        log_level = getattr(logging, level.upper(), logging.INFO)

        self.logger = logging.getLogger(f"otp_vault.{self.log_file}")
        self.logger.setLevel(log_level)

        # Eviter les handlers dupliques
        if not self.logger.handlers:
            formatter = logging.Formatter(log_format)
            file_handler = logging.FileHandler(
                self.log_file, encoding='utf-8'
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)
            self.handler = file_handler

            if console_output:
                console_handler = logging.StreamHandler()
                console_handler.setLevel(log_level)
                console_handler.setFormatter(formatter)
                self.logger.addHandler(console_handler)
        else:
            self.handler = self.logger.handlers[0]

        self.logger.propagate = False

    @classmethod
    def from_settings(cls, settings: Any) -> Optional["FileLogger"]:
        """
        Cree un logger depuis une section LoggingSettings.

        Args:
            settings: Objet expose par VaultSettings.logging
                (attributs file, level, format, console)

        Returns:
            FileLogger configure, ou None si aucun fichier n'est defini
        """
        if not settings.file:
            return None
        return cls(
            settings.file,
            level=settings.level,
            log_format=settings.format,
            console_output=settings.console,
        )

    def _flush(self) -> None:
        """Force l'ecriture immediate sur le disque."""
        if self.handler:
            self.handler.flush()

    def log_info(self, message: str) -> None:
        """Log un message d'information."""
        self.logger.info(message)
        self._flush()

    def log_warning(self, message: str) -> None:
        """Log un avertissement."""
        self.logger.warning(message)
        self._flush()

    def log_error(self, message: str) -> None:
        """Log une erreur."""
        self.logger.error(message)
        self._flush()
