"""Sources de la phrase de passe du coffre chiffre sur fichier.

Chaine de priorite :
    variable d'environnement -> fichier .env (python-dotenv)

Le premier provider disponible qui retourne une valeur non vide
l'emporte ; les providers indisponibles sont ignores.
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

from dotenv import dotenv_values

from otp_vault.logging.base import Logger


class PassphraseProvider(ABC):
    """Interface de lecture de la phrase de passe."""

    @abstractmethod
    def get(self) -> Optional[str]:
        """Retourne la phrase de passe ou None si absente."""
        pass  # pragma: no cover

    @abstractmethod
    def is_available(self) -> bool:
        """Indique si ce provider est operationnel."""
        pass  # pragma: no cover

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Nom court de la source (ex: "env", "dotenv")."""
        pass  # pragma: no cover


class EnvPassphraseProvider(PassphraseProvider):
    """Lit la phrase de passe depuis os.environ.

    Attributes:
        _variable: Nom de la variable d'environnement.
    """

    def __init__(self, variable: str = "OTP_VAULT_PASSPHRASE") -> None:
        self._variable = variable

    def get(self) -> Optional[str]:
        value = os.environ.get(self._variable)
        return value if value else None

    def is_available(self) -> bool:
        return True

    @property
    def source_name(self) -> str:
        return "env"


class DotEnvPassphraseProvider(PassphraseProvider):
    """Lit la phrase de passe depuis un fichier .env.

    Le fichier est lu avec dotenv_values : son contenu n'est pas
    injecte dans os.environ, la phrase de passe reste confinee au
    provider.

    Attributes:
        _dotenv_path: Chemin vers le fichier .env.
        _variable: Nom de la variable recherchee.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        dotenv_path: Union[str, Path],
        variable: str = "OTP_VAULT_PASSPHRASE",
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialise le provider de fichier .env.

        Args:
            dotenv_path: Chemin vers le fichier .env.
            variable: Nom de la variable recherchee.
            logger: Logger optionnel (injection de dependance).
        """
        self._dotenv_path = Path(dotenv_path).expanduser()
        self._variable = variable
        self._logger = logger

    def get(self) -> Optional[str]:
        """Lit la variable dans le fichier .env.

        Returns:
            Valeur de la variable ou None si absente ou si le
            fichier n'existe pas.
        """
        if not self._dotenv_path.exists():
            if self._logger:
                self._logger.log_warning(
                    f"Fichier .env introuvable : {self._dotenv_path}"
                )
            return None
        value = dotenv_values(self._dotenv_path).get(self._variable)
        return value if value else None

    def is_available(self) -> bool:
        return self._dotenv_path.exists()

    @property
    def source_name(self) -> str:
        return "dotenv"


class PassphraseChain(PassphraseProvider):
    """Parcourt une liste ordonnee de providers jusqu'au premier succes.

    Attributes:
        _providers: Providers par priorite decroissante.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        providers: List[PassphraseProvider],
        logger: Optional[Logger] = None,
    ) -> None:
        self._providers = providers
        self._logger = logger

    def get(self) -> Optional[str]:
        """Retourne la premiere phrase de passe trouvee.

        Returns:
            Phrase de passe ou None si aucun provider n'en fournit.
        """
        for provider in self._providers:
            if not provider.is_available():
                continue
            value = provider.get()
            if value:
                if self._logger:
                    self._logger.log_info(
                        f"Phrase de passe trouvee via "
                        f"{provider.source_name!r}"
                    )
                return value
        return None

    def is_available(self) -> bool:
        return any(p.is_available() for p in self._providers)

    @property
    def source_name(self) -> str:
        return "chain"

    @classmethod
    def default(
        cls,
        variable: str = "OTP_VAULT_PASSPHRASE",
        dotenv_path: Optional[Union[str, Path]] = None,
        logger: Optional[Logger] = None,
    ) -> "PassphraseChain":
        """Cree la chaine standard env -> dotenv.

        Args:
            variable: Nom de la variable portant la phrase de passe.
            dotenv_path: Chemin optionnel vers un fichier .env.
                Si None, le provider dotenv est omis.
            logger: Logger optionnel partage.

        Returns:
            Instance de PassphraseChain.
        """
        providers: List[PassphraseProvider] = [
            EnvPassphraseProvider(variable),
        ]
        if dotenv_path is not None:
            providers.append(
                DotEnvPassphraseProvider(
                    dotenv_path=dotenv_path,
                    variable=variable,
                    logger=logger,
                )
            )
        return cls(providers=providers, logger=logger)
