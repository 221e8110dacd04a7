"""Tests unitaires pour les sources de phrase de passe.

Couvre EnvPassphraseProvider, DotEnvPassphraseProvider et
PassphraseChain.
"""

import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from otp_vault.storage.passphrase import (
    DotEnvPassphraseProvider,
    EnvPassphraseProvider,
    PassphraseChain,
    PassphraseProvider,
)

VARIABLE = "OTP_VAULT_TEST_PASSPHRASE"


class TestEnvPassphraseProvider:
    """Tests du provider variable d'environnement."""

    def test_valeur_presente(self, monkeypatch) -> None:
        """Retourne la valeur de la variable."""
        monkeypatch.setenv(VARIABLE, "phrase")
        assert EnvPassphraseProvider(VARIABLE).get() == "phrase"

    def test_valeur_absente(self, monkeypatch) -> None:
        """Retourne None si la variable est absente."""
        monkeypatch.delenv(VARIABLE, raising=False)
        assert EnvPassphraseProvider(VARIABLE).get() is None

    def test_valeur_vide(self, monkeypatch) -> None:
        """Une variable vide équivaut à une absence."""
        monkeypatch.setenv(VARIABLE, "")
        assert EnvPassphraseProvider(VARIABLE).get() is None

    def test_toujours_disponible(self) -> None:
        """Le provider env est toujours disponible."""
        provider = EnvPassphraseProvider(VARIABLE)
        assert provider.is_available()
        assert provider.source_name == "env"


class TestDotEnvPassphraseProvider:
    """Tests du provider fichier .env."""

    def test_lecture(self, tmp_path: Path, monkeypatch) -> None:
        """Lit la variable depuis le fichier .env."""
        monkeypatch.delenv(VARIABLE, raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text(f"{VARIABLE}=depuis-dotenv\n")
        provider = DotEnvPassphraseProvider(env_file, VARIABLE)
        assert provider.get() == "depuis-dotenv"

    def test_environnement_non_modifie(
        self, tmp_path: Path, monkeypatch
    ) -> None:
        """La lecture n'injecte rien dans os.environ."""
        monkeypatch.delenv(VARIABLE, raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text(f"{VARIABLE}=depuis-dotenv\n")
        DotEnvPassphraseProvider(env_file, VARIABLE).get()
        assert VARIABLE not in os.environ

    def test_variable_absente(self, tmp_path: Path) -> None:
        """Retourne None si la variable n'est pas dans le fichier."""
        env_file = tmp_path / ".env"
        env_file.write_text("AUTRE=valeur\n")
        assert DotEnvPassphraseProvider(env_file, VARIABLE).get() is None

    def test_fichier_absent(self, tmp_path: Path) -> None:
        """Un fichier absent rend le provider indisponible."""
        logger = MagicMock()
        provider = DotEnvPassphraseProvider(
            tmp_path / "absent.env", VARIABLE, logger=logger
        )
        assert not provider.is_available()
        assert provider.get() is None
        logger.log_warning.assert_called_once()
        assert provider.source_name == "dotenv"


class TestPassphraseChain:
    """Tests de la chaine de providers."""

    def _provider(self, value, available=True, name="mock"):
        provider = MagicMock(spec=PassphraseProvider)
        provider.get.return_value = value
        provider.is_available.return_value = available
        provider.source_name = name
        return provider

    def test_premier_non_vide_gagne(self) -> None:
        """Le premier provider qui retourne une valeur l'emporte."""
        first = self._provider(None)
        second = self._provider("deuxieme")
        third = self._provider("troisieme")
        chain = PassphraseChain([first, second, third])
        assert chain.get() == "deuxieme"
        third.get.assert_not_called()

    def test_provider_indisponible_ignore(self) -> None:
        """Un provider indisponible n'est pas interrogé."""
        down = self._provider("jamais", available=False)
        up = self._provider("valeur")
        assert PassphraseChain([down, up]).get() == "valeur"
        down.get.assert_not_called()

    def test_aucune_valeur(self) -> None:
        """Retourne None si aucun provider ne fournit de valeur."""
        chain = PassphraseChain([self._provider(None)])
        assert chain.get() is None

    def test_source_journalisee(self) -> None:
        """La source retenue est journalisée, pas la valeur."""
        logger = MagicMock()
        chain = PassphraseChain(
            [self._provider("secrete", name="env")], logger=logger
        )
        chain.get()
        message = logger.log_info.call_args[0][0]
        assert "'env'" in message
        assert "secrete" not in message

    def test_disponibilite(self) -> None:
        """La chaine est disponible si un provider l'est."""
        assert PassphraseChain(
            [self._provider(None, available=False), self._provider(None)]
        ).is_available()
        assert not PassphraseChain(
            [self._provider(None, available=False)]
        ).is_available()

    def test_chaine_par_defaut_env_prioritaire(
        self, tmp_path: Path, monkeypatch
    ) -> None:
        """La variable d'environnement passe avant le fichier .env."""
        env_file = tmp_path / ".env"
        env_file.write_text(f"{VARIABLE}=depuis-dotenv\n")
        monkeypatch.setenv(VARIABLE, "depuis-env")
        chain = PassphraseChain.default(VARIABLE, dotenv_path=env_file)
        assert chain.get() == "depuis-env"

    def test_chaine_par_defaut_repli_dotenv(
        self, tmp_path: Path, monkeypatch
    ) -> None:
        """Sans variable d'environnement, le fichier .env est lu."""
        env_file = tmp_path / ".env"
        env_file.write_text(f"{VARIABLE}=depuis-dotenv\n")
        monkeypatch.delenv(VARIABLE, raising=False)
        chain = PassphraseChain.default(VARIABLE, dotenv_path=env_file)
        assert chain.get() == "depuis-dotenv"

    def test_chaine_par_defaut_sans_dotenv(self, monkeypatch) -> None:
        """Sans dotenv_path, seule la variable est consultée."""
        monkeypatch.delenv(VARIABLE, raising=False)
        chain = PassphraseChain.default(VARIABLE)
        assert chain.get() is None
        assert chain.source_name == "chain"


@pytest.mark.parametrize(
    "provider_cls", [EnvPassphraseProvider, PassphraseChain]
)
def test_providers_implementent_l_interface(provider_cls) -> None:
    """Les providers concrets respectent PassphraseProvider."""
    assert issubclass(provider_cls, PassphraseProvider)
