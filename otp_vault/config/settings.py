"""Modeles de configuration du coffre OTP.

Les sections sont validees par Pydantic. Exemple de fichier TOML :

    [storage]
    backend = "file"
    file_path = "~/.local/share/otp-vault/vault.json"
    passphrase_env = "OTP_VAULT_PASSPHRASE"

    [logging]
    file = "~/.local/state/otp-vault/vault.log"
    level = "INFO"
"""

import os
from pathlib import Path
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from otp_vault.config.loader import ConfigLoader, FileConfigLoader
from otp_vault.errors.exceptions import (
    ConfigurationError,
    FileConfigurationError,
)

RECORD_KEY = "authenticator_accounts"


class StorageSettings(BaseModel):
    """Section [storage] : backend de persistance du coffre."""

    model_config = {"extra": "forbid"}

    backend: Literal["keyring", "file"] = "keyring"
    service: str = "otp-vault"
    record_key: str = RECORD_KEY
    file_path: str = "~/.local/share/otp-vault/vault.json"
    passphrase_env: str = "OTP_VAULT_PASSPHRASE"
    dotenv_path: Optional[str] = None
    kdf_iterations: int = Field(default=480000, ge=100000)

    @field_validator("service", "record_key", "passphrase_env")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("La valeur ne peut pas etre vide")
        return v


class LoggingSettings(BaseModel):
    """Section [logging] : fichier et niveau de log."""

    model_config = {"extra": "forbid"}

    file: Optional[str] = None
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"
    console: bool = False


class TotpSettings(BaseModel):
    """Section [totp] : tolerance de verification des codes."""

    model_config = {"extra": "forbid"}

    verify_window: int = Field(default=1, ge=0, le=10)


class VaultSettings(BaseModel):
    """Configuration complete du coffre."""

    model_config = {"extra": "forbid"}

    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    totp: TotpSettings = Field(default_factory=TotpSettings)


def default_search_paths() -> List[Path]:
    """Retourne les emplacements standards du fichier de configuration.

    Returns:
        $XDG_CONFIG_HOME/otp-vault/config.toml (si defini) puis
        ~/.config/otp-vault/config.toml
    """
    paths: List[Path] = []
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(Path(xdg_config) / "otp-vault" / "config.toml")
    paths.append(Path("~/.config/otp-vault/config.toml").expanduser())
    return paths


def load_settings(
    config_path: Optional[Union[str, Path]] = None,
    search_paths: Optional[List[Union[str, Path]]] = None,
    loader: Optional[ConfigLoader] = None,
) -> VaultSettings:
    """Charge et valide la configuration du coffre.

    Ordre de resolution : chemin explicite, puis premier chemin
    existant parmi search_paths, sinon configuration par defaut.

    Args:
        config_path: Chemin explicite (doit exister).
        search_paths: Chemins de recherche (defaut:
            default_search_paths()).
        loader: Chargeur injectable (defaut: FileConfigLoader).

    Returns:
        Instance de VaultSettings.

    Raises:
        FileConfigurationError: si le fichier est absent ou illisible.
        ConfigurationError: si le contenu est invalide.
    """
    loader = loader or FileConfigLoader()

    if config_path is None:
        candidates = search_paths
        if candidates is None:
            candidates = default_search_paths()
        for candidate in candidates:
            candidate = Path(candidate).expanduser()
            if candidate.exists():
                config_path = candidate
                break
        else:
            return VaultSettings()

    try:
        return loader.load(config_path, schema=VaultSettings)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Configuration invalide ({config_path}) : {exc}"
        ) from exc
    except (FileNotFoundError, ValueError) as exc:
        raise FileConfigurationError(str(exc)) from exc
