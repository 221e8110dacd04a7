"""Lecture des fichiers de configuration du coffre (TOML ou JSON)."""

import json
import tomllib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Type, Union

from pydantic import BaseModel

_PARSERS = {
    ".toml": "toml",
    ".json": "json",
}


class ConfigLoader(ABC):
    """
    Interface de chargement de configuration.

    Injectee dans load_settings pour pouvoir remplacer la lecture
    disque par un mock dans les tests.
    """

    @abstractmethod
    def load(
        self,
        config_path: Union[str, Path],
        schema: Optional[Type[BaseModel]] = None
    ) -> Union[Dict[str, Any], BaseModel]:
        """
        Charge un fichier de configuration.

        Args:
            config_path: Chemin vers le fichier
            schema: Modele Pydantic optionnel. Si fourni, retourne
                une instance validee, sinon le dict brut.

        Raises:
            FileNotFoundError: Si le fichier n'existe pas
            ValueError: Si le format est inconnu ou le contenu illisible
            TypeError: Si schema n'est pas un BaseModel
        """
        pass  # pragma: no cover


class FileConfigLoader(ConfigLoader):
    """
    Chargeur depuis le disque, format choisi par l'extension.

    Une erreur de syntaxe TOML ou JSON est remontee en ValueError
    avec le chemin du fichier fautif.
    """

    def load(
        self,
        config_path: Union[str, Path],
        schema: Optional[Type[BaseModel]] = None
    ) -> Union[Dict[str, Any], BaseModel]:
        """
        Lit le fichier puis le valide si un schema est fourni.

        Args:
            config_path: Chemin vers le fichier (~ accepte)
            schema: Modele Pydantic optionnel

        Returns:
            Dict brut ou instance du schema

        Raises:
            FileNotFoundError: Si le fichier n'existe pas
            ValueError: Si l'extension n'est pas supportee ou si le
                fichier est syntaxiquement invalide
            TypeError: Si schema n'est pas un BaseModel
            pydantic.ValidationError: Si les valeurs sont invalides
        """
        path = Path(config_path).expanduser()
        if not path.is_file():
            raise FileNotFoundError(
                f"Fichier de configuration non trouve: {path}"
            )

        data = self._read(path)
        if schema is None:
            return data
        if not (isinstance(schema, type) and issubclass(schema, BaseModel)):
            raise TypeError(
                f"Le schema doit etre une sous-classe de "
                f"pydantic.BaseModel, recu: {schema}"
            )
        return schema.model_validate(data)

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        kind = _PARSERS.get(path.suffix.lower())
        if kind is None:
            raise ValueError(
                f"Extension non supportee: {path.suffix}. "
                "Utilisez .toml ou .json"
            )
        try:
            if kind == "toml":
                with open(path, "rb") as f:
                    return tomllib.load(f)
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
            raise ValueError(
                f"Fichier de configuration illisible ({path}): {exc}"
            ) from exc
