"""Modeles de donnees des comptes OTP.

Ce module definit les dataclasses immuables CredentialDraft (compte
sans identifiant, produit par le parseur) et Credential (compte
persiste dans le coffre).
"""

from dataclasses import asdict, dataclass, fields
from enum import StrEnum
from typing import Any, Dict

DEFAULT_ISSUER = "Unknown"
DEFAULT_NAME = "Account"
DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30


class OtpType(StrEnum):
    """Mode OTP. Seul le mode base sur le temps est implemente."""

    TOTP = "totp"
    HOTP = "hotp"


class HashAlgorithm(StrEnum):
    """Fonctions de hachage HMAC reconnues par l'URI otpauth."""

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"


@dataclass(frozen=True)
class CredentialDraft:
    """Compte OTP pas encore persiste (sans identifiant).

    Attributes:
        name: Libelle du compte (ex: "alice@example.com").
        issuer: Service emetteur (ex: "ACME").
        secret: Cle partagee telle que recue (texte base32).
        type: Mode OTP.
        algorithm: Hachage HMAC.
        digits: Longueur du code.
        period: Intervalle de rotation en secondes.
    """

    name: str
    issuer: str
    secret: str
    type: OtpType = OtpType.TOTP
    algorithm: HashAlgorithm = HashAlgorithm.SHA1
    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_PERIOD

    def __post_init__(self) -> None:
        """Valide le secret apres initialisation."""
        _require_secret(self.secret)

    def with_id(self, credential_id: str) -> "Credential":
        """Construit le compte persiste avec l'identifiant fourni.

        Args:
            credential_id: Identifiant unique attribue par le store.

        Returns:
            Instance de Credential.
        """
        return Credential(id=credential_id, **asdict(self))


@dataclass(frozen=True)
class Credential:
    """Compte OTP persiste dans le coffre.

    Attributes:
        id: Identifiant opaque, unique et immuable.
        name: Libelle du compte.
        issuer: Service emetteur.
        secret: Cle partagee (donnee sensible).
        type: Mode OTP.
        algorithm: Hachage HMAC.
        digits: Longueur du code.
        period: Intervalle de rotation en secondes.
    """

    id: str
    name: str
    issuer: str
    secret: str
    type: OtpType = OtpType.TOTP
    algorithm: HashAlgorithm = HashAlgorithm.SHA1
    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_PERIOD

    def __post_init__(self) -> None:
        """Valide l'identifiant et le secret."""
        if not self.id or not self.id.strip():
            raise ValueError(
                "Le champ 'id' ne peut pas etre vide."
            )
        _require_secret(self.secret)

    @property
    def draft(self) -> CredentialDraft:
        """Retourne le compte sans son identifiant.

        Returns:
            Instance de CredentialDraft.
        """
        data = asdict(self)
        del data["id"]
        return CredentialDraft(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise le compte pour l'enregistrement persiste.

        Returns:
            Dictionnaire aux valeurs JSON natives.
        """
        return {
            "id": self.id,
            "name": self.name,
            "issuer": self.issuer,
            "secret": self.secret,
            "type": str(self.type),
            "algorithm": str(self.algorithm),
            "digits": self.digits,
            "period": self.period,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Credential":
        """Reconstruit un compte depuis l'enregistrement persiste.

        Les champs algorithm, digits et period sont optionnels
        (enregistrements anterieurs) et prennent leur valeur par
        defaut. Les cles inconnues sont ignorees.

        Args:
            data: Dictionnaire lu depuis le stockage.

        Returns:
            Instance de Credential.

        Raises:
            KeyError: si un champ obligatoire est absent.
            ValueError: si data n'est pas un dict ou si une valeur
                est invalide (y compris un champ texte non chaine).
        """
        if not isinstance(data, dict):
            raise ValueError(
                f"Un compte doit etre un objet, recu : "
                f"{type(data).__name__}"
            )
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        for text_field in ("id", "name", "issuer", "secret"):
            if text_field in values and not isinstance(
                values[text_field], str
            ):
                raise ValueError(
                    f"Le champ {text_field!r} doit etre une chaine"
                )
        values["type"] = OtpType(values.get("type", OtpType.TOTP))
        values["algorithm"] = HashAlgorithm(
            str(values.get("algorithm", HashAlgorithm.SHA1)).upper()
        )
        values["digits"] = int(values.get("digits", DEFAULT_DIGITS))
        values["period"] = int(values.get("period", DEFAULT_PERIOD))
        for required in ("id", "name", "issuer", "secret"):
            if required not in values:
                raise KeyError(required)
        return cls(**values)


def _require_secret(secret: str) -> None:
    if not secret or not secret.strip():
        raise ValueError(
            "Le champ 'secret' ne peut pas etre vide."
        )
