"""Parseur et generateur d'URI otpauth://.

Format accepte (Key Uri Format de Google Authenticator) :

    otpauth://totp/<issuer>:<account>?secret=<base32>&issuer=<issuer>

Le secret n'est pas valide ici : un secret base32 invalide est
detecte a la generation du code (InvalidSecretError).
"""

from typing import Dict, List
from urllib.parse import parse_qs, quote, unquote, urlencode, urlsplit

from otp_vault.otpauth.exceptions import (
    MalformedUriError,
    MissingSecretError,
    UnsupportedSchemeError,
)
from otp_vault.otpauth.models import (
    DEFAULT_ISSUER,
    DEFAULT_NAME,
    CredentialDraft,
    OtpType,
)

SCHEME_PREFIX = "otpauth://"


def parse_uri(uri: str) -> CredentialDraft:
    """Analyse une URI otpauth:// en compte non persiste.

    Args:
        uri: Texte decode depuis le QR code.

    Returns:
        Instance de CredentialDraft (algorithme, chiffres et periode
        aux valeurs par defaut).

    Raises:
        UnsupportedSchemeError: si uri ne commence pas par otpauth://.
        MalformedUriError: si la structure de l'URI est invalide ou
            si le type OTP n'est pas totp.
        MissingSecretError: si le parametre secret est absent ou vide.
    """
    if not uri.startswith(SCHEME_PREFIX):
        raise UnsupportedSchemeError(
            "Le texte scanne n'est pas une URI otpauth://"
        )

    try:
        parts = urlsplit(uri)
    except ValueError as exc:
        raise MalformedUriError(f"URI otpauth illisible : {exc}") from exc

    otp_type = parts.netloc.lower()
    if not otp_type:
        raise MalformedUriError("Type OTP absent de l'URI")
    if otp_type == OtpType.HOTP:
        raise MalformedUriError(
            "Le mode hotp (compteur) n'est pas supporte"
        )
    if otp_type != OtpType.TOTP:
        raise MalformedUriError(f"Type OTP inconnu : {otp_type!r}")

    query = _parse_query(parts.query)

    secret = _first(query, "secret")
    if not secret or not secret.strip():
        raise MissingSecretError("Aucun secret dans l'URI otpauth")

    issuer = _first(query, "issuer") or DEFAULT_ISSUER
    name = _name_from_label(unquote(parts.path.lstrip("/")))

    return CredentialDraft(
        name=name or DEFAULT_NAME,
        issuer=issuer,
        secret=secret,
        type=OtpType.TOTP,
    )


def build_uri(draft: CredentialDraft) -> str:
    """Genere l'URI otpauth:// d'un compte (export, sauvegarde).

    Args:
        draft: Compte a exporter (un Credential convient aussi via
            sa propriete draft).

    Returns:
        URI otpauth://totp/ avec libelle "issuer:name" encode.
    """
    label = quote(f"{draft.issuer}:{draft.name}", safe="@")
    params = urlencode(
        {
            "secret": draft.secret,
            "issuer": draft.issuer,
            "algorithm": str(draft.algorithm),
            "digits": draft.digits,
            "period": draft.period,
        },
        quote_via=quote,
    )
    return f"{SCHEME_PREFIX}{draft.type}/{label}?{params}"


def _parse_query(query: str) -> Dict[str, List[str]]:
    try:
        return parse_qs(query, keep_blank_values=True)
    except ValueError as exc:
        raise MalformedUriError(
            f"Parametres de l'URI otpauth illisibles : {exc}"
        ) from exc


def _first(query: Dict[str, List[str]], key: str) -> str:
    values = query.get(key)
    return values[0] if values else ""


def _name_from_label(label: str) -> str:
    # "Issuer:account" -> "account" ; le prefixe est informatif
    prefix, sep, account = label.partition(":")
    if sep:
        return account.lstrip()
    return prefix
