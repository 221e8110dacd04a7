"""Parseur d'URI otpauth:// et modeles de comptes OTP.

Exemple d'utilisation :

    from otp_vault.otpauth import parse_uri

    draft = parse_uri(
        "otpauth://totp/ACME:alice@example.com"
        "?secret=JBSWY3DPEHPK3PXP&issuer=ACME"
    )
    draft.name    # "alice@example.com"
    draft.issuer  # "ACME"
"""

from otp_vault.otpauth.exceptions import (
    MalformedUriError,
    MissingSecretError,
    ParseError,
    UnsupportedSchemeError,
)
from otp_vault.otpauth.models import (
    DEFAULT_DIGITS,
    DEFAULT_ISSUER,
    DEFAULT_NAME,
    DEFAULT_PERIOD,
    Credential,
    CredentialDraft,
    HashAlgorithm,
    OtpType,
)
from otp_vault.otpauth.parser import build_uri, parse_uri

__all__ = [
    # Modeles
    "Credential",
    "CredentialDraft",
    "HashAlgorithm",
    "OtpType",
    "DEFAULT_DIGITS",
    "DEFAULT_ISSUER",
    "DEFAULT_NAME",
    "DEFAULT_PERIOD",
    # Exceptions
    "ParseError",
    "UnsupportedSchemeError",
    "MissingSecretError",
    "MalformedUriError",
    # Parseur
    "parse_uri",
    "build_uri",
]
