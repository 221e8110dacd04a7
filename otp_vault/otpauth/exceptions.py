"""Exceptions du parseur d'URI otpauth.

Toutes sont detectees de facon synchrone et recuperables :
l'appelant redemande un scan sans interrompre la session.
"""

from otp_vault.errors.exceptions import ValidationError


class ParseError(ValidationError):
    """Exception de base pour les URI otpauth refusees."""


class UnsupportedSchemeError(ParseError):
    """Levee quand le texte ne commence pas par otpauth://."""


class MissingSecretError(ParseError):
    """Levee quand le parametre secret est absent ou vide."""


class MalformedUriError(ParseError):
    """Levee quand l'URI otpauth est structurellement invalide."""
