"""Exceptions du moteur TOTP.

Elles sont levees a la generation, compte par compte : l'echec
d'un compte ne doit pas empecher l'affichage des autres.
"""

from otp_vault.errors.exceptions import ApplicationError


class GenerationError(ApplicationError):
    """Exception de base : le code ne peut pas etre calcule."""


class InvalidSecretError(GenerationError):
    """Levee quand le secret n'est pas un base32 decodable."""


class UnsupportedAlgorithmError(GenerationError):
    """Levee quand l'algorithme HMAC demande est inconnu."""
