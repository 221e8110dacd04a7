"""Moteur TOTP : calcul des codes et du temps restant.

Exemple d'utilisation :

    from otp_vault.totp import current_code, seconds_remaining

    code = current_code("JBSWY3DPEHPK3PXP", now=1700000000)
    left = seconds_remaining(30, now=1700000000)
"""

from otp_vault.totp.board import CodeBoard, CodeView
from otp_vault.totp.clock import Clock, FixedClock, SystemClock
from otp_vault.totp.engine import (
    TotpEngine,
    current_code,
    decode_secret,
    dynamic_truncate,
    hotp,
    seconds_remaining,
    verify_code,
)
from otp_vault.totp.exceptions import (
    GenerationError,
    InvalidSecretError,
    UnsupportedAlgorithmError,
)

__all__ = [
    # Horloges
    "Clock",
    "SystemClock",
    "FixedClock",
    # Fonctions pures
    "current_code",
    "seconds_remaining",
    "verify_code",
    "decode_secret",
    "dynamic_truncate",
    "hotp",
    # Moteur et tableau
    "TotpEngine",
    "CodeBoard",
    "CodeView",
    # Exceptions
    "GenerationError",
    "InvalidSecretError",
    "UnsupportedAlgorithmError",
]
