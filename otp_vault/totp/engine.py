"""Moteur TOTP (RFC 6238) construit sur HOTP (RFC 4226).

Toutes les fonctions de ce module sont pures : meme entree, meme
sortie, aucun etat partage, aucune E/S. Elles peuvent etre appelees
en parallele sans coordination.

Etapes du calcul :
    1. T = floor(now / period)
    2. cle = base32-decode(secret)
    3. digest = HMAC(cle, T sur 8 octets big-endian)
    4. troncature dynamique -> entier 31 bits
    5. code = entier mod 10^digits, complete de zeros a gauche
"""

import base64
import hashlib
import hmac
import struct
from typing import Optional, Union

from otp_vault.otpauth.models import (
    DEFAULT_DIGITS,
    DEFAULT_PERIOD,
    Credential,
    HashAlgorithm,
    OtpType,
)
from otp_vault.totp.clock import Clock, SystemClock
from otp_vault.totp.exceptions import (
    GenerationError,
    InvalidSecretError,
    UnsupportedAlgorithmError,
)

MAX_DIGITS = 10

_HASHES = {
    HashAlgorithm.SHA1: hashlib.sha1,
    HashAlgorithm.SHA256: hashlib.sha256,
    HashAlgorithm.SHA512: hashlib.sha512,
}


def decode_secret(secret: str) -> bytes:
    """Decode un secret base32 en octets bruts.

    Le decodage est insensible a la casse, ignore les espaces et
    tolere l'absence (ou l'exces) de padding '='.

    Args:
        secret: Secret base32 tel que stocke.

    Returns:
        Cle HMAC brute.

    Raises:
        InvalidSecretError: si le texte n'est pas du base32 valide.
    """
    cleaned = secret.replace(" ", "").rstrip("=").upper()
    if not cleaned:
        raise InvalidSecretError("Secret vide")
    cleaned += "=" * (-len(cleaned) % 8)
    try:
        return base64.b32decode(cleaned)
    except ValueError as exc:
        raise InvalidSecretError("Secret base32 invalide") from exc


def dynamic_truncate(digest: bytes) -> int:
    """Applique la troncature dynamique de la RFC 4226.

    Args:
        digest: Sortie HMAC (20, 32 ou 64 octets).

    Returns:
        Entier non signe sur 31 bits.
    """
    offset = digest[-1] & 0x0F
    return struct.unpack(">I", digest[offset:offset + 4])[0] & 0x7FFFFFFF


def hotp(
    key: bytes,
    counter: int,
    algorithm: Union[HashAlgorithm, str] = HashAlgorithm.SHA1,
    digits: int = DEFAULT_DIGITS,
) -> str:
    """Calcule un code HOTP (RFC 4226) pour un compteur donne.

    Args:
        key: Cle brute (secret decode).
        counter: Compteur non negatif.
        algorithm: Hachage HMAC.
        digits: Longueur du code (1 a 10).

    Returns:
        Code numerique de exactement digits caracteres.

    Raises:
        UnsupportedAlgorithmError: si l'algorithme est inconnu.
        GenerationError: si digits ou counter est hors limites.
    """
    if not 1 <= digits <= MAX_DIGITS:
        raise GenerationError(
            f"Nombre de chiffres hors limites (1-{MAX_DIGITS}) : {digits}"
        )
    if counter < 0:
        raise GenerationError(f"Compteur negatif : {counter}")
    digest = hmac.new(
        key, struct.pack(">Q", counter), _hash_for(algorithm)
    ).digest()
    code = dynamic_truncate(digest) % (10 ** digits)
    return str(code).zfill(digits)


def current_code(
    secret: str,
    algorithm: Union[HashAlgorithm, str] = HashAlgorithm.SHA1,
    digits: int = DEFAULT_DIGITS,
    period: int = DEFAULT_PERIOD,
    now: int = 0,
) -> str:
    """Calcule le code TOTP valide a l'instant now.

    Args:
        secret: Secret base32.
        algorithm: Hachage HMAC.
        digits: Longueur du code.
        period: Intervalle de rotation en secondes.
        now: Secondes Unix entieres.

    Returns:
        Code numerique de exactement digits caracteres.

    Raises:
        InvalidSecretError: si le secret est inutilisable.
        UnsupportedAlgorithmError: si l'algorithme est inconnu.
        GenerationError: si un parametre est hors limites.
    """
    counter = int(now) // _check_period(period)
    return hotp(decode_secret(secret), counter, algorithm, digits)


def seconds_remaining(period: int = DEFAULT_PERIOD, now: int = 0) -> int:
    """Secondes restantes avant la prochaine rotation.

    Un passage de frontiere (reste nul) est rapporte comme period :
    le compteur vient de changer et le code suivant est deja valide.

    Args:
        period: Intervalle de rotation en secondes.
        now: Secondes Unix entieres.

    Returns:
        Entier dans [1, period].
    """
    period = _check_period(period)
    return period - (int(now) % period)


def verify_code(
    secret: str,
    code: str,
    now: int,
    algorithm: Union[HashAlgorithm, str] = HashAlgorithm.SHA1,
    digits: int = DEFAULT_DIGITS,
    period: int = DEFAULT_PERIOD,
    window: int = 1,
) -> bool:
    """Verifie un code saisi en tolerant un decalage d'horloge.

    Les compteurs T-window a T+window sont tous calcules et compares
    en temps constant (hmac.compare_digest).

    Args:
        secret: Secret base32.
        code: Code saisi par l'utilisateur.
        now: Secondes Unix entieres.
        algorithm: Hachage HMAC.
        digits: Longueur attendue du code.
        period: Intervalle de rotation en secondes.
        window: Nombre de pas toleres de part et d'autre.

    Returns:
        True si le code correspond a l'un des pas de la fenetre.

    Raises:
        InvalidSecretError: si le secret est inutilisable.
    """
    if len(code) != digits or not (code.isascii() and code.isdigit()):
        return False
    key = decode_secret(secret)
    counter = int(now) // _check_period(period)
    matched = False
    for step in range(max(0, counter - window), counter + window + 1):
        expected = hotp(key, step, algorithm, digits)
        if hmac.compare_digest(expected, code):
            matched = True
    return matched


class TotpEngine:
    """Calcule les codes des comptes stockes a partir d'une horloge.

    Attributes:
        _clock: Source de temps injectee.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        """Initialise le moteur.

        Args:
            clock: Horloge injectable (defaut: SystemClock).
        """
        self._clock = clock or SystemClock()

    def now(self) -> int:
        """Instant courant selon l'horloge injectee."""
        return self._clock.now()

    def code(
        self, credential: Credential, now: Optional[int] = None
    ) -> str:
        """Code courant d'un compte.

        Args:
            credential: Compte stocke.
            now: Instant explicite (defaut: horloge injectee).

        Returns:
            Code numerique.

        Raises:
            GenerationError: si le compte n'est pas un compte TOTP
                ou si le code ne peut pas etre calcule.
        """
        if credential.type != OtpType.TOTP:
            raise GenerationError(
                f"Mode OTP non supporte : {credential.type}"
            )
        return current_code(
            credential.secret,
            credential.algorithm,
            credential.digits,
            credential.period,
            self.now() if now is None else now,
        )

    def seconds_remaining(
        self, credential: Credential, now: Optional[int] = None
    ) -> int:
        """Secondes restantes avant rotation du code d'un compte."""
        return seconds_remaining(
            credential.period, self.now() if now is None else now
        )


def _hash_for(algorithm: Union[HashAlgorithm, str]):
    try:
        return _HASHES[HashAlgorithm(str(algorithm).upper())]
    except (ValueError, KeyError) as exc:
        raise UnsupportedAlgorithmError(
            f"Algorithme HMAC non supporte : {algorithm!r}"
        ) from exc


def _check_period(period: int) -> int:
    if period <= 0:
        raise GenerationError(f"Periode invalide : {period}")
    return int(period)
