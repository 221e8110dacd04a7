"""Sources de temps injectables pour le moteur TOTP.

Le moteur ne lit jamais l'horloge murale directement : il recoit
un Clock, ce qui permet des tests deterministes (vecteurs RFC 6238)
sans attendre le temps reel.
"""

import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Interface d'une source de temps en secondes Unix entieres."""

    @abstractmethod
    def now(self) -> int:
        """Retourne le nombre de secondes ecoulees depuis l'epoch.

        Returns:
            Secondes entieres depuis le 1970-01-01 UTC.
        """
        pass  # pragma: no cover


class SystemClock(Clock):
    """Horloge murale du systeme."""

    def now(self) -> int:
        return int(time.time())


class FixedClock(Clock):
    """Horloge figee, deplacable manuellement (tests, rejeu).

    Attributes:
        _now: Instant courant en secondes Unix.
    """

    def __init__(self, now: int = 0) -> None:
        """Initialise l'horloge a un instant donne.

        Args:
            now: Instant initial en secondes Unix.
        """
        self._now = int(now)

    def now(self) -> int:
        return self._now

    def set(self, now: int) -> None:
        """Place l'horloge a un instant absolu."""
        self._now = int(now)

    def advance(self, seconds: int = 1) -> None:
        """Avance l'horloge du nombre de secondes indique."""
        self._now += int(seconds)
