"""Tableau des codes courants, interroge chaque seconde par l'UI.

Le collaborateur d'affichage appelle CodeBoard.snapshot() depuis son
propre minuteur ; le coeur ne conserve aucun etat de minuterie et
arreter l'affichage revient simplement a ne plus appeler snapshot().
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from otp_vault.errors.base import ErrorHandler
from otp_vault.logging.base import Logger
from otp_vault.logging.security_logger import (
    SecurityLogger,
    VaultEvent,
    VaultEventType,
)
from otp_vault.otpauth.models import Credential
from otp_vault.totp.engine import TotpEngine
from otp_vault.totp.exceptions import GenerationError, InvalidSecretError


@dataclass(frozen=True)
class CodeView:
    """Code calcule pour un compte (ephemere, jamais persiste).

    Attributes:
        credential_id: Identifiant du compte.
        issuer: Service emetteur.
        name: Libelle du compte.
        code: Code courant, None si la generation a echoue.
        seconds_remaining: Secondes avant rotation (0 en cas d'erreur).
        period: Intervalle de rotation du compte.
        error: Message d'erreur lisible, None si le code est valide.
    """

    credential_id: str
    issuer: str
    name: str
    code: Optional[str]
    seconds_remaining: int
    period: int
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True si le code a pu etre calcule."""
        return self.error is None


class CodeBoard:
    """Calcule un CodeView par compte avec isolation des erreurs.

    Un secret inutilisable produit une vue en erreur pour ce compte
    uniquement ; les autres comptes affichent leur code normalement.
    Aucune vue n'affiche de code de substitution (jamais "000000").

    Attributes:
        _engine: Moteur TOTP (porte l'horloge).
        _error_handler: Handler optionnel des erreurs de generation.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        engine: Optional[TotpEngine] = None,
        error_handler: Optional[ErrorHandler] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialise le tableau.

        Args:
            engine: Moteur TOTP (defaut: horloge systeme).
            error_handler: Recoit chaque GenerationError recuperee.
            logger: Logger optionnel (injection de dependance).
        """
        self._engine = engine or TotpEngine()
        self._error_handler = error_handler
        self._logger = logger

    def snapshot(
        self, credentials: Iterable[Credential]
    ) -> List[CodeView]:
        """Calcule les codes de tous les comptes au meme instant.

        L'horloge est lue une seule fois : toutes les vues d'un meme
        snapshot correspondent au meme instant.

        Args:
            credentials: Comptes a afficher, dans l'ordre voulu.

        Returns:
            Une vue par compte, dans le meme ordre.
        """
        now = self._engine.now()
        return [self._view(c, now) for c in credentials]

    def _view(self, credential: Credential, now: int) -> CodeView:
        try:
            code = self._engine.code(credential, now)
            remaining = self._engine.seconds_remaining(credential, now)
        except GenerationError as exc:
            self._report(credential, exc)
            return CodeView(
                credential_id=credential.id,
                issuer=credential.issuer,
                name=credential.name,
                code=None,
                seconds_remaining=0,
                period=credential.period,
                error=str(exc),
            )
        return CodeView(
            credential_id=credential.id,
            issuer=credential.issuer,
            name=credential.name,
            code=code,
            seconds_remaining=remaining,
            period=credential.period,
        )

    def _report(self, credential: Credential, exc: GenerationError) -> None:
        if self._logger:
            if isinstance(exc, InvalidSecretError):
                SecurityLogger(self._logger).log_event(
                    VaultEvent(
                        event_type=VaultEventType.SECRET_INVALID,
                        credential_id=credential.id,
                        details={
                            "issuer": credential.issuer,
                            "name": credential.name,
                            "error": str(exc),
                        },
                        severity="warning",
                    )
                )
            else:
                self._logger.log_warning(
                    f"Code indisponible pour le compte "
                    f"{credential.id!r} ({credential.issuer}) : {exc}"
                )
        if self._error_handler:
            self._error_handler.handle(exc)
