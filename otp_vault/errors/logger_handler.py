"""
    LoggerErrorHandler
"""
from otp_vault.errors.base import ErrorHandler
from otp_vault.errors.exceptions import ApplicationError
from otp_vault.logging.base import Logger


class LoggerErrorHandler(ErrorHandler):
    """Handler qui journalise les erreurs via le Logger injecte.

    Les erreurs connues (ApplicationError) sont ecrites avec leur
    type ; les autres sont signalees comme inattendues.
    """

    def __init__(self, logger: Logger) -> None:
        """Initialise le handler avec un logger.

        Args:
            logger: Instance de Logger pour l'enregistrement des erreurs.
        """
        self.logger = logger

    def handle(self, error: Exception) -> None:
        """Log l'erreur selon qu'elle est connue ou non.

        Args:
            error: L'exception a logger.
        """
        if isinstance(error, ApplicationError):
            self.logger.log_error(f"{type(error).__name__}: {error}")
        else:
            self.logger.log_error(
                f"Erreur inattendue: {type(error).__name__}: {error}"
            )
