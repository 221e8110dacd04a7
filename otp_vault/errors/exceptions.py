"""
Hierarchie d'exceptions commune a otp_vault.

Toutes les erreurs metier heritent de ApplicationError afin de
pouvoir etre traitees par la chaine d'error handlers
(LoggerErrorHandler) sans distinction de module.
"""


class ApplicationError(Exception):
    """Exception de base pour toutes les erreurs du coffre OTP."""
    pass


class ConfigurationError(ApplicationError):
    """Levee quand la configuration est absente ou invalide."""
    pass


class FileConfigurationError(ConfigurationError):
    """Levee quand le fichier de configuration est illisible."""
    pass


class ValidationError(ApplicationError):
    """Exception de base pour toutes les validations d'entree."""
    pass
