"""Journal d'audit structure des operations du coffre.

Ce module trace les evenements sensibles (ajout ou suppression d'un
compte, doublon refuse, echec de stockage, secret inutilisable) en
JSON structure via le Logger injecte.

Les evenements ne transportent jamais le secret partage : seuls
l'identifiant, l'emetteur et le nom du compte sont journalises.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from otp_vault.logging.base import Logger


class VaultEventType(StrEnum):
    """Types d'evenements d'audit du coffre."""

    CREDENTIAL_ADDED = "credential.added"
    CREDENTIAL_DUPLICATE = "credential.duplicate"
    CREDENTIAL_REMOVED = "credential.removed"
    STORAGE_FAILURE = "storage.failure"
    SECRET_INVALID = "secret.invalid"


@dataclass(frozen=True)
class VaultEvent:
    """Evenement d'audit structure.

    Attributes:
        event_type: Type d'evenement (VaultEventType).
        credential_id: Identifiant du compte concerne.
        details: Contexte additionnel (issuer, name, source...).
        severity: Niveau de severite (info, warning, error).
        timestamp: Horodatage ISO 8601 UTC (auto-genere).
    """

    event_type: VaultEventType
    credential_id: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    severity: str = "info"
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )


class SecurityLogger:
    """Logger specialise pour l'audit du coffre.

    Utilisation :
        audit = SecurityLogger(file_logger)
        audit.log_event(VaultEvent(
            event_type=VaultEventType.CREDENTIAL_ADDED,
            credential_id=credential.id,
            details={"issuer": credential.issuer},
        ))
    """

    def __init__(self, logger: Logger) -> None:
        """Initialise le logger d'audit.

        Args:
            logger: Instance de Logger pour l'emission des messages.
        """
        self._logger = logger

    def log_event(self, event: VaultEvent) -> None:
        """Enregistre un evenement en JSON structure.

        Args:
            event: Evenement d'audit a journaliser.
        """
        payload: dict[str, Any] = {
            "vault_event": str(event.event_type),
            "timestamp": event.timestamp,
            "severity": event.severity,
            "details": event.details,
        }
        if event.credential_id is not None:
            payload["credential_id"] = event.credential_id

        message = json.dumps(payload, ensure_ascii=False, default=str)

        if event.severity in ("error", "critical"):
            self._logger.log_error(message)
        elif event.severity == "warning":
            self._logger.log_warning(message)
        else:
            self._logger.log_info(message)
