"""
Use Case: Audit Trail

Registro append-only de ações. Fire-and-forget para quem chama:
uma falha do log nunca bloqueia assinatura, compartilhamento ou rejeição.
"""

import logging
from datetime import datetime
from typing import Callable

from docsign.core.entities.audit_event import AuditEvent
from docsign.core.interfaces.audit_log import IAuditLog

logger = logging.getLogger(__name__)


class AuditTrail:
    """
    Use Case: grava e lista eventos de auditoria.

    O relógio é injetado para testes determinísticos.
    """

    def __init__(self, audit_log: IAuditLog, clock: Callable[[], datetime] = datetime.utcnow):
        self._log = audit_log
        self._clock = clock

    def record(self, action: str, document_id: str, actor_id: str | None, detail: str = "") -> bool:
        """Grava um evento. Retorna False (e loga) se o storage falhar."""
        event = AuditEvent(
            document_id=document_id,
            action=action,
            actor_id=actor_id,
            detail=detail,
            timestamp=self._clock(),
        )
        try:
            self._log.append(event)
            return True
        except Exception as e:
            logger.error(f"Audit Log Error ({action} on {document_id}): {e}")
            return False

    def list(self, document_id: str, offset: int = 0, limit: int | None = None) -> list[AuditEvent]:
        """Eventos em ordem ascendente de timestamp."""
        return self._log.list(document_id, offset=offset, limit=limit)
