"""
Contract: Audit Log

Armazenamento append-only de eventos de auditoria.
"""

from abc import ABC, abstractmethod

from docsign.core.entities.audit_event import AuditEvent


class IAuditLog(ABC):
    """
    Port: Audit Log

    Só existem append e leitura; não há update nem delete.
    """

    @abstractmethod
    def append(self, event: AuditEvent) -> None:
        """Grava um evento."""
        ...

    @abstractmethod
    def list(self, document_id: str, offset: int = 0, limit: int | None = None) -> list[AuditEvent]:
        """Eventos do documento em ordem ascendente de timestamp."""
        ...
