"""
Use Case: Reject Document

PENDING → REJECTED, somente pelo dono, com motivo opcional.
"""

from docsign.core.entities.actor import Actor
from docsign.core.entities.audit_event import AuditAction
from docsign.core.entities.document import Document
from docsign.core.interfaces.document_repository import IDocumentRepository
from docsign.core.use_cases.access import load_document, require_owner
from docsign.core.use_cases.audit_trail import AuditTrail


class RejectDocumentUseCase:
    def __init__(self, documents: IDocumentRepository, audit: AuditTrail):
        self._documents = documents
        self._audit = audit

    def execute(self, document_id: str, actor: Actor, reason: str | None = None,
                origin: str | None = None) -> Document:
        doc = load_document(self._documents, document_id)
        require_owner(doc, actor)

        doc.mark_rejected()
        doc = self._documents.update(doc)

        reason = (reason or "").strip()
        detail = f"Rejected by owner. Reason: {reason}" if reason else f"Rejected by owner. IP: {origin or 'unknown'}"
        self._audit.record(AuditAction.REJECTED, doc.id, actor.actor_id, detail)
        return doc
