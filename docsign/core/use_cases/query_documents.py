"""
Use Case: Query Documents

Leituras: documentos do usuário, documentos compartilhados com ele,
um documento específico e o trail de auditoria (somente dono).
"""

from docsign.core.entities.actor import Actor
from docsign.core.entities.audit_event import AuditEvent
from docsign.core.entities.document import Document
from docsign.core.interfaces.document_repository import IDocumentRepository
from docsign.core.use_cases.access import load_document, require_owner, require_viewer
from docsign.core.use_cases.audit_trail import AuditTrail


class QueryDocumentsUseCase:
    def __init__(self, documents: IDocumentRepository, audit: AuditTrail):
        self._documents = documents
        self._audit = audit

    def list_owned(self, actor: Actor) -> list[Document]:
        return self._documents.list_by_owner(actor.actor_id)

    def list_shared_with(self, actor: Actor) -> list[Document]:
        if not actor.email:
            return []
        return self._documents.list_shared_with(actor.email)

    def get(self, document_id: str, actor: Actor) -> Document:
        doc = load_document(self._documents, document_id)
        require_viewer(doc, actor)
        return doc

    def audit(self, document_id: str, actor: Actor, offset: int = 0, limit: int | None = None) -> list[AuditEvent]:
        doc = load_document(self._documents, document_id)
        require_owner(doc, actor)
        return self._audit.list(doc.id, offset=offset, limit=limit)
