"""
Use Case: Delete Document

Libera os artefatos (original e assinado) e remove o registro.
Os eventos de auditoria permanecem: o trail é append-only.
"""

import logging

from docsign.core.entities.actor import Actor
from docsign.core.entities.audit_event import AuditAction
from docsign.core.interfaces.document_repository import IDocumentRepository
from docsign.core.interfaces.storage_service import IBlobStore
from docsign.core.use_cases.access import load_document, release_blob, require_owner
from docsign.core.use_cases.audit_trail import AuditTrail

logger = logging.getLogger(__name__)


class DeleteDocumentUseCase:
    def __init__(self, documents: IDocumentRepository, blobs: IBlobStore, audit: AuditTrail):
        self._documents = documents
        self._blobs = blobs
        self._audit = audit

    def execute(self, document_id: str, actor: Actor) -> None:
        doc = load_document(self._documents, document_id)
        require_owner(doc, actor)

        released = [
            release_blob(self._blobs, doc.file_blob_id, doc.id),
            release_blob(self._blobs, doc.signed_blob_id, doc.id),
        ]
        self._documents.delete(doc.id)

        detail = "Document removed by owner."
        if not all(released):
            detail += " Some stored artifacts could not be released."
        self._audit.record(AuditAction.DELETED, doc.id, actor.actor_id, detail)
