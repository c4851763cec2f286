"""
Use Case: Reset Signatures

Desfaz a finalização: descarta o artefato assinado e volta o
documento para PENDING. Em documento já PENDING é um no-op
(exceto pelo evento de auditoria).
"""

import logging

from docsign.core.entities.actor import Actor
from docsign.core.entities.audit_event import AuditAction
from docsign.core.entities.document import Document, DocStatus
from docsign.core.interfaces.document_repository import IDocumentRepository
from docsign.core.interfaces.storage_service import IBlobStore
from docsign.core.use_cases.access import load_document, release_blob, require_owner
from docsign.core.use_cases.audit_trail import AuditTrail

logger = logging.getLogger(__name__)


class ResetSignaturesUseCase:
    """Use Case: somente o dono pode limpar as assinaturas."""

    def __init__(self, documents: IDocumentRepository, blobs: IBlobStore, audit: AuditTrail):
        self._documents = documents
        self._blobs = blobs
        self._audit = audit

    def execute(self, document_id: str, actor: Actor) -> Document:
        doc = load_document(self._documents, document_id)
        require_owner(doc, actor)

        stale_blob_id = doc.signed_blob_id
        already_pending = doc.status == DocStatus.PENDING and not doc.signed_url and doc.signature_config is None

        if not already_pending:
            doc.clear_signature()
            doc = self._documents.update(doc)
            # Best-effort, after the record no longer points at it
            release_blob(self._blobs, stale_blob_id, doc.id)
        else:
            logger.info(f"Reset on document {doc.id} which is already Pending")

        self._audit.record(AuditAction.RESET, doc.id, actor.actor_id, "Signatures cleared by owner.")
        return doc
