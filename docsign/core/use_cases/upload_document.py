"""
Use Case: Upload Document

Recebe um PDF → grava no blob store → cria o documento (PENDING) → auditoria.
"""

import logging
import uuid
from datetime import datetime
from typing import Callable

from docsign.core.entities.actor import Actor
from docsign.core.entities.audit_event import AuditAction
from docsign.core.entities.document import Document
from docsign.core.errors import SourceFetchFailed, Unauthorized, ValidationFailed
from docsign.core.interfaces.annotation_renderer import IAnnotationRenderer
from docsign.core.interfaces.document_repository import IDocumentRepository
from docsign.core.interfaces.storage_service import IBlobStore
from docsign.core.use_cases.access import release_blob
from docsign.core.use_cases.audit_trail import AuditTrail

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF-"


class UploadDocumentUseCase:
    def __init__(
        self,
        documents: IDocumentRepository,
        blobs: IBlobStore,
        renderer: IAnnotationRenderer,
        audit: AuditTrail,
        upload_folder: str = "docsign_uploads",
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self._documents = documents
        self._blobs = blobs
        self._renderer = renderer
        self._audit = audit
        self._upload_folder = upload_folder
        self._clock = clock

    def execute(self, actor: Actor, file_name: str, data: bytes, origin: str | None = None) -> Document:
        if actor.is_guest or not actor.actor_id:
            raise Unauthorized("Only signed-in users can upload")
        if not data:
            raise ValidationFailed("No file uploaded")
        # Leading bytes before the header are tolerated by readers, up to 1 KiB
        if PDF_MAGIC not in data[:1024]:
            raise ValidationFailed("File must be a PDF")
        try:
            pages = self._renderer.count_pages(data)
        except SourceFetchFailed as e:
            raise ValidationFailed("File is not a readable PDF") from e
        if pages == 0:
            raise ValidationFailed("PDF has no pages")

        stored = self._blobs.put(data, folder=self._upload_folder, filename=file_name or "document.pdf")

        now = self._clock()
        doc = Document(
            id=str(uuid.uuid4()),
            file_name=file_name or "document.pdf",
            owner_id=actor.actor_id,
            file_url=stored.url,
            file_blob_id=stored.id,
            created_at=now,
            updated_at=now,
        )
        try:
            doc = self._documents.add(doc)
        except Exception:
            release_blob(self._blobs, stored.id, doc.id)
            raise

        self._audit.record(AuditAction.UPLOADED, doc.id, actor.actor_id, f"Uploaded from {origin or 'unknown'}")
        logger.info(f"Uploaded {doc.file_name} as {doc.id} ({stored.size_bytes} bytes)")
        return doc
