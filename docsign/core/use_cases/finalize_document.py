"""
Use Case: Finalize Document — fetch → render → store → update → audit.

Um único orquestrador para o dono, para convidados com grant `edit`
e para o fluxo público (guest via share token).
"""

import logging
from dataclasses import dataclass, field

from docsign.core.entities.actor import Actor
from docsign.core.entities.annotation import Annotation
from docsign.core.entities.audit_event import AuditAction
from docsign.core.entities.document import Document, DocStatus
from docsign.core.errors import InvalidStateTransition, SourceFetchFailed, StorageFailure
from docsign.core.interfaces.annotation_renderer import IAnnotationRenderer, RenderedMark, SkippedAnnotation
from docsign.core.interfaces.document_repository import IDocumentRepository
from docsign.core.interfaces.storage_service import IBlobStore
from docsign.core.use_cases.access import load_document, release_blob, require_signer
from docsign.core.use_cases.audit_trail import AuditTrail

logger = logging.getLogger(__name__)


@dataclass
class FinalizeOutcome:
    """Documento atualizado + diagnóstico da renderização."""
    document: Document
    marks: list[RenderedMark] = field(default_factory=list)
    skipped: list[SkippedAnnotation] = field(default_factory=list)


class FinalizeDocumentUseCase:
    """
    Use Case: grava as anotações num novo artefato "assinado".

    Dependency Injection: todas as dependências vêm pelo construtor.

    Sempre parte dos bytes ORIGINAIS: reassinar após um reset nunca
    acumula marcas antigas. O registro do documento só é alterado depois
    que o artefato assinado foi gravado no blob store.
    """

    def __init__(
        self,
        documents: IDocumentRepository,
        blobs: IBlobStore,
        renderer: IAnnotationRenderer,
        audit: AuditTrail,
        signed_folder: str = "docsign_signed",
    ):
        self._documents = documents
        self._blobs = blobs
        self._renderer = renderer
        self._audit = audit
        self._signed_folder = signed_folder

    def execute(
        self,
        document_id: str,
        actor: Actor,
        annotations: list[Annotation],
        legacy_position: dict | None = None,
        origin: str | None = None,
    ) -> FinalizeOutcome:
        """
        Executa a finalização.

        1. Autorização (antes de qualquer I/O)
        2. Busca os bytes originais
        3. Renderiza as anotações
        4. Grava o artefato assinado
        5. Atualiza o documento (status, ponteiro, signature_config)
        6. Auditoria

        Raises:
            NotFound, Unauthorized, InvalidStateTransition,
            SourceFetchFailed, StorageFailure, ConcurrentModification
        """
        doc = load_document(self._documents, document_id)
        require_signer(doc, actor)
        if doc.status != DocStatus.PENDING:
            raise InvalidStateTransition(
                f"Document is {doc.status.value}; reset it before signing again"
            )

        # ── 1. Fetch original ──────────────────────────────
        try:
            source = self._blobs.get(doc.file_url)
        except StorageFailure as e:
            logger.error(f"Could not fetch original of document {doc.id}: {e}")
            raise SourceFetchFailed("Could not retrieve the original PDF") from e

        # ── 2. Render ──────────────────────────────────────
        result = self._renderer.render(source, annotations)

        # ── 3. Store signed artifact ───────────────────────
        stored = self._blobs.put(
            result.pdf_bytes,
            folder=self._signed_folder,
            filename=f"signed-{doc.id}.pdf",
        )

        # ── 4. Update record ───────────────────────────────
        if legacy_position:
            config = dict(legacy_position)
        elif annotations:
            config = annotations[0].to_dict()
        else:
            config = {}
        doc.mark_signed(stored.url, stored.id, config)
        try:
            updated = self._documents.update(doc)
        except Exception:
            release_blob(self._blobs, stored.id, doc.id)
            raise

        # ── 5. Audit ───────────────────────────────────────
        where = origin or "unknown"
        if actor.is_guest:
            self._audit.record(
                AuditAction.SIGNED_PUBLIC, doc.id, None,
                f"Signed by Guest {actor.email}. IP: {where}",
            )
        elif doc.is_owner(actor.actor_id):
            self._audit.record(AuditAction.SIGNED, doc.id, actor.actor_id, f"Signed by owner. IP: {where}")
        else:
            self._audit.record(AuditAction.SIGNED, doc.id, actor.actor_id, f"Signed by {actor.email}. IP: {where}")

        logger.info(
            f"Document {doc.id} signed: {result.applied_count}/{len(annotations)} annotations applied"
        )
        return FinalizeOutcome(document=updated, marks=result.marks, skipped=result.skipped)
