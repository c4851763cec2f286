"""
Use Case: Guest Access

Acesso público via share token: resolver o documento e assinar como
convidado. A assinatura reutiliza o FinalizeDocumentUseCase com um
ator guest, caso degenerado de uma anotação só.
"""

import logging
from dataclasses import dataclass, field

from docsign.core.entities.actor import Actor
from docsign.core.entities.annotation import Annotation, AnnotationKind
from docsign.core.entities.document import PublicDocumentView
from docsign.core.errors import Unauthorized
from docsign.core.interfaces.annotation_renderer import RenderedMark, SkippedAnnotation
from docsign.core.interfaces.document_repository import IDocumentRepository
from docsign.core.interfaces.token_codec import ITokenCodec, ShareClaims
from docsign.core.use_cases.access import load_document
from docsign.core.use_cases.finalize_document import FinalizeDocumentUseCase

logger = logging.getLogger(__name__)


@dataclass
class GuestSignOutcome:
    """Resultado visto pelo convidado: só a visão pública do documento."""
    view: PublicDocumentView
    marks: list[RenderedMark] = field(default_factory=list)
    skipped: list[SkippedAnnotation] = field(default_factory=list)


class GuestAccessUseCase:
    """Use Case: resolve(token) e sign(token, annotation)."""

    def __init__(
        self,
        documents: IDocumentRepository,
        tokens: ITokenCodec,
        finalize: FinalizeDocumentUseCase,
    ):
        self._documents = documents
        self._tokens = tokens
        self._finalize = finalize

    def _claims(self, token: str) -> ShareClaims:
        # InvalidToken propaga: nenhuma leitura ou escrita acontece antes disso
        return self._tokens.verify(token)

    def resolve(self, token: str) -> PublicDocumentView:
        claims = self._claims(token)
        doc = load_document(self._documents, claims.document_id)
        if doc.grant_for(claims.email) is None:
            raise Unauthorized("Share is no longer valid for this recipient")
        return PublicDocumentView.from_document(doc, claims.email)

    def sign(
        self,
        token: str,
        annotation: Annotation,
        legacy_position: dict | None = None,
        origin: str | None = None,
    ) -> GuestSignOutcome:
        claims = self._claims(token)
        if annotation.kind == AnnotationKind.TEXT and not annotation.content:
            annotation = Annotation(
                kind=AnnotationKind.TEXT,
                content=f"Signed by Guest ({claims.email})",
                x=annotation.x,
                y=annotation.y,
                page=annotation.page,
            )
        outcome = self._finalize.execute(
            claims.document_id,
            Actor.guest(claims.email),
            [annotation],
            legacy_position=legacy_position,
            origin=origin,
        )
        return GuestSignOutcome(
            view=PublicDocumentView.from_document(outcome.document, claims.email),
            marks=outcome.marks,
            skipped=outcome.skipped,
        )
