"""
Pydantic schemas — Response models para a API.
"""

from datetime import datetime

from pydantic import BaseModel

from docsign.core.entities.audit_event import AuditEvent
from docsign.core.entities.document import Document, PublicDocumentView
from docsign.core.use_cases.finalize_document import FinalizeOutcome
from docsign.core.use_cases.guest_access import GuestSignOutcome


class SharingGrantResponse(BaseModel):
    email: str
    permission: str


class DocumentResponse(BaseModel):
    id: str
    file_name: str
    file_url: str
    signed_url: str | None = None
    status: str
    owner_id: str
    shared_with: list[SharingGrantResponse] = []
    signature_config: dict | None = None
    version: int = 1
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, doc: Document) -> "DocumentResponse":
        return cls(
            id=doc.id,
            file_name=doc.file_name,
            file_url=doc.file_url,
            signed_url=doc.signed_url,
            status=doc.status.value,
            owner_id=doc.owner_id,
            shared_with=[
                SharingGrantResponse(email=g.email, permission=g.permission.value) for g in doc.shared_with
            ],
            signature_config=doc.signature_config,
            version=doc.version,
            created_at=doc.created_at,
            updated_at=doc.updated_at,
        )


class SkippedAnnotationResponse(BaseModel):
    index: int
    reason: str


class SignResponse(DocumentResponse):
    annotations_applied: int = 0
    annotations_skipped: list[SkippedAnnotationResponse] = []

    @classmethod
    def from_outcome(cls, outcome: FinalizeOutcome) -> "SignResponse":
        return cls(
            **DocumentResponse.from_entity(outcome.document).model_dump(),
            annotations_applied=len({m.annotation_index for m in outcome.marks}),
            annotations_skipped=[
                SkippedAnnotationResponse(index=s.index, reason=s.reason) for s in outcome.skipped
            ],
        )


class PublicDocumentResponse(BaseModel):
    id: str
    file_name: str
    file_url: str
    signed_url: str | None = None
    status: str
    signature_config: dict | None = None
    permission: str | None = None
    created_at: datetime

    @classmethod
    def from_view(cls, view: PublicDocumentView) -> "PublicDocumentResponse":
        return cls(
            id=view.id,
            file_name=view.file_name,
            file_url=view.file_url,
            signed_url=view.signed_url,
            status=view.status.value,
            signature_config=view.signature_config,
            permission=view.permission.value if view.permission else None,
            created_at=view.created_at,
        )


class PublicSignResponse(PublicDocumentResponse):
    annotations_applied: int = 0
    annotations_skipped: list[SkippedAnnotationResponse] = []

    @classmethod
    def from_outcome(cls, outcome: GuestSignOutcome) -> "PublicSignResponse":
        return cls(
            **PublicDocumentResponse.from_view(outcome.view).model_dump(),
            annotations_applied=len({m.annotation_index for m in outcome.marks}),
            annotations_skipped=[
                SkippedAnnotationResponse(index=s.index, reason=s.reason) for s in outcome.skipped
            ],
        )


class ShareResponse(BaseModel):
    message: str
    link: str
    email_sent: bool


class ResetResponse(BaseModel):
    message: str
    document: DocumentResponse


class MessageResponse(BaseModel):
    message: str


class AuditEventResponse(BaseModel):
    id: str
    document_id: str
    action: str
    actor_id: str | None = None
    detail: str = ""
    timestamp: datetime

    @classmethod
    def from_entity(cls, event: AuditEvent) -> "AuditEventResponse":
        return cls(
            id=event.id,
            document_id=event.document_id,
            action=event.action,
            actor_id=event.actor_id,
            detail=event.detail,
            timestamp=event.timestamp,
        )
