"""
Routes: /docs — authenticated document management and signing.
"""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile

from docsign.api.dependencies import Container, client_origin, get_container, get_current_actor
from docsign.api.schemas.requests import RejectRequest, ShareRequest, SignRequest
from docsign.api.schemas.responses import (
    AuditEventResponse,
    DocumentResponse,
    MessageResponse,
    ResetResponse,
    ShareResponse,
    SignResponse,
)
from docsign.core.entities.actor import Actor
from docsign.core.entities.annotation import normalize_annotations

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/upload", response_model=DocumentResponse, status_code=201)
async def upload_document(
    request: Request,
    file: UploadFile = File(...),
    actor: Actor = Depends(get_current_actor),
    container: Container = Depends(get_container),
):
    """Upload a PDF; it starts in status Pending."""
    if file.content_type and file.content_type not in ("application/pdf", "application/octet-stream"):
        raise HTTPException(status_code=400, detail="File must be a PDF")

    data = await file.read()
    max_bytes = container.settings.max_upload_mb * 1024 * 1024
    if len(data) > max_bytes:
        raise HTTPException(status_code=413, detail=f"File exceeds {container.settings.max_upload_mb} MB")

    doc = container.upload.execute(actor, file.filename or "document.pdf", data, origin=client_origin(request))
    return DocumentResponse.from_entity(doc)


@router.get("", response_model=list[DocumentResponse])
async def list_documents(actor: Actor = Depends(get_current_actor), container: Container = Depends(get_container)):
    """Documents owned by the caller, newest first."""
    return [DocumentResponse.from_entity(d) for d in container.query.list_owned(actor)]


@router.get("/shared", response_model=list[DocumentResponse])
async def list_shared_documents(
    actor: Actor = Depends(get_current_actor),
    container: Container = Depends(get_container),
):
    """Documents shared with the caller's email."""
    return [DocumentResponse.from_entity(d) for d in container.query.list_shared_with(actor)]


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    actor: Actor = Depends(get_current_actor),
    container: Container = Depends(get_container),
):
    return DocumentResponse.from_entity(container.query.get(document_id, actor))


@router.post("/{document_id}/sign", response_model=SignResponse)
async def finalize_document(
    document_id: str,
    body: SignRequest,
    request: Request,
    actor: Actor = Depends(get_current_actor),
    container: Container = Depends(get_container),
):
    """
    Burn all placed annotations into a new signed PDF.

    Accepts `annotations` (full list) or a single legacy `position`.
    """
    annotations = normalize_annotations(
        position=body.position,
        annotations=[a.model_dump() for a in body.annotations] if body.annotations else None,
    )
    outcome = container.finalize.execute(
        document_id, actor, annotations,
        legacy_position=body.position,
        origin=client_origin(request),
    )
    return SignResponse.from_outcome(outcome)


@router.get("/{document_id}/audit", response_model=list[AuditEventResponse])
async def get_document_audit(
    document_id: str,
    offset: int = 0,
    limit: int | None = None,
    actor: Actor = Depends(get_current_actor),
    container: Container = Depends(get_container),
):
    """Audit trail of a document (owner only), oldest first."""
    events = container.query.audit(document_id, actor, offset=offset, limit=limit)
    return [AuditEventResponse.from_entity(e) for e in events]


@router.post("/{document_id}/share", response_model=ShareResponse)
async def share_document(
    document_id: str,
    body: ShareRequest,
    actor: Actor = Depends(get_current_actor),
    container: Container = Depends(get_container),
):
    outcome = container.share.execute(document_id, actor, body.email, body.permission, body.message)
    return ShareResponse(message=outcome.message, link=outcome.link, email_sent=outcome.email_sent)


@router.put("/{document_id}/reject", response_model=DocumentResponse)
async def reject_document(
    document_id: str,
    request: Request,
    body: RejectRequest | None = None,
    actor: Actor = Depends(get_current_actor),
    container: Container = Depends(get_container),
):
    doc = container.reject.execute(
        document_id, actor,
        reason=body.reason if body else None,
        origin=client_origin(request),
    )
    return DocumentResponse.from_entity(doc)


@router.delete("/{document_id}", response_model=MessageResponse)
async def delete_document(
    document_id: str,
    actor: Actor = Depends(get_current_actor),
    container: Container = Depends(get_container),
):
    container.delete.execute(document_id, actor)
    return MessageResponse(message="Document removed")


@router.delete("/{document_id}/signatures", response_model=ResetResponse)
async def reset_signatures(
    document_id: str,
    actor: Actor = Depends(get_current_actor),
    container: Container = Depends(get_container),
):
    doc = container.reset.execute(document_id, actor)
    return ResetResponse(
        message="Signatures cleared. Document reset to Pending.",
        document=DocumentResponse.from_entity(doc),
    )
