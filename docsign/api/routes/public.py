"""
Routes: /docs/public/{token} — guest access through a share link (no login).
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from docsign.api.dependencies import Container, client_origin, get_container
from docsign.api.schemas.requests import GuestSignRequest
from docsign.api.schemas.responses import PublicDocumentResponse, PublicSignResponse
from docsign.core.entities.annotation import Annotation

router = APIRouter()


@router.get("/public/{token}", response_model=PublicDocumentResponse)
async def get_public_document(token: str, container: Container = Depends(get_container)):
    """Resolve a share token into a restricted view of the document."""
    return PublicDocumentResponse.from_view(container.guest.resolve(token))


@router.post("/public/{token}/sign", response_model=PublicSignResponse)
async def sign_public_document(
    token: str,
    body: GuestSignRequest,
    request: Request,
    container: Container = Depends(get_container),
):
    """Guest signature: a single annotation, or a legacy `position`."""
    if body.annotation is not None:
        annotation = Annotation.from_dict(body.annotation.model_dump())
    elif body.position:
        annotation = Annotation.from_legacy_position(body.position)
    else:
        raise HTTPException(status_code=400, detail="Signature position is required")

    outcome = container.guest.sign(
        token, annotation,
        legacy_position=body.position,
        origin=client_origin(request),
    )
    return PublicSignResponse.from_outcome(outcome)
