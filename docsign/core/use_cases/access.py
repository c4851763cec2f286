"""
Access guards + best-effort side operations shared by the use cases.

Guards raise (NotFound / Unauthorized). Best-effort helpers never raise:
they return True/False so the "non-fatal" contract is visible at the call site.
"""

import logging

from docsign.core.entities.actor import Actor
from docsign.core.entities.document import Document, Permission
from docsign.core.errors import NotFound, StorageFailure, Unauthorized
from docsign.core.interfaces.document_repository import IDocumentRepository
from docsign.core.interfaces.email_sender import EmailMessage, IEmailSender
from docsign.core.interfaces.storage_service import IBlobStore

logger = logging.getLogger(__name__)


def load_document(documents: IDocumentRepository, document_id: str) -> Document:
    doc = documents.get(document_id)
    if doc is None:
        raise NotFound("Document not found")
    return doc


def require_owner(doc: Document, actor: Actor) -> None:
    if actor.is_guest or not doc.is_owner(actor.actor_id):
        raise Unauthorized("Not authorized")


def can_sign(doc: Document, actor: Actor) -> bool:
    """Owner, or anyone (user or guest) holding an `edit` grant."""
    if not actor.is_guest and doc.is_owner(actor.actor_id):
        return True
    grant = doc.grant_for(actor.email)
    return grant is not None and grant.permission == Permission.EDIT


def require_signer(doc: Document, actor: Actor) -> None:
    if not can_sign(doc, actor):
        raise Unauthorized("Not authorized to sign this document")


def require_viewer(doc: Document, actor: Actor) -> None:
    if doc.is_owner(actor.actor_id) and not actor.is_guest:
        return
    if doc.grant_for(actor.email) is None:
        raise Unauthorized("Not authorized")


def release_blob(blobs: IBlobStore, blob_id: str | None, document_id: str) -> bool:
    """Delete a stored artifact; failures are logged and reported, never raised."""
    if not blob_id:
        return True
    try:
        blobs.delete(blob_id)
        return True
    except StorageFailure as e:
        logger.warning(f"Could not remove artifact {blob_id} of document {document_id}: {e}")
        return False


def try_send_email(sender: IEmailSender, message: EmailMessage, document_id: str) -> bool:
    """Best-effort delivery. Any transport error is logged and reported as False."""
    try:
        sender.send(message)
        return True
    except Exception as e:
        logger.warning(f"Email sending failed for document {document_id} (SMTP not configured?): {e}")
        return False
