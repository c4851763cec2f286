"""
Dependency wiring: every use case built with its concrete adapters.

The container is a lazy singleton for the running app; tests swap it with
`app.dependency_overrides[get_container]`.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from docsign.config.settings import Settings, get_settings
from docsign.core.entities.actor import Actor
from docsign.core.errors import InvalidToken
from docsign.core.interfaces.email_sender import IEmailSender
from docsign.core.interfaces.storage_service import IBlobStore
from docsign.core.interfaces.token_codec import ITokenCodec
from docsign.core.use_cases.audit_trail import AuditTrail
from docsign.core.use_cases.delete_document import DeleteDocumentUseCase
from docsign.core.use_cases.finalize_document import FinalizeDocumentUseCase
from docsign.core.use_cases.guest_access import GuestAccessUseCase
from docsign.core.use_cases.query_documents import QueryDocumentsUseCase
from docsign.core.use_cases.reject_document import RejectDocumentUseCase
from docsign.core.use_cases.reset_signatures import ResetSignaturesUseCase
from docsign.core.use_cases.share_document import ShareDocumentUseCase
from docsign.core.use_cases.upload_document import UploadDocumentUseCase
from docsign.infrastructure.auth.jwt_codec import JoseTokenCodec, verify_identity_token
from docsign.infrastructure.db.database import Database
from docsign.infrastructure.db.repository import SqlAuditLog, SqlDocumentRepository
from docsign.infrastructure.email.smtp_sender import SmtpEmailSender
from docsign.infrastructure.pdf.reportlab_renderer import ReportLabAnnotationRenderer
from docsign.infrastructure.storage.local_storage import LocalBlobStore
from docsign.infrastructure.storage.minio_storage import MinIOBlobStore

logger = logging.getLogger(__name__)


@dataclass
class Container:
    """Every collaborator the routes need, built once."""
    settings: Settings
    database: Database
    blobs: IBlobStore
    audit: AuditTrail
    upload: UploadDocumentUseCase
    query: QueryDocumentsUseCase
    finalize: FinalizeDocumentUseCase
    reset: ResetSignaturesUseCase
    share: ShareDocumentUseCase
    guest: GuestAccessUseCase
    reject: RejectDocumentUseCase
    delete: DeleteDocumentUseCase


def build_blob_store(settings: Settings) -> IBlobStore:
    if settings.storage_backend == "minio":
        store = MinIOBlobStore(
            endpoint=settings.minio_endpoint,
            access_key=settings.minio_access_key,
            secret_key=settings.minio_secret_key,
            bucket=settings.minio_bucket,
            public_url=settings.minio_public_url,
            secure=settings.minio_secure,
        )
        store.ensure_bucket()
        return store
    return LocalBlobStore(settings.local_storage_dir, public_base_url=settings.public_base_url)


def build_container(
    settings: Settings,
    database: Database | None = None,
    blobs: IBlobStore | None = None,
    tokens: ITokenCodec | None = None,
    email_sender: IEmailSender | None = None,
    renderer: ReportLabAnnotationRenderer | None = None,
    audit: AuditTrail | None = None,
) -> Container:
    """Factory — build use cases with concrete adapters (each one overridable)."""
    database = database or Database(settings.database_url)
    database.init()

    documents = SqlDocumentRepository(database)
    audit = audit or AuditTrail(SqlAuditLog(database))
    blobs = blobs or build_blob_store(settings)
    tokens = tokens or JoseTokenCodec(settings.share_token_secret, settings.share_token_algorithm)
    email_sender = email_sender or SmtpEmailSender(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_user,
        password=settings.smtp_password,
        use_tls=settings.smtp_use_tls,
        sender=settings.mail_from,
    )
    renderer = renderer or ReportLabAnnotationRenderer(
        image_scale=settings.image_scale,
        font_name=settings.text_font,
        font_path=settings.text_font_path or None,
        text_size=settings.text_size,
        date_size=settings.date_size,
    )

    finalize = FinalizeDocumentUseCase(documents, blobs, renderer, audit, signed_folder=settings.signed_folder)
    return Container(
        settings=settings,
        database=database,
        blobs=blobs,
        audit=audit,
        upload=UploadDocumentUseCase(documents, blobs, renderer, audit, upload_folder=settings.upload_folder),
        query=QueryDocumentsUseCase(documents, audit),
        finalize=finalize,
        reset=ResetSignaturesUseCase(documents, blobs, audit),
        share=ShareDocumentUseCase(
            documents, tokens, email_sender, audit,
            frontend_url=settings.frontend_url,
            token_ttl=timedelta(days=settings.share_token_ttl_days),
        ),
        guest=GuestAccessUseCase(documents, tokens, finalize),
        reject=RejectDocumentUseCase(documents, audit),
        delete=DeleteDocumentUseCase(documents, blobs, audit),
    )


# Lazy singleton
_container: Container | None = None


def get_container() -> Container:
    global _container
    if _container is None:
        _container = build_container(get_settings())
    return _container


_bearer = HTTPBearer(auto_error=False)


def get_current_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    container: Container = Depends(get_container),
) -> Actor:
    """Verified identity from the auth provider's bearer token."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Not authorized, no token")
    settings = container.settings
    try:
        return verify_identity_token(
            credentials.credentials, settings.auth_token_secret, settings.auth_token_algorithm
        )
    except InvalidToken as e:
        raise HTTPException(status_code=401, detail=str(e))


def client_origin(request: Request) -> str:
    """Caller address recorded in audit details."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"
