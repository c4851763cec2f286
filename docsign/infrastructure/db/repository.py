"""
Document & Audit Repositories — SQLAlchemy implementations of the ports.

Handles:
  - Storing documents + sharing grants
  - Optimistic-concurrency updates (version compare-and-set)
  - Append-only audit events, read back in timestamp order
"""

import logging
from dataclasses import replace
from datetime import datetime

from sqlalchemy import asc, desc, update

from docsign.core.entities.audit_event import AuditEvent
from docsign.core.entities.document import Document
from docsign.core.errors import ConcurrentModification, NotFound
from docsign.core.interfaces.audit_log import IAuditLog
from docsign.core.interfaces.document_repository import IDocumentRepository
from docsign.infrastructure.db.database import Database
from docsign.infrastructure.db.models import AuditEventRecord, DocumentRecord, SharingGrantRecord

logger = logging.getLogger(__name__)


class SqlDocumentRepository(IDocumentRepository):
    """Repository for documents."""

    def __init__(self, database: Database):
        self._db = database

    def add(self, document: Document) -> Document:
        with self._db.session() as db:
            record = DocumentRecord.from_entity(document)
            db.add(record)
            db.flush()
            logger.info(f"Saved document {record.id} [{record.status}]")
            return record.to_entity()

    def get(self, document_id: str) -> Document | None:
        with self._db.session() as db:
            record = db.get(DocumentRecord, document_id)
            if record:
                return record.to_entity()
            return None

    def update(self, document: Document) -> Document:
        expected = document.version
        with self._db.session() as db:
            # Compare-and-set on the version column; the row lock serializes writers
            result = db.execute(
                update(DocumentRecord)
                .where(DocumentRecord.id == document.id, DocumentRecord.version == expected)
                .values(version=expected + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                if db.get(DocumentRecord, document.id) is None:
                    raise NotFound(f"Document {document.id} not found")
                raise ConcurrentModification(
                    f"Document {document.id} changed since version {expected}"
                )

            record = db.get(DocumentRecord, document.id, populate_existing=True)
            record.apply(replace(document, version=expected + 1, updated_at=datetime.utcnow()))
            db.flush()
            logger.info(f"Updated document {record.id} [{record.status}] -> v{record.version}")
            return record.to_entity()

    def delete(self, document_id: str) -> None:
        with self._db.session() as db:
            record = db.get(DocumentRecord, document_id)
            if record is None:
                raise NotFound(f"Document {document_id} not found")
            db.delete(record)
            logger.info(f"Deleted document {document_id}")

    def list_by_owner(self, owner_id: str) -> list[Document]:
        with self._db.session() as db:
            records = (
                db.query(DocumentRecord)
                .filter_by(owner_id=owner_id)
                .order_by(desc(DocumentRecord.created_at))
                .all()
            )
            return [r.to_entity() for r in records]

    def list_shared_with(self, email: str) -> list[Document]:
        with self._db.session() as db:
            records = (
                db.query(DocumentRecord)
                .join(SharingGrantRecord)
                .filter(SharingGrantRecord.email == email.strip().lower())
                .order_by(desc(DocumentRecord.created_at))
                .all()
            )
            return [r.to_entity() for r in records]


class SqlAuditLog(IAuditLog):
    """Append-only audit store."""

    def __init__(self, database: Database):
        self._db = database

    def append(self, event: AuditEvent) -> None:
        with self._db.session() as db:
            db.add(AuditEventRecord.from_entity(event))
            logger.debug(f"Audit {event.action} doc={event.document_id}")

    def list(self, document_id: str, offset: int = 0, limit: int | None = None) -> list[AuditEvent]:
        with self._db.session() as db:
            query = (
                db.query(AuditEventRecord)
                .filter_by(document_id=document_id)
                .order_by(asc(AuditEventRecord.timestamp), asc(AuditEventRecord.seq))
                .offset(offset)
            )
            if limit is not None:
                query = query.limit(limit)
            return [r.to_entity() for r in query.all()]
