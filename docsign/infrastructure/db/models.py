"""
Database Models — SQLAlchemy.

Tables:
  - documents: uploaded PDFs and their signing lifecycle
  - sharing_grants: one row per (document, recipient email)
  - audit_events: append-only action log
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    Column, String, Integer, DateTime, Text, JSON,
    ForeignKey, Index, UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, relationship

from docsign.core.entities.audit_event import AuditEvent
from docsign.core.entities.document import Document, DocStatus, Permission, SharingGrant


class Base(DeclarativeBase):
    pass


class DocumentRecord(Base):
    """Stores every uploaded document."""
    __tablename__ = "documents"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    file_name = Column(String(255), nullable=False)
    owner_id = Column(String(64), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow)

    # Artifacts
    file_url = Column(Text, nullable=False)
    file_blob_id = Column(String(512))
    signed_url = Column(Text)
    signed_blob_id = Column(String(512))

    # Lifecycle
    status = Column(String(20), nullable=False, default=DocStatus.PENDING.value, index=True)
    signature_config = Column(JSON, nullable=True)
    version = Column(Integer, nullable=False, default=1)

    grants = relationship(
        "SharingGrantRecord",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="SharingGrantRecord.id",
    )

    def __repr__(self):
        return f"<Document {self.id} [{self.status}] v{self.version}>"

    @classmethod
    def from_entity(cls, doc: Document) -> "DocumentRecord":
        record = cls(id=doc.id, owner_id=doc.owner_id, created_at=doc.created_at)
        record.apply(doc)
        return record

    def apply(self, doc: Document):
        """Copy mutable entity fields onto this row (grants included)."""
        self.file_name = doc.file_name
        self.file_url = doc.file_url
        self.file_blob_id = doc.file_blob_id
        self.signed_url = doc.signed_url
        self.signed_blob_id = doc.signed_blob_id
        self.status = doc.status.value
        self.signature_config = doc.signature_config
        self.version = doc.version
        self.updated_at = doc.updated_at

        existing = {g.email: g for g in self.grants}
        wanted = {g.email for g in doc.shared_with}
        for grant in doc.shared_with:
            row = existing.get(grant.email)
            if row is None:
                self.grants.append(SharingGrantRecord(email=grant.email, permission=grant.permission.value))
            else:
                row.permission = grant.permission.value
        for email, row in existing.items():
            if email not in wanted:
                self.grants.remove(row)

    def to_entity(self) -> Document:
        return Document(
            id=self.id,
            file_name=self.file_name,
            owner_id=self.owner_id,
            file_url=self.file_url,
            file_blob_id=self.file_blob_id,
            signed_url=self.signed_url,
            signed_blob_id=self.signed_blob_id,
            status=DocStatus(self.status),
            shared_with=[
                SharingGrant(email=g.email, permission=Permission(g.permission)) for g in self.grants
            ],
            signature_config=self.signature_config,
            version=self.version,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class SharingGrantRecord(Base):
    """One invited recipient of a document."""
    __tablename__ = "sharing_grants"
    __table_args__ = (UniqueConstraint("document_id", "email", name="uq_grant_document_email"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(String(36), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False)
    email = Column(String(320), nullable=False, index=True)
    permission = Column(String(10), nullable=False, default=Permission.VIEW.value)

    document = relationship("DocumentRecord", back_populates="grants")

    def __repr__(self):
        return f"<Grant {self.email} ({self.permission}) doc={self.document_id}>"


class AuditEventRecord(Base):
    """Append-only audit trail. No FK: events outlive deleted documents."""
    __tablename__ = "audit_events"
    __table_args__ = (Index("ix_audit_document_time", "document_id", "timestamp"),)

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), unique=True, nullable=False, default=lambda: str(uuid.uuid4()))
    document_id = Column(String(36), nullable=False)
    action = Column(String(50), nullable=False)
    actor_id = Column(String(64), nullable=True)
    detail = Column(Text, default="")
    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Audit {self.action} doc={self.document_id} at={self.timestamp}>"

    @classmethod
    def from_entity(cls, event: AuditEvent) -> "AuditEventRecord":
        return cls(
            id=event.id,
            document_id=event.document_id,
            action=event.action,
            actor_id=event.actor_id,
            detail=event.detail,
            timestamp=event.timestamp,
        )

    def to_entity(self) -> AuditEvent:
        return AuditEvent(
            id=self.id,
            document_id=self.document_id,
            action=self.action,
            actor_id=self.actor_id,
            detail=self.detail or "",
            timestamp=self.timestamp,
        )
