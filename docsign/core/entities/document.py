"""
Entity: Document

Representa um PDF enviado e seu ciclo de vida de assinatura.
Modelo puro — sem dependência de framework ou banco.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from docsign.core.errors import InvalidStateTransition


class DocStatus(str, Enum):
    PENDING = "Pending"
    SIGNED = "Signed"
    REJECTED = "Rejected"


class Permission(str, Enum):
    VIEW = "view"
    EDIT = "edit"   # "pode assinar"


# Transições permitidas: Pending→Signed, Pending→Rejected, Signed→Pending (reset)
ALLOWED_TRANSITIONS = {
    DocStatus.PENDING: {DocStatus.SIGNED, DocStatus.REJECTED},
    DocStatus.SIGNED: {DocStatus.PENDING},
    DocStatus.REJECTED: set(),
}


@dataclass
class SharingGrant:
    """Permissão de um destinatário convidado."""
    email: str
    permission: Permission = Permission.VIEW


@dataclass
class Document:
    """Entidade de domínio: Documento."""
    id: str
    file_name: str
    owner_id: str
    file_url: str                          # bytes originais no blob store
    file_blob_id: str | None = None
    signed_url: str | None = None          # não-nulo sse status == SIGNED
    signed_blob_id: str | None = None
    status: DocStatus = DocStatus.PENDING
    shared_with: list[SharingGrant] = field(default_factory=list)
    signature_config: dict | None = None   # primeira anotação aplicada
    version: int = 1
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def is_owner(self, actor_id: str | None) -> bool:
        return actor_id is not None and self.owner_id == actor_id

    def grant_for(self, email: str | None) -> SharingGrant | None:
        if not email:
            return None
        wanted = email.strip().lower()
        for grant in self.shared_with:
            if grant.email.lower() == wanted:
                return grant
        return None

    def upsert_grant(self, email: str, permission: Permission) -> SharingGrant:
        """Insere um grant para o e-mail ou atualiza a permissão existente."""
        grant = self.grant_for(email)
        if grant is None:
            grant = SharingGrant(email=email.strip().lower(), permission=permission)
            self.shared_with.append(grant)
        else:
            grant.permission = permission
        return grant

    def _transition(self, target: DocStatus) -> None:
        if target not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidStateTransition(
                f"Document {self.id} cannot move from {self.status.value} to {target.value}"
            )
        self.status = target

    def mark_signed(self, signed_url: str, signed_blob_id: str, signature_config: dict | None) -> None:
        self._transition(DocStatus.SIGNED)
        self.signed_url = signed_url
        self.signed_blob_id = signed_blob_id
        self.signature_config = signature_config

    def mark_rejected(self) -> None:
        self._transition(DocStatus.REJECTED)

    def clear_signature(self) -> None:
        """Volta para PENDING. Em um documento já PENDING é no-op."""
        if self.status != DocStatus.PENDING:
            self._transition(DocStatus.PENDING)
        self.signed_url = None
        self.signed_blob_id = None
        self.signature_config = None


@dataclass(frozen=True)
class PublicDocumentView:
    """Visão restrita para quem chega por share token (sem grants nem auditoria)."""
    id: str
    file_name: str
    file_url: str
    signed_url: str | None
    status: DocStatus
    signature_config: dict | None
    created_at: datetime
    permission: Permission | None = None   # do destinatário do token

    @classmethod
    def from_document(cls, doc: Document, email: str | None = None) -> "PublicDocumentView":
        grant = doc.grant_for(email)
        return cls(
            id=doc.id,
            file_name=doc.file_name,
            file_url=doc.file_url,
            signed_url=doc.signed_url,
            status=doc.status,
            signature_config=doc.signature_config,
            created_at=doc.created_at,
            permission=grant.permission if grant else None,
        )
