"""
Entity: Audit Event

Registro imutável de uma ação sobre um documento. Nunca é
atualizado nem apagado; exibição ordenada por timestamp ascendente.
"""

from dataclasses import dataclass, field
from datetime import datetime
import uuid


class AuditAction:
    UPLOADED = "Uploaded"
    SIGNED = "Signed"
    SIGNED_PUBLIC = "Signed (Public)"
    SHARED = "Shared"
    REJECTED = "Rejected"
    RESET = "Reset"
    DELETED = "Deleted"


@dataclass(frozen=True)
class AuditEvent:
    document_id: str
    action: str
    actor_id: str | None          # None para visitantes (guest)
    detail: str = ""
    timestamp: datetime = field(default_factory=datetime.utcnow)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
