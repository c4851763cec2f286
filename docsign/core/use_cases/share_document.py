"""
Use Case: Share Document

Upsert do grant → auditoria → share token → link → e-mail best-effort.
O grant vale mesmo se o e-mail falhar; nesse caso o dono recebe o
link bruto (email_sent=False) para encaminhar manualmente.
"""

import html
import logging
import re
from dataclasses import dataclass
from datetime import timedelta

from docsign.core.entities.actor import Actor
from docsign.core.entities.audit_event import AuditAction
from docsign.core.entities.document import Document, Permission
from docsign.core.errors import ValidationFailed
from docsign.core.interfaces.document_repository import IDocumentRepository
from docsign.core.interfaces.email_sender import EmailMessage, IEmailSender
from docsign.core.interfaces.token_codec import ITokenCodec, ShareClaims
from docsign.core.use_cases.access import load_document, require_owner, try_send_email
from docsign.core.use_cases.audit_trail import AuditTrail

logger = logging.getLogger(__name__)

SHARE_TOKEN_TTL = timedelta(days=7)
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass
class ShareOutcome:
    document: Document
    link: str
    email_sent: bool
    token: str

    @property
    def message(self) -> str:
        if self.email_sent:
            return "Invitation sent successfully!"
        return "Document shared (email delivery unavailable)"


class ShareDocumentUseCase:
    """Use Case: somente o dono compartilha."""

    def __init__(
        self,
        documents: IDocumentRepository,
        tokens: ITokenCodec,
        email_sender: IEmailSender,
        audit: AuditTrail,
        frontend_url: str,
        token_ttl: timedelta = SHARE_TOKEN_TTL,
    ):
        self._documents = documents
        self._tokens = tokens
        self._email = email_sender
        self._audit = audit
        self._frontend_url = frontend_url.rstrip("/")
        self._token_ttl = token_ttl

    def execute(
        self,
        document_id: str,
        actor: Actor,
        email: str,
        permission: Permission = Permission.VIEW,
        message: str | None = None,
    ) -> ShareOutcome:
        email = (email or "").strip().lower()
        if not EMAIL_PATTERN.match(email):
            raise ValidationFailed("Email is required")

        doc = load_document(self._documents, document_id)
        require_owner(doc, actor)

        # ── 1. Grant (autoritativo, independe do e-mail) ───
        doc.upsert_grant(email, permission)
        doc = self._documents.update(doc)
        self._audit.record(
            AuditAction.SHARED, doc.id, actor.actor_id, f"Shared with {email} ({permission.value})"
        )

        # ── 2. Link ────────────────────────────────────────
        token = self._tokens.sign(ShareClaims(document_id=doc.id, email=email), self._token_ttl)
        link = f"{self._frontend_url}/share/{token}"

        # ── 3. E-mail (best-effort) ────────────────────────
        sent = try_send_email(self._email, self._invitation(doc, actor, email, link, message), doc.id)
        if not sent:
            logger.info(f"Share link for {email} on document {doc.id} returned to owner only")

        return ShareOutcome(document=doc, link=link, email_sent=sent, token=token)

    @staticmethod
    def _invitation(doc: Document, actor: Actor, to: str, link: str, message: str | None) -> EmailMessage:
        sender_name = actor.name or "A user"
        sender_email = actor.email or ""
        custom_text = f'Message from sender: "{message}"\n' if message else ""
        custom_html = (
            f'<p><strong>Message from sender:</strong><br/>"{html.escape(message)}"</p>' if message else ""
        )

        text = (
            f"Hello,\n\n{sender_name} ({sender_email}) has requested you to sign the document "
            f'"{doc.file_name}".\n\n{custom_text}\n'
            f"Please click the link below to view and sign the document:\n{link}\n\n"
            "Thank you,\nDocSign App"
        )
        body = f"""
            <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px; border: 1px solid #eee; border-radius: 5px;">
                <h2 style="color: #333;">Document Signature Request</h2>
                <p>Hello,</p>
                <p><strong>{html.escape(sender_name)}</strong> (<a href="mailto:{html.escape(sender_email)}">{html.escape(sender_email)}</a>) has requested you to sign the document <strong>"{html.escape(doc.file_name)}"</strong>.</p>
                {custom_html}
                <div style="margin: 30px 0;">
                    <a href="{link}" style="background-color: #007bff; color: white; padding: 12px 24px; text-decoration: none; border-radius: 4px; font-weight: bold;">Review and Sign Document</a>
                </div>
                <p style="color: #666; font-size: 14px;">Share link: {link}</p>
            </div>
        """
        return EmailMessage(
            to=to,
            subject=f"Document Signature Request from {sender_name}",
            text=text,
            html=body,
        )
