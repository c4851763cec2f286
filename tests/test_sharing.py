"""Tests for sharing documents and the guest (share link) flow.

Tests cover:
- Grant upsert per recipient email
- Invitation email is best-effort
- Guest resolve / sign through the share token
- Invalid tokens change nothing
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from docsign.api.dependencies import Container
from docsign.core.entities.actor import Actor
from docsign.core.entities.annotation import Annotation, AnnotationKind
from docsign.core.entities.audit_event import AuditAction
from docsign.core.entities.document import DocStatus, Document, Permission
from docsign.core.errors import InvalidToken, NotFound, Unauthorized, ValidationFailed

from samples import FRONTEND_URL, FakeEmailSender, FixedClock


def blank_text(x: float = 120, y: float = 300) -> Annotation:
    return Annotation(kind=AnnotationKind.TEXT, content=None, x=x, y=y, page=1)


class TestShare:
    def test_share_twice_keeps_one_grant(self, container: Container, owner: Actor, uploaded: Document) -> None:
        """Same recipient shared twice: one grant, latest permission wins."""
        container.share.execute(uploaded.id, owner, "bob@example.com", Permission.VIEW)
        container.share.execute(uploaded.id, owner, "Bob@Example.com", Permission.EDIT)

        doc = container.query.get(uploaded.id, owner)
        assert [(g.email, g.permission) for g in doc.shared_with] == [("bob@example.com", Permission.EDIT)]

    def test_link_and_invitation(
        self, container: Container, owner: Actor, uploaded: Document, email_sender: FakeEmailSender
    ) -> None:
        outcome = container.share.execute(
            uploaded.id, owner, "bob@example.com", Permission.EDIT, message="Please sign <today>"
        )

        assert outcome.email_sent is True
        assert outcome.message == "Invitation sent successfully!"
        assert outcome.link == f"{FRONTEND_URL}/share/{outcome.token}"
        (mail,) = email_sender.sent
        assert mail.to == "bob@example.com"
        assert mail.subject == "Document Signature Request from Olivia Owner"
        assert outcome.link in mail.text
        assert "&lt;today&gt;" in mail.html

    def test_email_failure_still_grants(
        self, container: Container, owner: Actor, uploaded: Document, email_sender: FakeEmailSender
    ) -> None:
        email_sender.fail = True

        outcome = container.share.execute(uploaded.id, owner, "bob@example.com", Permission.VIEW)

        assert outcome.email_sent is False
        assert outcome.link.startswith(f"{FRONTEND_URL}/share/")
        assert container.query.get(uploaded.id, owner).grant_for("bob@example.com") is not None

    def test_share_is_audited(self, container: Container, owner: Actor, uploaded: Document) -> None:
        container.share.execute(uploaded.id, owner, "bob@example.com", Permission.EDIT)

        last = container.query.audit(uploaded.id, owner)[-1]
        assert last.action == AuditAction.SHARED
        assert last.detail == "Shared with bob@example.com (edit)"

    @pytest.mark.parametrize("email", ["", "not-an-email", "bob@", "@example.com"])
    def test_invalid_email(self, container: Container, owner: Actor, uploaded: Document, email: str) -> None:
        with pytest.raises(ValidationFailed):
            container.share.execute(uploaded.id, owner, email, Permission.VIEW)

    def test_only_owner_shares(self, container: Container, stranger: Actor, uploaded: Document) -> None:
        with pytest.raises(Unauthorized):
            container.share.execute(uploaded.id, stranger, "eve@example.com", Permission.EDIT)

    def test_unknown_document(self, container: Container, owner: Actor) -> None:
        with pytest.raises(NotFound):
            container.share.execute("missing", owner, "bob@example.com", Permission.VIEW)

    def test_shared_list(self, container: Container, owner: Actor, uploaded: Document) -> None:
        container.share.execute(uploaded.id, owner, "bob@example.com", Permission.VIEW)
        bob = Actor.user("user-2", "bob@example.com", "Bob")

        assert [d.id for d in container.query.list_shared_with(bob)] == [uploaded.id]
        assert container.query.get(uploaded.id, bob).id == uploaded.id


class TestGuestAccess:
    def share_token(self, container: Container, owner: Actor, doc: Document, permission: Permission) -> str:
        return container.share.execute(doc.id, owner, "carol@example.com", permission).token

    def test_resolve(self, container: Container, owner: Actor, uploaded: Document) -> None:
        token = self.share_token(container, owner, uploaded, Permission.VIEW)

        view = container.guest.resolve(token)

        assert view.id == uploaded.id
        assert view.file_name == "contract.pdf"
        assert view.status == DocStatus.PENDING
        assert view.permission == Permission.VIEW

    def test_guest_sign_defaults_text(self, container: Container, owner: Actor, uploaded: Document) -> None:
        token = self.share_token(container, owner, uploaded, Permission.EDIT)

        outcome = container.guest.sign(token, blank_text(), origin="192.0.2.7")

        assert outcome.view.status == DocStatus.SIGNED
        assert outcome.view.signature_config["content"] == "Signed by Guest (carol@example.com)"
        last = container.query.audit(uploaded.id, owner)[-1]
        assert last.action == AuditAction.SIGNED_PUBLIC
        assert last.actor_id is None
        assert last.detail == "Signed by Guest carol@example.com. IP: 192.0.2.7"

    def test_view_only_guest_cannot_sign(self, container: Container, owner: Actor, uploaded: Document) -> None:
        token = self.share_token(container, owner, uploaded, Permission.VIEW)

        with pytest.raises(Unauthorized):
            container.guest.sign(token, blank_text())

        assert container.query.get(uploaded.id, owner).status == DocStatus.PENDING

    def test_expired_token_changes_nothing(
        self, container: Container, owner: Actor, uploaded: Document, token_clock: FixedClock
    ) -> None:
        token = self.share_token(container, owner, uploaded, Permission.EDIT)
        before = container.query.audit(uploaded.id, owner)
        token_clock.advance(timedelta(days=8))

        with pytest.raises(InvalidToken):
            container.guest.sign(token, blank_text())

        doc = container.query.get(uploaded.id, owner)
        assert doc.status == DocStatus.PENDING
        assert container.query.audit(uploaded.id, owner) == before

    def test_tampered_token_changes_nothing(self, container: Container, owner: Actor, uploaded: Document) -> None:
        token = self.share_token(container, owner, uploaded, Permission.EDIT)
        before = container.query.audit(uploaded.id, owner)
        header, payload, signature = token.split(".")

        with pytest.raises(InvalidToken):
            container.guest.sign(".".join([header, payload, signature[::-1]]), blank_text())

        assert container.query.get(uploaded.id, owner).status == DocStatus.PENDING
        assert container.query.audit(uploaded.id, owner) == before

    def test_deleted_document(self, container: Container, owner: Actor, uploaded: Document) -> None:
        token = self.share_token(container, owner, uploaded, Permission.EDIT)
        container.delete.execute(uploaded.id, owner)

        with pytest.raises(NotFound):
            container.guest.resolve(token)
