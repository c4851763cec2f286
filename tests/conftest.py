"""Shared fixtures: in-memory database, on-disk blob store, fixed clocks, wired container."""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timezone

# The app module reads settings at import time; keep its files out of the working tree
os.environ.setdefault("LOCAL_STORAGE_DIR", tempfile.mkdtemp(prefix="docsign-test-files-"))
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest

from docsign.api.dependencies import Container, build_container
from docsign.config.settings import Settings
from docsign.core.entities.actor import Actor
from docsign.core.entities.document import Document
from docsign.infrastructure.auth.jwt_codec import JoseTokenCodec
from docsign.infrastructure.db.database import Database
from docsign.infrastructure.db.repository import SqlDocumentRepository
from docsign.infrastructure.pdf.reportlab_renderer import ReportLabAnnotationRenderer
from docsign.infrastructure.storage.local_storage import LocalBlobStore

from samples import (
    AUTH_SECRET,
    FRONTEND_URL,
    SHARE_SECRET,
    STAMP_DAY,
    FakeEmailSender,
    FixedClock,
    make_pdf,
)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url="sqlite://",
        storage_backend="local",
        local_storage_dir=str(tmp_path / "blobs"),
        public_base_url="http://testserver",
        share_token_secret=SHARE_SECRET,
        auth_token_secret=AUTH_SECRET,
        frontend_url=FRONTEND_URL,
        smtp_host="",
    )


@pytest.fixture
def database() -> Database:
    db = Database("sqlite://")
    db.init()
    return db


@pytest.fixture
def documents(database: Database) -> SqlDocumentRepository:
    return SqlDocumentRepository(database)


@pytest.fixture
def blobs(settings: Settings) -> LocalBlobStore:
    return LocalBlobStore(settings.local_storage_dir, public_base_url=settings.public_base_url)


@pytest.fixture
def token_clock() -> FixedClock:
    return FixedClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def tokens(token_clock: FixedClock) -> JoseTokenCodec:
    return JoseTokenCodec(SHARE_SECRET, now=token_clock)


@pytest.fixture
def email_sender() -> FakeEmailSender:
    return FakeEmailSender()


@pytest.fixture
def renderer() -> ReportLabAnnotationRenderer:
    return ReportLabAnnotationRenderer(today=lambda: STAMP_DAY)


@pytest.fixture
def container(settings, database, blobs, tokens, email_sender, renderer) -> Container:
    return build_container(
        settings,
        database=database,
        blobs=blobs,
        tokens=tokens,
        email_sender=email_sender,
        renderer=renderer,
    )


@pytest.fixture
def owner() -> Actor:
    return Actor.user("owner-1", "owner@example.com", "Olivia Owner")


@pytest.fixture
def stranger() -> Actor:
    return Actor.user("user-9", "mallory@example.com", "Mallory")


@pytest.fixture
def pdf_bytes() -> bytes:
    return make_pdf()


@pytest.fixture
def uploaded(container: Container, owner: Actor, pdf_bytes: bytes) -> Document:
    return container.upload.execute(owner, "contract.pdf", pdf_bytes, origin="10.0.0.1")
