"""Sample inputs and test doubles shared by the test modules."""

from __future__ import annotations

import base64
import io
from datetime import date, datetime, timedelta

from PIL import Image
from reportlab.pdfgen import canvas

from docsign.core.interfaces.email_sender import EmailMessage, IEmailSender

PAGE_WIDTH = 600
PAGE_HEIGHT = 800
STAMP_DAY = date(2026, 3, 7)
SHARE_SECRET = "test-share-secret"
AUTH_SECRET = "test-auth-secret"
FRONTEND_URL = "http://frontend.test"


def make_pdf(num_pages: int = 2, width: float = PAGE_WIDTH, height: float = PAGE_HEIGHT) -> bytes:
    """Create a PDF whose pages carry a 'Page N' label, using reportlab."""
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=(width, height))
    for page_num in range(1, num_pages + 1):
        c.drawString(72, 72, f"Page {page_num}")
        c.showPage()
    c.save()
    return buffer.getvalue()


def image_data_uri(fmt: str = "PNG", size: tuple[int, int] = (100, 60), mime: str | None = None) -> str:
    """Encode a solid image as a base64 data URI."""
    buffer = io.BytesIO()
    Image.new("RGB", size, (20, 40, 160)).save(buffer, format=fmt)
    mime = mime or f"image/{fmt.lower()}"
    return f"data:{mime};base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


class FakeEmailSender(IEmailSender):
    """Records messages; raises when `fail` is set."""

    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []
        self.fail = False

    def send(self, message: EmailMessage) -> None:
        if self.fail:
            raise ConnectionError("SMTP relay unreachable")
        self.sent.append(message)


class FixedClock:
    """Settable UTC clock."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta

