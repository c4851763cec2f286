"""
Adapter: SMTP Email Sender

Sends multipart (text + HTML) mail through any SMTP relay. With no
SMTP host configured the message is only logged (local dev).
"""

import logging
import smtplib
from email.message import EmailMessage as MimeMessage

from docsign.core.interfaces.email_sender import EmailMessage, IEmailSender

logger = logging.getLogger(__name__)


class SmtpEmailSender(IEmailSender):
    """SMTP delivery (STARTTLS by default)."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str = "",
        password: str = "",
        use_tls: bool = True,
        sender: str = '"DocSign App" <no-reply@docsign.com>',
        timeout: float = 10.0,
    ):
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._sender = sender
        self._timeout = timeout

    def _build(self, message: EmailMessage) -> MimeMessage:
        mime = MimeMessage()
        mime["From"] = self._sender
        mime["To"] = message.to
        mime["Subject"] = message.subject
        mime.set_content(message.text)
        if message.html:
            mime.add_alternative(message.html, subtype="html")
        return mime

    def send(self, message: EmailMessage) -> None:
        if not self._host:
            logger.info(
                "--- MOCK EMAIL SEND ---\n"
                f"To: {message.to}\nSubject: {message.subject}\nBody: {message.text}\n"
                "--- END MOCK EMAIL ---"
            )
            return

        mime = self._build(message)
        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
            if self._use_tls:
                smtp.starttls()
            if self._username:
                smtp.login(self._username, self._password)
            smtp.send_message(mime)
        logger.info(f"Message sent to {message.to}: {message.subject}")
