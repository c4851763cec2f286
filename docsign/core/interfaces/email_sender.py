"""
Contract: Email Sender

Entrega best-effort de e-mails; quem chama captura as exceções.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class EmailMessage:
    to: str
    subject: str
    text: str
    html: str = ""


class IEmailSender(ABC):
    """Port: Email Sender (SMTP, API externa, console...)."""

    @abstractmethod
    def send(self, message: EmailMessage) -> None:
        """Envia a mensagem ou levanta exceção."""
        ...
