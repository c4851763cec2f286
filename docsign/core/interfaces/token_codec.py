"""
Contract: Token Codec

Emite e verifica share tokens (credenciais de capacidade assinadas
e com prazo de validade).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class ShareClaims:
    """Claims de um share token: um documento, um e-mail."""
    document_id: str
    email: str
    expires_at: datetime | None = None


class ITokenCodec(ABC):
    """
    Port: Token Codec

    Implementação típica: JWT HS256.
    """

    @abstractmethod
    def sign(self, claims: ShareClaims, ttl: timedelta) -> str:
        """Gera um token assinado que expira em `ttl`."""
        ...

    @abstractmethod
    def verify(self, token: str) -> ShareClaims:
        """
        Valida assinatura e expiração.

        Raises:
            InvalidToken: malformado, expirado ou adulterado.
        """
        ...
