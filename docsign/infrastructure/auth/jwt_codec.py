"""
JWT codecs — python-jose.

  - JoseTokenCodec: share tokens (documentId + email, 7-day expiry)
  - verify_identity_token: bearer tokens minted by the external auth
    provider (sub / email / name)
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from jose import ExpiredSignatureError, JWTError, jwt

from docsign.core.entities.actor import Actor
from docsign.core.errors import InvalidToken
from docsign.core.interfaces.token_codec import ITokenCodec, ShareClaims

logger = logging.getLogger(__name__)

ALGORITHM_HS256 = "HS256"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JoseTokenCodec(ITokenCodec):
    """Symmetric (HS256) share-token codec."""

    def __init__(
        self,
        secret: str,
        algorithm: str = ALGORITHM_HS256,
        now: Callable[[], datetime] = _utcnow,
    ):
        if not secret:
            raise ValueError("Share token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._now = now

    def sign(self, claims: ShareClaims, ttl: timedelta) -> str:
        issued = self._now()
        payload = {
            "documentId": claims.document_id,
            "email": claims.email,
            "iat": int(issued.timestamp()),
            "exp": int((issued + ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> ShareClaims:
        if not token:
            raise InvalidToken("Missing token")
        try:
            # exp is checked against our own clock below, so the codec stays testable
            payload = jwt.decode(
                token, self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            logger.info(f"Rejected share token: {e}")
            raise InvalidToken("Invalid or expired token") from e

        document_id = payload.get("documentId")
        email = payload.get("email")
        exp = payload.get("exp")
        if not isinstance(document_id, str) or not isinstance(email, str) or not isinstance(exp, (int, float)):
            raise InvalidToken("Invalid or expired token")

        expires_at = datetime.fromtimestamp(exp, tz=timezone.utc)
        if expires_at <= self._now():
            logger.info(f"Rejected expired share token for document {document_id}")
            raise InvalidToken("Invalid or expired token")

        return ShareClaims(document_id=document_id, email=email, expires_at=expires_at)


def verify_identity_token(token: str, secret: str, algorithm: str = ALGORITHM_HS256) -> Actor:
    """
    Verify a bearer token issued by the auth provider.

    Raises:
        InvalidToken: bad signature, expired, or no subject.
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except ExpiredSignatureError as e:
        raise InvalidToken("Session expired") from e
    except JWTError as e:
        raise InvalidToken("Not authorized, token failed") from e

    subject = payload.get("sub") or payload.get("id")
    if not subject:
        raise InvalidToken("Not authorized, token has no subject")
    email = payload.get("email")
    return Actor.user(
        actor_id=str(subject),
        email=email.strip().lower() if isinstance(email, str) else None,
        name=payload.get("name"),
    )
