"""
Pydantic schemas — Request models para a API.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from docsign.core.entities.document import Permission


class AnnotationPayload(BaseModel):
    """One placed item as produced by the editor: {id, type, content, x, y, page}."""
    id: str | None = None
    type: Literal["text", "image"] = "text"
    content: str | None = None
    x: float = 0.0
    y: float = 0.0
    page: int = Field(default=1, ge=1)


class SignRequest(BaseModel):
    """`annotations` (new clients) or a single legacy `position`."""
    model_config = ConfigDict(extra="ignore")

    position: dict | None = None
    annotations: list[AnnotationPayload] | None = None


class GuestSignRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    position: dict | None = None
    annotation: AnnotationPayload | None = None


class ShareRequest(BaseModel):
    email: str
    permission: Permission = Permission.VIEW
    message: str | None = None


class RejectRequest(BaseModel):
    reason: str | None = None
