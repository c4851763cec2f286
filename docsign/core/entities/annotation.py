"""
Entity: Annotation

Uma marca posicionada pela UI (texto ou imagem) em coordenadas da página:
origem no canto superior esquerdo, y crescendo para baixo.
"""

from dataclasses import dataclass, asdict
from enum import Enum

from docsign.core.errors import ValidationFailed


class AnnotationKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"


def _kind(value) -> AnnotationKind:
    try:
        return AnnotationKind(value)
    except ValueError:
        raise ValidationFailed(f"Unknown annotation type: {value!r}") from None


def _number(data: dict, key: str, cast, default):
    value = data.get(key)
    if value is None or value == "":
        return default
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise ValidationFailed(f"Annotation field '{key}' is not a number: {value!r}") from None


@dataclass(frozen=True)
class Annotation:
    """Anotação transitória; só é persistida dentro de signature_config."""
    kind: AnnotationKind
    content: str | None            # texto literal ou data URI da imagem
    x: float
    y: float
    page: int = 1                  # 1-based

    def to_dict(self) -> dict:
        data = asdict(self)
        data["type"] = data.pop("kind").value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Annotation":
        """Aceita o formato da UI: {type, content, x, y, page}."""
        return cls(
            kind=_kind(data.get("type", "text")),
            content=data.get("content"),
            x=_number(data, "x", float, 0.0),
            y=_number(data, "y", float, 0.0),
            page=_number(data, "page", int, 1),
        )

    @classmethod
    def from_legacy_position(cls, position: dict) -> "Annotation":
        """Clientes antigos enviam {x, y, page, image?, text?}."""
        if "type" in position:
            return cls.from_dict(position)
        image = position.get("image")
        return cls(
            kind=AnnotationKind.IMAGE if image else AnnotationKind.TEXT,
            content=image or position.get("text"),
            x=_number(position, "x", float, 0.0),
            y=_number(position, "y", float, 0.0),
            page=_number(position, "page", int, 1),
        )


def normalize_annotations(
    position: dict | None = None,
    annotations: list[dict] | None = None,
) -> list[Annotation]:
    """
    Resolve a entrada (legado `position` vs. lista `annotations`) numa
    sequência canônica e ordenada de Annotation.

    `annotations` não-vazio tem precedência; sem nenhum dos dois, a lista
    é vazia (documento assinado sem marcas continua válido).
    """
    if annotations:
        return [Annotation.from_dict(item) for item in annotations]
    if position:
        return [Annotation.from_legacy_position(position)]
    return []
