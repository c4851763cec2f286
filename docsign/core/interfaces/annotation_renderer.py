"""
Contract: Annotation Renderer

Desenha anotações (texto ou imagem) nas páginas de um PDF e devolve
os bytes do PDF resultante. O PDF de entrada nunca é alterado.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from docsign.core.entities.annotation import Annotation


@dataclass
class RenderedMark:
    """Uma marca efetivamente desenhada, já em coordenadas PDF."""
    annotation_index: int         # posição na lista de entrada
    kind: str                     # "text", "date", "image"
    page: int                     # 1-based
    x: float
    y: float                      # canto inferior esquerdo / baseline
    width: float = 0.0
    height: float = 0.0
    text: str | None = None


@dataclass
class SkippedAnnotation:
    index: int                    # posição na lista de entrada
    reason: str                   # ex: "PAGE_NOT_FOUND", "UNSUPPORTED_IMAGE"


@dataclass
class RenderResult:
    """Resultado de uma renderização em lote."""
    pdf_bytes: bytes
    page_count: int
    marks: list[RenderedMark] = field(default_factory=list)
    skipped: list[SkippedAnnotation] = field(default_factory=list)

    @property
    def applied_count(self) -> int:
        """Quantidade de anotações de entrada que geraram alguma marca."""
        return len({m.annotation_index for m in self.marks})


class IAnnotationRenderer(ABC):
    """
    Port: Annotation Renderer

    Falhas por item (página inexistente, imagem inválida) não abortam o
    lote: o item é pulado e registrado em `skipped`.
    """

    @abstractmethod
    def count_pages(self, pdf_bytes: bytes) -> int:
        """
        Número de páginas do PDF.

        Raises:
            SourceFetchFailed: se os bytes não forem um PDF legível.
        """
        ...

    @abstractmethod
    def render(self, pdf_bytes: bytes, annotations: list[Annotation]) -> RenderResult:
        """
        Aplica as anotações em ordem (a última desenhada fica por cima).

        Args:
            pdf_bytes: PDF original.
            annotations: Lista ordenada de anotações.

        Returns:
            RenderResult com o PDF serializado e as marcas desenhadas.

        Raises:
            SourceFetchFailed: se os bytes não forem um PDF legível.
        """
        ...
