"""
Adapter: ReportLab Annotation Renderer — pypdf + reportlab.

For every page that receives annotations a transparent reportlab overlay is
drawn (same page size, PDF coordinates) and merged on top of the original page
with pypdf. Pages without annotations are copied untouched.

Placement rules (UI drop point = top-left of the mark):
  - text:  baseline at (x, page_h - y - 20), date line at (x, page_h - y - 40)
  - image: bottom-left at (x, page_h - y - image_h)
"""

import io
import logging
from datetime import date
from typing import Callable

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from docsign.core.entities.annotation import Annotation, AnnotationKind
from docsign.core.errors import SourceFetchFailed, UnsupportedImageFormat
from docsign.core.interfaces.annotation_renderer import (
    IAnnotationRenderer,
    RenderedMark,
    RenderResult,
    SkippedAnnotation,
)
from docsign.infrastructure.pdf.coordinates import to_draw_y
from docsign.infrastructure.pdf.image_embedder import DEFAULT_SCALE, ImageEmbedder

logger = logging.getLogger(__name__)

TEXT_OFFSET = 20      # UI anchor → text baseline
DATE_OFFSET = 40      # UI anchor → date baseline
INK_BLUE = (0, 0, 1)
STANDARD_ENCODING = "cp1252"   # WinAnsi, used by the built-in Type 1 fonts


def format_stamp_date(day: date) -> str:
    """Short US-style date used on the visible stamp, e.g. 3/7/2026."""
    return f"{day.month}/{day.day}/{day.year}"


class _PageOverlay:
    """A reportlab canvas sized to one target page."""

    def __init__(self, page_width: float, page_height: float, left: float, bottom: float):
        self.buffer = io.BytesIO()
        # Canvas covers the full mediabox extent so pypdf's clip keeps every mark
        self.canvas = canvas.Canvas(self.buffer, pagesize=(left + page_width, bottom + page_height))
        self.canvas.translate(left, bottom)

    def finish(self):
        self.canvas.showPage()
        self.canvas.save()
        self.buffer.seek(0)
        return PdfReader(self.buffer).pages[0]


class ReportLabAnnotationRenderer(IAnnotationRenderer):
    """
    Burns annotations into a PDF.

    Deterministic for a fixed `today` callable; the input bytes are never modified.
    """

    def __init__(
        self,
        image_scale: float = DEFAULT_SCALE,
        font_name: str = "Helvetica",
        font_path: str | None = None,
        text_size: int = 20,
        date_size: int = 10,
        color: tuple[float, float, float] = INK_BLUE,
        today: Callable[[], date] = date.today,
    ):
        self._image_scale = image_scale
        self._font_name = font_name
        # A TrueType font covers any script; the built-in fonts only WinAnsi
        self._unicode_font = bool(font_path)
        if font_path:
            pdfmetrics.registerFont(TTFont(font_name, font_path))
            logger.info(f"Registered TrueType font {font_name} from {font_path}")
        self._text_size = text_size
        self._date_size = date_size
        self._color = color
        self._today = today

    @staticmethod
    def _load(pdf_bytes: bytes, clone: bool = False):
        """Parsed document (a writer copy when `clone`) and its page count."""
        try:
            reader = PdfReader(io.BytesIO(pdf_bytes))
            document = PdfWriter(clone_from=reader) if clone else reader
            return document, len(document.pages)
        except (PyPdfError, ValueError, KeyError, OSError) as e:
            raise SourceFetchFailed(f"Source is not a readable PDF: {e}") from e

    def count_pages(self, pdf_bytes: bytes) -> int:
        return self._load(pdf_bytes)[1]

    def _check_encoding(self, index: int, content: str) -> None:
        if self._unicode_font:
            return
        try:
            content.encode(STANDARD_ENCODING)
        except UnicodeEncodeError:
            logger.warning(
                f"Annotation #{index} has characters {self._font_name} cannot draw; "
                f"they will show as placeholders (configure text_font_path)"
            )

    def render(self, pdf_bytes: bytes, annotations: list[Annotation]) -> RenderResult:
        # Pages belong to the writer so overlays merge into writer-owned content
        writer, _ = self._load(pdf_bytes, clone=True)
        pages = writer.pages

        embedder = ImageEmbedder(scale=self._image_scale)
        overlays: dict[int, _PageOverlay] = {}
        marks: list[RenderedMark] = []
        skipped: list[SkippedAnnotation] = []
        stamp = f"Date: {format_stamp_date(self._today())}"

        for index, annotation in enumerate(annotations):
            page_index = annotation.page - 1
            if page_index < 0 or page_index >= len(pages):
                logger.warning(
                    f"Annotation #{index} targets page {annotation.page} of a {len(pages)}-page PDF, skipping"
                )
                skipped.append(SkippedAnnotation(index=index, reason="PAGE_NOT_FOUND"))
                continue

            if not annotation.content:
                logger.info(f"Annotation #{index} has no content, nothing to draw")
                skipped.append(SkippedAnnotation(index=index, reason="EMPTY_CONTENT"))
                continue

            page = pages[page_index]
            box = page.mediabox
            page_width, page_height = float(box.width), float(box.height)
            pdf_y = to_draw_y(page_height, annotation.y)

            overlay = overlays.get(page_index)
            if overlay is None:
                overlay = _PageOverlay(page_width, page_height, float(box.left), float(box.bottom))
                overlays[page_index] = overlay
            c = overlay.canvas

            if annotation.kind == AnnotationKind.IMAGE:
                try:
                    image = embedder.embed(annotation.content)
                except UnsupportedImageFormat as e:
                    logger.error(f"Failed to embed image for annotation #{index}: {e}")
                    skipped.append(SkippedAnnotation(index=index, reason="UNSUPPORTED_IMAGE"))
                    continue

                y = pdf_y - image.height
                c.drawImage(
                    image.resource, annotation.x, y,
                    width=image.width, height=image.height, mask="auto",
                )
                marks.append(RenderedMark(
                    annotation_index=index, kind="image", page=annotation.page,
                    x=annotation.x, y=y, width=image.width, height=image.height,
                ))
            else:
                self._check_encoding(index, annotation.content)
                c.setFillColorRGB(*self._color)

                text_y = pdf_y - TEXT_OFFSET
                c.setFont(self._font_name, self._text_size)
                c.drawString(annotation.x, text_y, annotation.content)
                marks.append(RenderedMark(
                    annotation_index=index, kind="text", page=annotation.page,
                    x=annotation.x, y=text_y,
                    width=stringWidth(annotation.content, self._font_name, self._text_size),
                    height=self._text_size, text=annotation.content,
                ))

                date_y = pdf_y - DATE_OFFSET
                c.setFont(self._font_name, self._date_size)
                c.drawString(annotation.x, date_y, stamp)
                marks.append(RenderedMark(
                    annotation_index=index, kind="date", page=annotation.page,
                    x=annotation.x, y=date_y,
                    width=stringWidth(stamp, self._font_name, self._date_size),
                    height=self._date_size, text=stamp,
                ))

        for page_index, overlay in overlays.items():
            pages[page_index].merge_page(overlay.finish())

        out = io.BytesIO()
        writer.write(out)

        logger.info(
            f"Rendered {len(marks)} marks from {len(annotations)} annotations "
            f"({len(skipped)} skipped) across {len(overlays)} pages"
        )
        return RenderResult(
            pdf_bytes=out.getvalue(),
            page_count=len(pages),
            marks=marks,
            skipped=skipped,
        )
