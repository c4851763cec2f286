"""Tests for burning annotations into PDFs (pypdf + reportlab).

Tests cover:
- Placement in PDF space for text, date stamp and images
- Per-item skips (missing page, bad image) without aborting the batch
- Input bytes left untouched, untargeted pages copied as-is
- Draw order follows input order; non-WinAnsi text is reported
"""

from __future__ import annotations

import io
import logging
import os
import warnings

import pytest
import reportlab
from pypdf import PdfReader

from docsign.core.entities.annotation import Annotation, AnnotationKind
from docsign.core.errors import SourceFetchFailed
from docsign.infrastructure.pdf.reportlab_renderer import ReportLabAnnotationRenderer, format_stamp_date

from samples import PAGE_HEIGHT, STAMP_DAY, image_data_uri, make_pdf

RENDERER_LOGGER = "docsign.infrastructure.pdf.reportlab_renderer"
VERA_TTF = os.path.join(os.path.dirname(reportlab.__file__), "fonts", "Vera.ttf")


def text(content: str | None, x: float = 100, y: float = 150, page: int = 1) -> Annotation:
    return Annotation(kind=AnnotationKind.TEXT, content=content, x=x, y=y, page=page)


def image(content: str, x: float = 50, y: float = 100, page: int = 1) -> Annotation:
    return Annotation(kind=AnnotationKind.IMAGE, content=content, x=x, y=y, page=page)


def page_text(pdf_bytes: bytes, page_index: int) -> str:
    return PdfReader(io.BytesIO(pdf_bytes)).pages[page_index].extract_text() or ""


class TestPlacement:
    def test_text_and_date_offsets(self, renderer: ReportLabAnnotationRenderer) -> None:
        """Text at UI (100, 150) on an 800-high page: baseline 630, date 610."""
        result = renderer.render(make_pdf(), [text("Jane Doe")])

        text_mark, date_mark = result.marks
        assert (text_mark.kind, text_mark.x, text_mark.y) == ("text", 100, 630)
        assert (date_mark.kind, date_mark.x, date_mark.y) == ("date", 100, 610)
        assert date_mark.text == "Date: 3/7/2026"

    def test_text_is_in_output(self, renderer: ReportLabAnnotationRenderer) -> None:
        result = renderer.render(make_pdf(), [text("Jane Doe")])

        extracted = page_text(result.pdf_bytes, 0)
        assert "Jane Doe" in extracted
        assert "Date: 3/7/2026" in extracted

    def test_image_bottom_left(self, renderer: ReportLabAnnotationRenderer) -> None:
        """A 100x60 image at half scale dropped at UI (50, 100) spans y 670..700."""
        result = renderer.render(make_pdf(), [image(image_data_uri("PNG", size=(100, 60)))])

        (mark,) = result.marks
        assert mark.kind == "image"
        assert (mark.x, mark.y) == (50, PAGE_HEIGHT - 100 - 30)
        assert (mark.width, mark.height) == (50, 30)

    def test_marks_target_requested_page(self, renderer: ReportLabAnnotationRenderer) -> None:
        result = renderer.render(make_pdf(num_pages=2), [text("Second page only", page=2)])

        assert {m.page for m in result.marks} == {2}
        assert "Second page only" in page_text(result.pdf_bytes, 1)
        assert "Second page only" not in page_text(result.pdf_bytes, 0)


class TestSkips:
    def test_missing_page_is_skipped(self, renderer: ReportLabAnnotationRenderer) -> None:
        """One annotation on page 99 of a 2-page PDF: the other two still apply."""
        annotations = [text("First", page=1), text("Lost", page=99), text("Second", page=2)]

        result = renderer.render(make_pdf(num_pages=2), annotations)

        assert result.page_count == 2
        assert result.applied_count == 2
        assert [(s.index, s.reason) for s in result.skipped] == [(1, "PAGE_NOT_FOUND")]

    def test_bad_image_is_skipped(self, renderer: ReportLabAnnotationRenderer) -> None:
        annotations = [
            image(image_data_uri("JPEG", mime="image/png")),
            text("Still here"),
        ]

        result = renderer.render(make_pdf(), annotations)

        assert [(s.index, s.reason) for s in result.skipped] == [(0, "UNSUPPORTED_IMAGE")]
        assert result.applied_count == 1
        assert "Still here" in page_text(result.pdf_bytes, 0)

    def test_empty_content_is_skipped(self, renderer: ReportLabAnnotationRenderer) -> None:
        result = renderer.render(make_pdf(), [text("")])

        assert result.marks == []
        assert [s.reason for s in result.skipped] == ["EMPTY_CONTENT"]


class TestDocumentIntegrity:
    def test_no_annotations_keeps_pages(self, renderer: ReportLabAnnotationRenderer) -> None:
        result = renderer.render(make_pdf(num_pages=3), [])

        assert result.page_count == 3
        assert len(PdfReader(io.BytesIO(result.pdf_bytes)).pages) == 3
        assert result.marks == []

    def test_input_bytes_unchanged(self, renderer: ReportLabAnnotationRenderer) -> None:
        source = make_pdf()
        snapshot = bytes(source)

        renderer.render(source, [text("Jane Doe")])

        assert source == snapshot

    def test_no_pypdf_deprecations(self, renderer: ReportLabAnnotationRenderer) -> None:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            renderer.render(make_pdf(), [text("Jane Doe"), text("Page two", page=2)])

        deprecations = [
            str(w.message) for w in caught
            if issubclass(w.category, DeprecationWarning) and "pypdf" in f"{w.filename} {w.message}"
        ]
        assert deprecations == []

    def test_unreadable_source(self, renderer: ReportLabAnnotationRenderer) -> None:
        with pytest.raises(SourceFetchFailed):
            renderer.render(b"definitely not a pdf", [text("x")])


class TestOrdering:
    def test_same_spot_keeps_input_order(self, renderer: ReportLabAnnotationRenderer) -> None:
        """Two marks on one spot: the later one is drawn after (on top of) the earlier."""
        result = renderer.render(make_pdf(), [text("First"), text("Second")])

        assert [(m.annotation_index, m.kind) for m in result.marks] == [
            (0, "text"), (0, "date"), (1, "text"), (1, "date"),
        ]
        assert {(m.x, m.y) for m in result.marks if m.kind == "text"} == {(100, 630)}

        content = PdfReader(io.BytesIO(result.pdf_bytes)).pages[0].get_contents().get_data()
        assert b"(First)" in content
        assert content.index(b"(First)") < content.index(b"(Second)")


class TestFonts:
    def test_unencodable_text_is_reported(
        self, renderer: ReportLabAnnotationRenderer, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger=RENDERER_LOGGER):
            result = renderer.render(make_pdf(), [text("Zoë 漢字 Łukasz")])

        assert result.applied_count == 1
        assert "cannot draw" in caplog.text

    def test_latin_text_is_not_reported(
        self, renderer: ReportLabAnnotationRenderer, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger=RENDERER_LOGGER):
            renderer.render(make_pdf(), [text("Zoë Müller")])

        assert "cannot draw" not in caplog.text

    def test_truetype_font(self, caplog: pytest.LogCaptureFixture) -> None:
        renderer = ReportLabAnnotationRenderer(
            font_name="DocSignVera", font_path=VERA_TTF, today=lambda: STAMP_DAY
        )

        with caplog.at_level(logging.WARNING, logger=RENDERER_LOGGER):
            result = renderer.render(make_pdf(), [text("Ω ≠ π")])

        assert result.applied_count == 1
        assert "cannot draw" not in caplog.text
        assert len(PdfReader(io.BytesIO(result.pdf_bytes)).pages) == 2


class TestStampDate:
    @pytest.mark.parametrize(
        "day, expected",
        [((2026, 3, 7), "3/7/2026"), ((2025, 12, 31), "12/31/2025")],
    )
    def test_format(self, day: tuple[int, int, int], expected: str) -> None:
        from datetime import date

        assert format_stamp_date(date(*day)) == expected
