"""Tests for data URI decoding and image validation."""

from __future__ import annotations

import pytest

from docsign.core.errors import UnsupportedImageFormat
from docsign.infrastructure.pdf.image_embedder import ImageEmbedder, split_data_uri

from samples import image_data_uri


class TestSplitDataUri:
    def test_returns_mime_and_bytes(self) -> None:
        mime, raw = split_data_uri(image_data_uri("PNG"))

        assert mime == "image/png"
        assert raw.startswith(b"\x89PNG")

    @pytest.mark.parametrize("value", ["", "hello", "data:image/png,abc", "data:image/png;base64,"])
    def test_rejects_malformed(self, value: str) -> None:
        with pytest.raises(UnsupportedImageFormat):
            split_data_uri(value)


class TestImageEmbedder:
    def test_png_is_scaled(self) -> None:
        """Layout size is the pixel size times the scale factor."""
        image = ImageEmbedder(scale=0.5).embed(image_data_uri("PNG", size=(100, 60)))

        assert image.format == "PNG"
        assert (image.width, image.height) == (50, 30)

    def test_jpeg_accepted(self) -> None:
        image = ImageEmbedder(scale=1.0).embed(image_data_uri("JPEG", size=(40, 20), mime="image/jpeg"))

        assert image.format == "JPEG"
        assert (image.width, image.height) == (40, 20)

    def test_declared_png_with_jpeg_payload_rejected(self) -> None:
        with pytest.raises(UnsupportedImageFormat):
            ImageEmbedder().embed(image_data_uri("JPEG", mime="image/png"))

    def test_other_formats_rejected(self) -> None:
        """Anything not declared as PNG must decode as JPEG."""
        with pytest.raises(UnsupportedImageFormat):
            ImageEmbedder().embed(image_data_uri("GIF"))

    def test_undecodable_payload_rejected(self) -> None:
        with pytest.raises(UnsupportedImageFormat):
            ImageEmbedder().embed("data:image/png;base64,bm90IGFuIGltYWdl")

    def test_same_payload_decoded_once(self) -> None:
        embedder = ImageEmbedder()
        uri = image_data_uri("PNG")

        assert embedder.embed(uri) is embedder.embed(uri)
