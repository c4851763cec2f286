"""
Image Embedder — data URI → drawable reportlab image.

Decodes a base64 data URI, checks the payload against the declared MIME type
(PNG when declared as image/png, JPEG otherwise) and returns a reusable
ImageReader plus the post-scale layout size.
"""

import base64
import binascii
import hashlib
import io
import logging
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError
from reportlab.lib.utils import ImageReader

from docsign.core.errors import UnsupportedImageFormat

logger = logging.getLogger(__name__)

DEFAULT_SCALE = 0.5


@dataclass
class EmbeddedImage:
    """Drawable image resource + size in PDF points after scaling."""
    resource: ImageReader
    width: float
    height: float
    format: str


def split_data_uri(data_uri: str) -> tuple[str, bytes]:
    """Return (mime_type, raw_bytes) for a `data:<mime>;base64,<payload>` URI."""
    if not data_uri or not data_uri.startswith("data:") or "," not in data_uri:
        raise UnsupportedImageFormat("Image content is not a data URI")

    header, payload = data_uri.split(",", 1)
    mime = header[len("data:"):].split(";", 1)[0].strip().lower()
    if ";base64" not in header:
        raise UnsupportedImageFormat(f"Data URI for {mime or 'unknown'} is not base64-encoded")

    try:
        raw = base64.b64decode(payload, validate=False)
    except (binascii.Error, ValueError) as e:
        raise UnsupportedImageFormat(f"Invalid base64 payload: {e}") from e
    if not raw:
        raise UnsupportedImageFormat("Empty image payload")
    return mime, raw


class ImageEmbedder:
    """
    Embeds signature images for one render pass.

    Identical payloads are decoded once and the same resource is handed back,
    so reportlab writes a single image XObject per distinct signature.
    """

    def __init__(self, scale: float = DEFAULT_SCALE):
        self._scale = scale
        self._cache: dict[str, EmbeddedImage] = {}

    def embed(self, data_uri: str) -> EmbeddedImage:
        """
        Decode + validate + register an image.

        Raises:
            UnsupportedImageFormat: not a data URI, bad base64, or neither PNG nor JPEG.
        """
        mime, raw = split_data_uri(data_uri)

        digest = hashlib.sha256(mime.encode("utf-8") + b"\0" + raw).hexdigest()
        cached = self._cache.get(digest)
        if cached is not None:
            return cached

        expected = "PNG" if mime == "image/png" else "JPEG"
        try:
            image = Image.open(io.BytesIO(raw))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise UnsupportedImageFormat(f"Cannot decode {mime or 'image'} payload: {e}") from e

        if image.format != expected:
            raise UnsupportedImageFormat(
                f"Declared {mime or 'unknown'} but payload is {image.format or 'unknown'}; expected {expected}"
            )

        embedded = EmbeddedImage(
            resource=ImageReader(image),
            width=image.width * self._scale,
            height=image.height * self._scale,
            format=expected,
        )
        self._cache[digest] = embedded
        logger.debug(f"Embedded {expected} image {image.width}x{image.height} (scale={self._scale})")
        return embedded
