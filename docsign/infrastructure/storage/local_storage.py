"""
Adapter: Local Filesystem Blob Store

Zero-setup IBlobStore for local dev and tests. Files live under
`<base_dir>/<folder>/<uuid>-<filename>` and are served by the API
under `/files/<id>`.
"""

import hashlib
import logging
import uuid
from pathlib import Path

from werkzeug.utils import secure_filename

from docsign.core.errors import BlobNotFound, StorageFailure
from docsign.core.interfaces.storage_service import IBlobStore, StoredBlob

logger = logging.getLogger(__name__)

FILES_ROUTE = "/files"


class LocalBlobStore(IBlobStore):
    """Stores artifacts on disk; the blob id is the path relative to base_dir."""

    def __init__(self, base_dir: str | Path, public_base_url: str = "http://localhost:8000"):
        self._base_dir = Path(base_dir).resolve()
        self._base_dir.mkdir(parents=True, exist_ok=True)
        self._url_prefix = public_base_url.rstrip("/") + FILES_ROUTE + "/"

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _resolve(self, blob_id: str) -> Path:
        path = (self._base_dir / blob_id).resolve()
        if self._base_dir not in path.parents:
            raise StorageFailure(f"Blob id escapes storage root: {blob_id!r}")
        return path

    def put(self, data: bytes, folder: str, filename: str = "document.pdf",
            content_type: str = "application/pdf") -> StoredBlob:
        safe_name = secure_filename(filename) or "document.pdf"
        blob_id = f"{secure_filename(folder) or 'misc'}/{uuid.uuid4().hex}-{safe_name}"
        path = self._resolve(blob_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise StorageFailure(f"Could not write {blob_id}: {e}") from e

        logger.info(f"Stored {blob_id} ({len(data)} bytes)")
        return StoredBlob(
            id=blob_id,
            url=self._url_prefix + blob_id,
            size_bytes=len(data),
            sha256=hashlib.sha256(data).hexdigest(),
            content_type=content_type,
        )

    def get(self, url: str) -> bytes:
        if url.startswith(self._url_prefix):
            blob_id = url[len(self._url_prefix):]
        elif "://" not in url:
            blob_id = url
        else:
            raise BlobNotFound(f"URL is not served by this store: {url}")

        path = self._resolve(blob_id)
        if not path.is_file():
            raise BlobNotFound(f"No blob at {blob_id}")
        try:
            return path.read_bytes()
        except OSError as e:
            raise StorageFailure(f"Could not read {blob_id}: {e}") from e

    def delete(self, blob_id: str) -> None:
        path = self._resolve(blob_id)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageFailure(f"Could not delete {blob_id}: {e}") from e
        logger.info(f"Deleted {blob_id}")
