"""
Adapter: MinIO Storage Service

Implementação concreta do contrato IBlobStore
usando MinIO (compatível com API S3) via boto3.
"""

import hashlib
import logging
import uuid

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from werkzeug.utils import secure_filename

from docsign.core.errors import BlobNotFound, StorageFailure
from docsign.core.interfaces.storage_service import IBlobStore, StoredBlob

logger = logging.getLogger(__name__)


class MinIOBlobStore(IBlobStore):
    """
    Storage de artefatos usando MinIO.

    Em produção, trocar por S3 real sem mudar nenhum
    outro código — só muda as credenciais de conexão.
    """

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        secret_key: str,
        bucket: str,
        public_url: str = "",
        secure: bool = False,
        client=None,
    ):
        self._bucket = bucket
        self._endpoint = endpoint.rstrip("/")
        self._public_url = (public_url or self._endpoint).rstrip("/")
        self._client = client or boto3.client(
            "s3",
            endpoint_url=self._endpoint,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            use_ssl=secure,
            config=Config(signature_version="s3v4", s3={"addressing_style": "path"}),
        )

    @property
    def _url_prefix(self) -> str:
        return f"{self._public_url}/{self._bucket}/"

    def ensure_bucket(self) -> None:
        """Create the bucket if it does not exist yet."""
        try:
            self._client.head_bucket(Bucket=self._bucket)
        except ClientError:
            try:
                self._client.create_bucket(Bucket=self._bucket)
                logger.info(f"Created bucket {self._bucket}")
            except (ClientError, BotoCoreError) as e:
                raise StorageFailure(f"Could not create bucket {self._bucket}: {e}") from e

    def put(self, data: bytes, folder: str, filename: str = "document.pdf",
            content_type: str = "application/pdf") -> StoredBlob:
        key = f"{folder.strip('/')}/{uuid.uuid4().hex}-{secure_filename(filename) or 'document.pdf'}"
        try:
            self._client.put_object(Bucket=self._bucket, Key=key, Body=data, ContentType=content_type)
        except (ClientError, BotoCoreError) as e:
            raise StorageFailure(f"Upload of {key} failed: {e}") from e

        logger.info(f"Uploaded s3://{self._bucket}/{key} ({len(data)} bytes)")
        return StoredBlob(
            id=key,
            url=self._url_prefix + key,
            size_bytes=len(data),
            sha256=hashlib.sha256(data).hexdigest(),
            content_type=content_type,
        )

    def get(self, url: str) -> bytes:
        key = url[len(self._url_prefix):] if url.startswith(self._url_prefix) else url
        try:
            obj = self._client.get_object(Bucket=self._bucket, Key=key)
            return obj["Body"].read()
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in ("NoSuchKey", "404", "NotFound"):
                raise BlobNotFound(f"No object {key}") from e
            raise StorageFailure(f"Download of {key} failed: {e}") from e
        except BotoCoreError as e:
            raise StorageFailure(f"Download of {key} failed: {e}") from e

    def delete(self, blob_id: str) -> None:
        try:
            self._client.delete_object(Bucket=self._bucket, Key=blob_id)
        except (ClientError, BotoCoreError) as e:
            raise StorageFailure(f"Delete of {blob_id} failed: {e}") from e
        logger.info(f"Deleted s3://{self._bucket}/{blob_id}")
