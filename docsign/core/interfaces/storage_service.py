"""
Contract: Blob Store

Gerencia upload/download de artefatos PDF (original e assinado)
em object storage (MinIO/S3/local filesystem).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class StoredBlob:
    """Referência a um arquivo armazenado."""
    id: str               # identificador opaco (usado no delete)
    url: str              # endereço de leitura (usado no get)
    size_bytes: int
    sha256: str
    content_type: str = "application/pdf"


class IBlobStore(ABC):
    """
    Port: Blob Store

    Gerencia persistência de artefatos binários.
    Implementação pode ser MinIO, S3, filesystem local, etc.
    """

    @abstractmethod
    def put(self, data: bytes, folder: str, filename: str = "document.pdf",
            content_type: str = "application/pdf") -> StoredBlob:
        """
        Faz upload de um arquivo.

        Args:
            data: Conteúdo em bytes.
            folder: Pasta lógica (uploads, signed).
            filename: Nome sugerido; a chave final é sempre única.
            content_type: MIME type.

        Returns:
            StoredBlob com id, url e hash.

        Raises:
            StorageFailure: se o upload não for confirmado.
        """
        ...

    @abstractmethod
    def get(self, url: str) -> bytes:
        """
        Baixa um arquivo pelo url devolvido em put().

        Raises:
            BlobNotFound: objeto inexistente.
            StorageFailure: demais falhas do backend.
        """
        ...

    @abstractmethod
    def delete(self, blob_id: str) -> None:
        """
        Remove um arquivo. Chamadores tratam falhas como não fatais.

        Raises:
            StorageFailure: se o backend recusar a remoção.
        """
        ...
