"""
Contract: Document Repository

Record store transacional de documentos, chaveado pelo id.
"""

from abc import ABC, abstractmethod

from docsign.core.entities.document import Document


class IDocumentRepository(ABC):
    """
    Port: Document Repository

    Implementação pode ser SQLAlchemy (SQLite/Postgres), memória, etc.
    """

    @abstractmethod
    def add(self, document: Document) -> Document:
        """Persiste um documento novo."""
        ...

    @abstractmethod
    def get(self, document_id: str) -> Document | None:
        """Busca por id; None se não existir."""
        ...

    @abstractmethod
    def update(self, document: Document) -> Document:
        """
        Atualização atômica (status + ponteiros + grants) com checagem
        otimista: grava somente se a versão persistida for `document.version`.

        Returns:
            O documento com a versão incrementada.

        Raises:
            NotFound: documento removido.
            ConcurrentModification: versão divergente.
        """
        ...

    @abstractmethod
    def delete(self, document_id: str) -> None:
        """Remove o documento e seus grants."""
        ...

    @abstractmethod
    def list_by_owner(self, owner_id: str) -> list[Document]:
        """Documentos do dono, mais recentes primeiro."""
        ...

    @abstractmethod
    def list_shared_with(self, email: str) -> list[Document]:
        """Documentos com grant para o e-mail, mais recentes primeiro."""
        ...
