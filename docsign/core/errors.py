"""
Domain errors.

Taxonomia de falhas do domínio. A camada de API traduz cada uma
para um status HTTP; o core nunca conhece HTTP.
"""


class DocSignError(Exception):
    """Base de todos os erros de domínio."""


class NotFound(DocSignError):
    """Documento (ou recurso) inexistente."""


class Unauthorized(DocSignError):
    """Ator sem propriedade ou permissão sobre o documento."""


class InvalidToken(DocSignError):
    """Share token malformado, expirado ou com assinatura inválida."""


class UnsupportedImageFormat(DocSignError):
    """Imagem de anotação que não é PNG nem JPEG (falha por item, não fatal)."""


class SourceFetchFailed(DocSignError):
    """Não foi possível recuperar os bytes do PDF original."""


class StorageFailure(DocSignError):
    """Falha de upload/delete no blob store."""


class BlobNotFound(StorageFailure):
    """Objeto inexistente no blob store."""


class InvalidStateTransition(DocSignError):
    """Transição de status não permitida pelo ciclo de vida do documento."""


class ConcurrentModification(DocSignError):
    """O documento foi alterado por outra requisição (versão divergente)."""


class ValidationFailed(DocSignError):
    """Entrada inválida (e-mail ausente, arquivo que não é PDF...)."""
