from .documents import (
    DocumentCreate,
    DocumentResponse,
    DocumentUpdate,
    DocumentVariant,
    document_create_adapter,
)

__all__ = [
    "DocumentCreate",
    "DocumentResponse",
    "DocumentUpdate",
    "DocumentVariant",
    "document_create_adapter",
]
