from .document import Document, get_draft_id, get_published_id
from .redirect import Redirect
from .translation_group import TranslationGroup, TranslationGroupEntry

__all__ = [
    "Document",
    "Redirect",
    "TranslationGroup",
    "TranslationGroupEntry",
    "get_draft_id",
    "get_published_id",
]
