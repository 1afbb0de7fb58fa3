import re

from unidecode import unidecode

from sitecms.i18n.content_types import ContentType

# Types whose slug is fixed regardless of the title
FIXED_SLUGS = {
    ContentType.HOME_PAGE: "/",
    ContentType.ARTICLE_INDEX: "/blog",
}


def slugify(text):
    if not text or not isinstance(text, str):
        raise ValueError("slugify() requires a non-empty string")
    slug = unidecode(text).lower()
    slug = re.sub(r'[^a-z0-9]+', '-', slug).strip('-')
    if not slug:
        raise ValueError(f"Cannot build a slug from {text!r}")
    return slug


def generate_slug(title, doc_type):
    """Slug suggested for a new document of ``doc_type`` titled ``title``."""
    content_type = ContentType(doc_type)
    if content_type in FIXED_SLUGS:
        return FIXED_SLUGS[content_type]
    return slugify(title)
