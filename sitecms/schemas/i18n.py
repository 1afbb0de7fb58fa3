from pydantic import BaseModel


class LanguageInfo(BaseModel):
    code: str
    name: str
    native_name: str
    direction: str
    is_rtl: bool
    is_default: bool = False


class SwitchTargetResponse(BaseModel):
    path: str
    locale: str
    href: str | None
    has_translation: bool


class SwitcherOptionResponse(BaseModel):
    locale: str
    href: str
    label: str
    has_translation: bool
    is_active: bool


class CollectionItemResponse(BaseModel):
    document_id: str
    title: str
    slug: str | None
    path: str | None = None
    order_rank: str | None
    effective_order: str | None


class RedirectResponse(BaseModel):
    source: str
    destination: str
    permanent: bool


class MigrationReportResponse(BaseModel):
    source_locale: str
    target_locale: str
    dry_run: bool
    processed: int
    created: int
    skipped: int
    errors: int
    messages: list[str]
