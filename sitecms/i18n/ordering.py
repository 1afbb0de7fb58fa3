"""
Effective ordering for manually ranked collections.

Reordering a collection only rewrites the rank of the document that was
moved; its locale siblings keep their old value. Every read that sorts a
locale-filtered collection therefore uses the default-locale sibling's rank
when it exists and is set, and the document's own rank otherwise.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Union

from sitecms.i18n.locale_config import DEFAULT_LOCALE_CONFIG, LocaleConfig
from sitecms.i18n.locale_map import LocalizedRecord, OrderValue, TranslationItem

Ranked = Union[LocalizedRecord, TranslationItem]


def effective_order(
    item: Ranked,
    siblings: Iterable[TranslationItem] = (),
    config: LocaleConfig | None = None,
) -> OrderValue:
    """Rank used for sorting ``item`` within its locale's collection."""
    config = config or DEFAULT_LOCALE_CONFIG
    if item.locale != config.default_locale:
        base = next((s for s in siblings if s.locale == config.default_locale), None)
        if base is not None and base.order_rank is not None:
            return base.order_rank
    return item.order_rank


def rank_key(rank: OrderValue) -> tuple:
    """Comparable form of a rank.

    Numbers compare numerically and sort before strings. Strings are
    lexorank-style keys and compare lexically, so "10" sorts before "9".
    Unranked documents go last.
    """
    if rank is None:
        return (2, 0, "")
    if isinstance(rank, str):
        return (1, 0, rank)
    return (0, rank, "")


def sort_key(rank: OrderValue, title: str, document_id: str) -> tuple:
    # title and id keep ties deterministic
    return (rank_key(rank), title.casefold(), document_id)


def sort_by_effective_order(
    records: Iterable[LocalizedRecord],
    config: LocaleConfig | None = None,
) -> list[LocalizedRecord]:
    """Sort records by their effective rank, siblings taken from ``record.translations``."""
    config = config or DEFAULT_LOCALE_CONFIG
    return sorted(
        records,
        key=lambda r: sort_key(effective_order(r, r.translations, config), r.title, r.document_id),
    )
