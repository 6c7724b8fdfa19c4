"""Catalog Ordering — products sorted by category rank, then by name."""

from typing import Any, Iterable

from backoffice.core.domain_types import ProductCategory

_CATEGORY_RANK = {c.value: rank for rank, c in enumerate(ProductCategory)}


def category_rank(category: str | None) -> int:
    if not category:
        return len(_CATEGORY_RANK)
    return _CATEGORY_RANK.get(category.upper(), len(_CATEGORY_RANK))


def sort_catalog(products: Iterable[Any]) -> list[Any]:
    return sorted(
        products,
        key=lambda p: (category_rank(p.category), (p.name or "").casefold()),
    )
