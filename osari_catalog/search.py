"""Search and grouping of products for the catalog view."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Union

from .catalog import build_categories
from .models import Category, Product
from .utils import slugify

CategoryRef = Union[Category, str]


def matches_query(product: Product, query: str | None) -> bool:
    """Return whether ``product`` matches the free text ``query``."""

    term = (query or "").strip().lower()
    if not term:
        return True
    if term in (product.name or "").lower():
        return True
    return term in (product.description or "").lower()


def filter_products(products: Optional[Iterable[Product]], query: str | None) -> List[Product]:
    return [product for product in products or () if matches_query(product, query)]


def group_by_category(products: Optional[Iterable[Product]]) -> Dict[str, List[Product]]:
    """Partition products by category slug, keeping source order inside a group."""

    grouped: Dict[str, List[Product]] = {}
    for product in products or ():
        grouped.setdefault(slugify(product.category), []).append(product)
    return grouped


def filter_and_group(
    products: Optional[Iterable[Product]],
    query: str | None,
    categories: Optional[Sequence[CategoryRef]] = None,
) -> Dict[str, List[Product]]:
    """Return the catalog view: category slug to matching products.

    Groups follow the order of ``categories``; groups for slugs the caller did
    not list are appended in the order they were first seen. Empty groups are
    omitted. When ``categories`` is ``None`` the default category index order
    is used.
    """

    products = list(products or ())
    if categories is None:
        categories = build_categories(products)

    grouped = group_by_category(filter_products(products, query))

    view: Dict[str, List[Product]] = {}
    for ref in categories:
        slug = ref.slug if isinstance(ref, Category) else slugify(ref)
        if slug in grouped and slug not in view:
            view[slug] = grouped[slug]
    for slug, items in grouped.items():
        if slug not in view:
            view[slug] = items
    return view
