"""Category index derived from a flat product list."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional

from .models import Category, Product
from .utils import slugify, split_words

DEFAULT_NAME_EXCEPTIONS: Dict[str, str] = {
    "cooking-essential-oils": "Cooking Essential Oils",
}


class CategoryOrder(str, Enum):
    ALPHABETICAL = "alphabetical"
    FIRST_SEEN = "first-seen"


def format_category_name(
    label: str,
    exceptions: Optional[Mapping[str, str]] = None,
    *,
    conjunction: str = "&",
) -> str:
    """Return the display name for a category label.

    ``"spices-seasonings"`` becomes ``"Spices & Seasonings"``: labels of exactly
    two words are joined with ``conjunction``, longer ones with spaces. Labels
    whose slug appears in ``exceptions`` use the mapped name verbatim. Labels
    that already contain spaces are names, not slugs, and come back as given.
    """

    table = DEFAULT_NAME_EXCEPTIONS if exceptions is None else exceptions
    override = table.get(slugify(label))
    if override:
        return override

    label = (label or "").strip()
    if any(char.isspace() for char in label):
        return label

    words = [word[:1].upper() + word[1:] for word in split_words(label)]
    if len(words) == 2:
        return f"{words[0]} {conjunction} {words[1]}"
    return " ".join(words)


def build_categories(
    products: Optional[Iterable[Product]],
    order: CategoryOrder = CategoryOrder.ALPHABETICAL,
    exceptions: Optional[Mapping[str, str]] = None,
) -> List[Category]:
    """Return one category per distinct slug found in ``products``."""

    first_seen: Dict[str, Product] = {}
    for product in products or ():
        first_seen.setdefault(slugify(product.category), product)

    slugs = list(first_seen)
    if order == CategoryOrder.ALPHABETICAL:
        slugs.sort()

    categories: List[Category] = []
    for index, slug in enumerate(slugs, start=1):
        product = first_seen[slug]
        name = format_category_name(product.category, exceptions)
        categories.append(
            Category(
                id=str(index),
                name=name,
                slug=slug,
                image=product.image,
                description=f"{name} products",
            )
        )
    return categories


def products_in_category(products: Optional[Iterable[Product]], slug: str) -> List[Product]:
    return [product for product in products or () if slugify(product.category) == slug]


def find_product(products: Optional[Iterable[Product]], product_id: str) -> Optional[Product]:
    for product in products or ():
        if product.id == product_id:
            return product
    return None


def featured_products(products: Optional[Iterable[Product]]) -> List[Product]:
    return [product for product in products or () if product.featured]
