from __future__ import annotations

from osari_catalog.catalog import (
    CategoryOrder,
    build_categories,
    featured_products,
    find_product,
    format_category_name,
    products_in_category,
)
from osari_catalog.models import Product
from osari_catalog.utils import slugify


def _product(pid: str, category: str, name: str = "Item") -> Product:
    return Product(id=pid, name=name, category=category, image=f"/img/{pid}.jpg")


def test_slugify_collapses_separator_runs() -> None:
    assert slugify("Spices & Seasonings") == "spices-seasonings"
    assert slugify("  Tea  ") == "tea"
    assert slugify("grains--sides") == "grains-sides"
    assert slugify("") == "uncategorized"
    assert slugify(None) == "uncategorized"


def test_format_category_name() -> None:
    assert format_category_name("cooking-essential-oils") == "Cooking Essential Oils"
    assert format_category_name("grains-sides") == "Grains & Sides"
    assert format_category_name("spices-seasonings") == "Spices & Seasonings"
    assert format_category_name("tea") == "Tea"
    assert format_category_name("") == ""


def test_format_category_name_uses_exception_table_and_conjunction() -> None:
    exceptions = {"drink-desserts": "Drinks & Desserts", "bbq-sauces": "BBQ Sauces"}

    assert format_category_name("drink-desserts", exceptions) == "Drinks & Desserts"
    assert format_category_name("BBQ Sauces", exceptions) == "BBQ Sauces"
    assert format_category_name("sauces-dips", exceptions, conjunction="and") == "Sauces and Dips"


def test_build_categories_alphabetical_by_default(products) -> None:
    categories = build_categories(products)

    assert [cat.slug for cat in categories] == [
        "cooking-essential-oils",
        "grains-sides",
        "spices-seasonings",
        "tea",
    ]
    assert [cat.id for cat in categories] == ["1", "2", "3", "4"]
    tea = categories[-1]
    assert tea.name == "Tea"
    assert tea.image == "/images/green-tea.jpg"
    assert tea.description == "Tea products"


def test_build_categories_first_seen_order(products) -> None:
    categories = build_categories(products, order=CategoryOrder.FIRST_SEEN)

    assert [cat.slug for cat in categories] == [
        "grains-sides",
        "tea",
        "spices-seasonings",
        "cooking-essential-oils",
    ]


def test_build_categories_has_unique_reachable_slugs(products) -> None:
    slugs = [cat.slug for cat in build_categories(products)]

    assert len(slugs) == len(set(slugs))
    product_slugs = {slugify(product.category) for product in products}
    assert set(slugs) == product_slugs


def test_colliding_labels_share_one_category() -> None:
    items = [_product("1", "Sauces & Dips"), _product("2", "sauces-dips")]

    categories = build_categories(items)

    assert len(categories) == 1
    assert categories[0].slug == "sauces-dips"
    assert categories[0].name == "Sauces & Dips"
    assert categories[0].image == "/img/1.jpg"


def test_absent_inputs_are_empty() -> None:
    assert build_categories(None) == []
    assert products_in_category(None, "tea") == []
    assert find_product(None, "1") is None
    assert featured_products(None) == []


def test_lookups(products) -> None:
    assert [p.id for p in products_in_category(products, "tea")] == ["2", "4"]
    assert find_product(products, "3").name == "Cumin Powder"
    assert find_product(products, "missing") is None
    assert [p.id for p in featured_products(products)] == ["5"]


def test_labels_with_spaces_keep_their_wording() -> None:
    assert format_category_name("Green Tea") == "Green Tea"
    assert format_category_name("Nuts, Seeds") == "Nuts, Seeds"
    assert format_category_name("  Dry Fruits ") == "Dry Fruits"

    categories = build_categories([_product("1", "Dry Fruits")])

    assert categories[0].name == "Dry Fruits"
    assert categories[0].slug == "dry-fruits"
    assert categories[0].description == "Dry Fruits products"


def test_underscore_labels_are_formatted_like_slugs() -> None:
    assert format_category_name("sauces_dips") == "Sauces & Dips"
