"""Admin panel state backed by the hosted tables."""

from __future__ import annotations

import logging
from typing import List, Optional

from .catalog import find_product
from .models import Product
from .remote import SupabaseClient

logger = logging.getLogger(__name__)


class AdminCatalog:
    """Products and category names as last confirmed by the remote tables.

    Mutations wait for the remote call and then reload; local state is only
    replaced after a successful round trip. A :class:`RequestFailed` leaves it
    untouched.
    """

    def __init__(self, client: SupabaseClient) -> None:
        self.client = client
        self.products: List[Product] = []
        self.category_names: List[str] = []

    def refresh(self) -> None:
        products = self.client.fetch_products()
        category_names = self.client.fetch_category_names()
        self.products = products
        self.category_names = category_names

    def save_product(self, product: Product) -> Product:
        record = product.as_record()
        if product.id and find_product(self.products, product.id) is not None:
            changes = {key: value for key, value in record.items() if key != "id"}
            saved = self.client.update_product(product.id, changes)
        else:
            if not product.id:
                record.pop("id")
            saved = self.client.insert_product(record)
        logger.info("Saved product %s", saved.id or saved.name)
        self.refresh()
        return saved

    def delete_product(self, product_id: str) -> None:
        self.client.delete_product(product_id)
        logger.info("Deleted product %s", product_id)
        self.refresh()

    def add_category(self, name: str) -> None:
        name = name.strip()
        if not name:
            raise ValueError("Category name must not be blank.")
        self.client.insert_category(name)
        self.refresh()

    def product(self, product_id: str) -> Optional[Product]:
        return find_product(self.products, product_id)
