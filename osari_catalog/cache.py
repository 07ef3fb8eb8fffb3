"""Persisted product list cache seeded from the bundled dataset."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .constants import PRODUCTS_KEY
from .models import Product, products_from_records
from .storage import Storage, read_json, write_json

logger = logging.getLogger(__name__)

SEED_FILE = Path(__file__).parent / "data" / "products.json"


def load_seed_products(path: Path | str = SEED_FILE) -> List[Product]:
    """Return the products of a JSON seed file."""

    with Path(path).open(encoding="utf-8") as handle:
        return products_from_records(json.load(handle))


class ProductCache:
    """Product list kept in storage so local edits survive a reload."""

    def __init__(
        self,
        storage: Storage,
        seed: Optional[Sequence[Product]] = None,
        key: str = PRODUCTS_KEY,
    ) -> None:
        self.storage = storage
        self.key = key
        self._seed = list(seed) if seed is not None else None

    @property
    def seed(self) -> List[Product]:
        if self._seed is None:
            self._seed = load_seed_products()
        return list(self._seed)

    def load(self) -> List[Product]:
        """Return the cached products, seeding the cache when it is empty."""

        if self.storage.get_item(self.key) is None:
            products = self.seed
            self._save(products)
            return products

        data = read_json(self.storage, self.key)
        if not isinstance(data, list):
            logger.warning("Product cache under %r is unreadable, using seed data", self.key)
            return self.seed
        return products_from_records(data)

    def add(self, product: Product) -> List[Product]:
        products = self.load() + [product]
        self._save(products)
        return products

    def update(self, product: Product) -> List[Product]:
        products = [product if item.id == product.id else item for item in self.load()]
        self._save(products)
        return products

    def delete(self, product_id: str) -> List[Product]:
        products = [item for item in self.load() if item.id != product_id]
        self._save(products)
        return products

    def _save(self, products: Sequence[Product]) -> None:
        write_json(self.storage, self.key, [product.as_record() for product in products])
