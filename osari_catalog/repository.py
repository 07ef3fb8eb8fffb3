"""JSON file product store.

Each operation reads the whole file, applies its change and writes the file
back. There is no locking and no transaction: concurrent writers overwrite each
other.
"""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Mapping

from .models import Product, products_from_records

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("name", "category")


class ProductNotFound(LookupError):
    """Raised when no product carries the requested identifier."""


class ValidationError(ValueError):
    """Raised when a new product record lacks required fields."""


class ProductFile:
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    def list(self) -> List[Product]:
        return products_from_records(self._read())

    def get(self, product_id: str) -> Product:
        for record in self._read():
            if str(record.get("id")) == product_id:
                return Product.from_record(record)
        raise ProductNotFound(product_id)

    def add(self, record: Mapping[str, Any]) -> Product:
        """Append a product, assigning a random id when the record has none."""

        missing = [name for name in _REQUIRED_FIELDS if not record.get(name)]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        new_record: Dict[str, Any] = {"id": str(uuid.uuid4()), **record}
        new_record["id"] = str(new_record["id"] or uuid.uuid4())
        records = self._read()
        records.append(new_record)
        self._write(records)
        return Product.from_record(new_record)

    def update(self, product_id: str, changes: Mapping[str, Any]) -> Product:
        """Shallow-merge ``changes`` into the product; the id never changes."""

        records = self._read()
        index = self._index_of(records, product_id)
        records[index] = {**records[index], **changes, "id": records[index]["id"]}
        self._write(records)
        return Product.from_record(records[index])

    def delete(self, product_id: str) -> Product:
        records = self._read()
        index = self._index_of(records, product_id)
        removed = records.pop(index)
        self._write(records)
        return Product.from_record(removed)

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _read(self) -> List[Dict[str, Any]]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        data = json.loads(raw)
        if not isinstance(data, list):
            logger.warning("Product file %s does not hold a list", self.path)
            return []
        return [item for item in data if isinstance(item, dict)]

    def _write(self, records: List[Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(records, handle, indent=2)

    @staticmethod
    def _index_of(records: List[Dict[str, Any]], product_id: str) -> int:
        for index, record in enumerate(records):
            if str(record.get("id")) == product_id:
                return index
        raise ProductNotFound(product_id)
