"""Data models used by the catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

_KNOWN_KEYS = {
    "id",
    "name",
    "category",
    "image",
    "description",
    "inStock",
    "in_stock",
    "featured",
    "origin",
    "detailedDescription",
    "detailed_description",
    "uses",
    "price",
    "created_at",
    "createdAt",
}


def _as_price(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(slots=True)
class Product:
    """Represents a single catalog product.

    Attributes
    ----------
    id:
        Unique identifier. Seed data uses short numeric strings, the hosted
        table hands out UUIDs.
    name:
        Display name. Also the value collected in the quote cart.
    category:
        Free-form category label such as ``"grains-sides"`` or
        ``"Spices & Seasonings"``. Grouping always goes through
        :func:`osari_catalog.utils.slugify`.
    image:
        Image path or URL.
    description:
        Short marketing description, searched alongside the name.
    in_stock:
        Stock flag. Records that do not carry one are treated as available.
    featured, origin, detailed_description, uses, price, created_at:
        Optional fields only some data sources provide.
    extra:
        Any other keys found on the source record, kept so that records
        survive a load/save cycle unchanged.
    """

    id: str
    name: str
    category: str
    image: str = ""
    description: str = ""
    in_stock: bool = True
    featured: bool = False
    origin: Optional[str] = None
    detailed_description: Optional[str] = None
    uses: List[str] = field(default_factory=list)
    price: Optional[float] = None
    created_at: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Product":
        """Build a product from a camelCase or snake_case record."""

        in_stock = record.get("inStock", record.get("in_stock"))
        price = _as_price(record.get("price"))
        uses = record.get("uses")
        return cls(
            id=str(record.get("id") or ""),
            name=str(record.get("name") or ""),
            category=str(record.get("category") or ""),
            image=str(record.get("image") or ""),
            description=str(record.get("description") or ""),
            in_stock=True if in_stock is None else bool(in_stock),
            featured=bool(record.get("featured", False)),
            origin=record.get("origin"),
            detailed_description=record.get("detailedDescription", record.get("detailed_description")),
            uses=[str(use) for use in uses] if isinstance(uses, list) else [],
            price=price,
            created_at=record.get("created_at", record.get("createdAt")),
            extra={k: v for k, v in record.items() if k not in _KNOWN_KEYS},
        )

    def as_record(self) -> Dict[str, Any]:
        """Return the camelCase record written to JSON stores."""

        record: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "image": self.image,
            "description": self.description,
            "inStock": self.in_stock,
        }
        if self.featured:
            record["featured"] = True
        if self.origin is not None:
            record["origin"] = self.origin
        if self.detailed_description is not None:
            record["detailedDescription"] = self.detailed_description
        if self.uses:
            record["uses"] = list(self.uses)
        if self.price is not None:
            record["price"] = self.price
        if self.created_at is not None:
            record["created_at"] = self.created_at
        record.update(self.extra)
        return record


@dataclass(slots=True)
class Category:
    """A category derived from the products that carry it."""

    id: str
    name: str
    slug: str
    image: str = ""
    description: str = ""


@dataclass(slots=True)
class ContactForm:
    name: str = ""
    email: str = ""
    message: str = ""

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ContactForm":
        return cls(
            name=str(record.get("name") or ""),
            email=str(record.get("email") or ""),
            message=str(record.get("message") or ""),
        )

    def as_record(self) -> Dict[str, str]:
        return {"name": self.name, "email": self.email, "message": self.message}


@dataclass(frozen=True, slots=True)
class Notification:
    """User facing notice produced by a workflow step.

    ``variant`` is one of ``"success"``, ``"info"`` or ``"error"`` and
    ``duration`` is expressed in milliseconds.
    """

    title: str
    description: str
    variant: str = "info"
    duration: int = 3000


def products_from_records(records: Any) -> List[Product]:
    """Convert a decoded JSON value into products, skipping non-mapping items."""

    if not isinstance(records, list):
        return []
    return [Product.from_record(item) for item in records if isinstance(item, Mapping)]
