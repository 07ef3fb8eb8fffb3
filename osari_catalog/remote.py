"""HTTP client for the hosted products and categories tables."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import requests

from .models import Product, products_from_records

logger = logging.getLogger(__name__)


class RequestFailed(RuntimeError):
    """Raised when a HTTP request fails for any reason."""


@dataclass(slots=True)
class SupabaseClient:
    """Thin client for the REST interface of the hosted database.

    ``api_key`` is the project's public key. ``access_token`` is an already
    issued user token for row level security protected writes; signing in is
    left to the caller.
    """

    url: str
    api_key: str
    access_token: Optional[str] = None
    timeout: int = 30
    _session: requests.Session = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.url = self.url.strip().rstrip("/")
        self.api_key = self.api_key.strip()
        self._session = requests.Session()
        self._session.headers.update(
            {
                "apikey": self.api_key,
                "Authorization": f"Bearer {self.access_token or self.api_key}",
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
        )

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    def fetch_products(self) -> List[Product]:
        """Return all products, newest first."""

        rows = self._request(
            "GET",
            "products",
            "fetching products",
            params={"select": "*", "order": "created_at.desc"},
        )
        return products_from_records(rows)

    def fetch_category_names(self) -> List[str]:
        rows = self._request(
            "GET",
            "categories",
            "fetching categories",
            params={"select": "name", "order": "name.asc"},
        )
        return [str(row["name"]) for row in rows or [] if isinstance(row, dict) and row.get("name")]

    def insert_product(self, record: Mapping[str, Any]) -> Product:
        rows = self._request("POST", "products", "inserting product", json=[_table_row(record)])
        return _first_product(rows, record)

    def update_product(self, product_id: str, changes: Mapping[str, Any]) -> Product:
        rows = self._request(
            "PATCH",
            "products",
            f"updating product {product_id}",
            params={"id": f"eq.{product_id}"},
            json=_table_row(changes),
        )
        return _first_product(rows, {"id": product_id, **changes})

    def delete_product(self, product_id: str) -> None:
        self._request(
            "DELETE",
            "products",
            f"deleting product {product_id}",
            params={"id": f"eq.{product_id}"},
        )

    def insert_category(self, name: str) -> None:
        self._request("POST", "categories", f"inserting category {name}", json=[{"name": name}])

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _url(self, table: str) -> str:
        return f"{self.url}/rest/v1/{table}"

    def _request(self, method: str, table: str, context: str, **kwargs: Any) -> Any:
        headers: Dict[str, str] = {}
        if method != "GET":
            headers["Prefer"] = "return=representation"
        try:
            response = self._session.request(
                method, self._url(table), headers=headers, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as exc:
            raise RequestFailed(f"{context} failed: {exc}") from exc
        self._ensure_success(response, context)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise RequestFailed(f"{context} did not return valid JSON") from exc

    def _ensure_success(self, response: requests.Response, context: str) -> None:
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = getattr(response, "status_code", None)
            if status in (401, 403):
                raise RequestFailed(
                    "{} was rejected with status {}. Check the API key and access token."
                    .format(context, status)
                ) from exc
            raise RequestFailed(f"{context} failed: {exc}") from exc


def _table_row(record: Mapping[str, Any]) -> Dict[str, Any]:
    """Map a product record onto the snake_case columns of the table."""

    row = dict(record)
    if "inStock" in row:
        row["in_stock"] = row.pop("inStock")
    if "detailedDescription" in row:
        row["detailed_description"] = row.pop("detailedDescription")
    return row


def _first_product(rows: Any, fallback: Mapping[str, Any]) -> Product:
    products = products_from_records(rows)
    if products:
        return products[0]
    logger.debug("Empty representation returned, falling back to the submitted record")
    return Product.from_record(fallback)
