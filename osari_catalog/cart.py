"""Quote request cart shared between the catalog and the contact form."""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, List, Optional, TypeVar

from .constants import CART_KEY, CART_MARKER, PENDING_PRODUCT_KEY
from .models import Notification
from .storage import MemoryStorage, Storage, StorageUnavailable, read_json, write_json

logger = logging.getLogger(__name__)

_CART_BLOCK = re.compile(re.escape(CART_MARKER) + r".*\Z", re.DOTALL)

T = TypeVar("T")


def strip_cart_block(message: str) -> str:
    """Remove everything from the first cart marker to the end of ``message``."""

    return _CART_BLOCK.sub("", message or "", count=1)


def format_cart_block(names: List[str]) -> str:
    if not names:
        return ""
    return f"{CART_MARKER} {', '.join(names)}"


class QuoteCart:
    """Deduplicated list of product names the visitor asked a quote for.

    The list lives in a single storage slot and every operation reads, modifies
    and writes it back. There is no locking: two writers sharing the slot race
    and the last one wins. If the storage backend fails the cart continues in
    memory for the rest of its lifetime.
    """

    def __init__(self, storage: Storage, key: str = CART_KEY) -> None:
        self.storage = storage
        self.key = key

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    def current_cart(self) -> List[str]:
        return self._guarded(self._load)

    def add_product(self, name: str) -> bool:
        """Add ``name`` and return ``True``; return ``False`` if already present."""

        name = (name or "").strip()
        if not name:
            return False

        def add() -> bool:
            cart = self._load()
            if name in cart:
                return False
            cart.append(name)
            write_json(self.storage, self.key, cart)
            return True

        return self._guarded(add)

    def clear(self) -> None:
        self._guarded(lambda: self.storage.remove_item(self.key))

    def merge_into_message(self, message: str) -> str:
        """Return ``message`` with the cart block replaced by the current cart.

        Any block appended earlier is stripped first, so calling this again
        with its own output yields the same text.
        """

        return strip_cart_block(message) + format_cart_block(self.current_cart())

    def strip_from_message(self, message: str) -> str:
        return strip_cart_block(message)

    def request_quote(self, name: str) -> Notification:
        """Add ``name`` to the cart and describe the outcome for the visitor."""

        name = (name or "").strip()
        if self.add_product(name):
            return Notification(
                title="Request Sent",
                description=f"{name} has been added to the contact form.",
                variant="success",
            )
        return Notification(
            title="Already in Cart",
            description=f"{name} is already in the contact form.",
            variant="info",
        )

    def stash_pending(self, name: str) -> None:
        """Remember ``name`` for the contact form to pick up on its next open."""

        self._guarded(lambda: self.storage.set_item(PENDING_PRODUCT_KEY, name))

    def absorb_pending(self) -> Optional[str]:
        """Move a stashed product into the cart and return its name."""

        def absorb() -> Optional[str]:
            pending = self.storage.get_item(PENDING_PRODUCT_KEY)
            if pending is None:
                return None
            self.storage.remove_item(PENDING_PRODUCT_KEY)
            return pending

        pending = self._guarded(absorb)
        if pending:
            self.add_product(pending)
        return pending

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _load(self) -> List[str]:
        data: Any = read_json(self.storage, self.key, default=[])
        if not isinstance(data, list):
            logger.warning("Ignoring cart stored under %r: expected a list", self.key)
            return []
        cart: List[str] = []
        for item in data:
            if isinstance(item, str) and item not in cart:
                cart.append(item)
        return cart

    def _guarded(self, operation: Callable[[], T]) -> T:
        try:
            return operation()
        except (StorageUnavailable, OSError) as exc:
            if isinstance(self.storage, MemoryStorage):
                raise
            logger.warning("Cart storage unavailable, keeping the cart in memory: %s", exc)
            self.storage = MemoryStorage()
            return operation()
