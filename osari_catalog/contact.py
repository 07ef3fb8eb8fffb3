"""Contact form workflow: draft persistence, cart merge and submission."""

from __future__ import annotations

import logging
from typing import Protocol

from .cart import QuoteCart
from .constants import CONTACT_DRAFT_KEY
from .dispatch import DispatchFailed
from .models import ContactForm, Notification
from .storage import Storage, read_json, write_json

logger = logging.getLogger(__name__)


class Dispatcher(Protocol):
    def send(self, sender_name: str, sender_email: str, message: str) -> None: ...


class ContactDraftStore:
    """Unsent contact form kept in storage between visits."""

    def __init__(self, storage: Storage, key: str = CONTACT_DRAFT_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> ContactForm:
        data = read_json(self.storage, self.key, default={})
        if not isinstance(data, dict):
            logger.warning("Ignoring contact draft stored under %r", self.key)
            return ContactForm()
        return ContactForm.from_record(data)

    def save(self, form: ContactForm) -> None:
        write_json(self.storage, self.key, form.as_record())

    def clear(self) -> None:
        self.storage.remove_item(self.key)


class ContactSession:
    """State of one contact form from opening to submission."""

    def __init__(self, storage: Storage, dispatcher: Dispatcher) -> None:
        self.cart = QuoteCart(storage)
        self.drafts = ContactDraftStore(storage)
        self.dispatcher = dispatcher
        self.form = ContactForm()

    def open(self) -> ContactForm:
        """Restore the draft and merge the quote cart into its message."""

        self.form = self.drafts.load()
        self.cart.absorb_pending()
        self.form.message = self.cart.merge_into_message(self.form.message)
        self.drafts.save(self.form)
        return self.form

    def update(self, **fields: str) -> ContactForm:
        for name, value in fields.items():
            if name not in ("name", "email", "message"):
                raise TypeError(f"Unknown contact form field: {name}")
            setattr(self.form, name, value)
        self.drafts.save(self.form)
        return self.form

    def clear_cart(self) -> Notification:
        self.cart.clear()
        self.form.message = self.cart.strip_from_message(self.form.message)
        self.drafts.save(self.form)
        return Notification(
            title="Cart Cleared",
            description="Products removed from inquiry.",
            variant="info",
            duration=2500,
        )

    def submit(self) -> Notification:
        """Send the form once; reset form, cart and draft only on success."""

        try:
            self.dispatcher.send(self.form.name, self.form.email, self.form.message)
        except DispatchFailed as exc:
            logger.error("Contact message not sent: %s", exc)
            return Notification(
                title="Error",
                description="Failed to send message. Please try again later.",
                variant="error",
                duration=3500,
            )

        self.form = ContactForm()
        self.cart.clear()
        self.drafts.clear()
        return Notification(
            title="Message Sent!",
            description="Thank you for contacting us. We'll get back to you promptly.",
            variant="success",
            duration=3500,
        )
