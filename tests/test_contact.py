from __future__ import annotations

import json
from unittest.mock import MagicMock

from osari_catalog.cart import QuoteCart
from osari_catalog.constants import CART_KEY, CONTACT_DRAFT_KEY
from osari_catalog.contact import ContactDraftStore, ContactSession
from osari_catalog.dispatch import DispatchFailed
from osari_catalog.models import ContactForm
from osari_catalog.storage import MemoryStorage


def test_draft_store_round_trip_and_corruption() -> None:
    storage = MemoryStorage()
    drafts = ContactDraftStore(storage)

    assert drafts.load() == ContactForm()
    drafts.save(ContactForm(name="Amina", email="a@example.com", message="Hi"))
    assert drafts.load().name == "Amina"

    storage.set_item(CONTACT_DRAFT_KEY, "[1, 2]")
    assert drafts.load() == ContactForm()
    storage.set_item(CONTACT_DRAFT_KEY, "{oops")
    assert drafts.load() == ContactForm()


def test_open_merges_cart_and_pending_product() -> None:
    storage = MemoryStorage()
    ContactDraftStore(storage).save(ContactForm(name="Amina", message="Hello"))
    cart = QuoteCart(storage)
    cart.add_product("Basmati Rice")
    cart.stash_pending("Green Tea")

    form = ContactSession(storage, MagicMock()).open()

    assert form.name == "Amina"
    assert form.message == "Hello\n\nInterested in: Basmati Rice, Green Tea"
    assert json.loads(storage.get_item(CONTACT_DRAFT_KEY))["message"] == form.message


def test_reopening_does_not_duplicate_cart_block() -> None:
    storage = MemoryStorage()
    QuoteCart(storage).add_product("Dates")

    first = ContactSession(storage, MagicMock()).open()
    second = ContactSession(storage, MagicMock()).open()

    assert second.message == first.message == "\n\nInterested in: Dates"


def test_clear_cart_strips_message() -> None:
    storage = MemoryStorage()
    QuoteCart(storage).add_product("Dates")
    session = ContactSession(storage, MagicMock())
    session.open()
    session.update(message=session.form.message.replace("\n\nInterested", "Call me\n\nInterested", 1))

    notice = session.clear_cart()

    assert notice.title == "Cart Cleared"
    assert session.form.message == "Call me"
    assert storage.get_item(CART_KEY) is None


def test_successful_submit_resets_everything() -> None:
    storage = MemoryStorage()
    QuoteCart(storage).add_product("Dates")
    dispatcher = MagicMock()
    session = ContactSession(storage, dispatcher)
    session.open()
    session.update(name="Amina", email="a@example.com")

    notice = session.submit()

    dispatcher.send.assert_called_once_with("Amina", "a@example.com", "\n\nInterested in: Dates")
    assert notice.variant == "success"
    assert session.form == ContactForm()
    assert storage.get_item(CART_KEY) is None
    assert storage.get_item(CONTACT_DRAFT_KEY) is None


def test_failed_submit_keeps_form_and_cart() -> None:
    storage = MemoryStorage()
    QuoteCart(storage).add_product("Dates")
    dispatcher = MagicMock()
    dispatcher.send.side_effect = DispatchFailed("503")
    session = ContactSession(storage, dispatcher)
    session.open()
    session.update(name="Amina", email="a@example.com")

    notice = session.submit()

    assert notice.variant == "error"
    assert notice.title == "Error"
    assert dispatcher.send.call_count == 1
    assert session.form.name == "Amina"
    assert QuoteCart(storage).current_cart() == ["Dates"]
    assert json.loads(storage.get_item(CONTACT_DRAFT_KEY))["name"] == "Amina"
