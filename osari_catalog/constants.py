"""Shared constants for the catalog package."""

CART_KEY = "cartProducts"
PENDING_PRODUCT_KEY = "contactProduct"
CONTACT_DRAFT_KEY = "contactFormData"
PRODUCTS_KEY = "products"

CART_MARKER = "\n\nInterested in:"

DEFAULT_CATEGORY_SLUG = "uncategorized"

DEFAULT_EMAILJS_URL = "https://api.emailjs.com/api/v1.0/email/send"
