"""High level package exports for the Osari Trading catalog."""

from .cart import QuoteCart
from .catalog import CategoryOrder, build_categories, format_category_name
from .contact import ContactSession
from .dispatch import DispatchFailed, EmailJSClient
from .models import Category, ContactForm, Notification, Product
from .remote import RequestFailed, SupabaseClient
from .search import filter_and_group
from .storage import JsonFileStorage, MemoryStorage, StorageUnavailable
from .utils import slugify

__all__ = [
    "QuoteCart",
    "CategoryOrder",
    "build_categories",
    "format_category_name",
    "ContactSession",
    "DispatchFailed",
    "EmailJSClient",
    "Category",
    "ContactForm",
    "Notification",
    "Product",
    "RequestFailed",
    "SupabaseClient",
    "filter_and_group",
    "JsonFileStorage",
    "MemoryStorage",
    "StorageUnavailable",
    "slugify",
]
