"""Command line entry point for the catalog."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Iterable, List

from .cache import ProductCache
from .cart import QuoteCart
from .catalog import CategoryOrder, build_categories
from .contact import ContactSession
from .dispatch import EmailJSClient
from .models import Product
from .remote import RequestFailed, SupabaseClient
from .repository import ProductFile
from .search import filter_and_group
from .settings import Settings
from .storage import JsonFileStorage, StorageUnavailable
from .utils import union_fieldnames


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse the Osari Trading catalog and send quote requests")
    parser.add_argument("--state", help="State file holding the cart and drafts. Defaults to OSARI_STATE_FILE")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    commands = parser.add_subparsers(dest="command", required=True)

    source = argparse.ArgumentParser(add_help=False)
    group = source.add_mutually_exclusive_group()
    group.add_argument("--products", help="JSON product file to read instead of the cached catalog")
    group.add_argument(
        "--remote",
        action="store_true",
        help="Read products from the hosted tables (SUPABASE_URL/SUPABASE_KEY env vars)",
    )
    source.add_argument(
        "--order",
        choices=[order.value for order in CategoryOrder],
        default=CategoryOrder.ALPHABETICAL.value,
        help="Category ordering policy",
    )

    categories = commands.add_parser("categories", parents=[source], help="List categories")
    categories.add_argument("--format", choices={"text", "json"}, default="text", help="Output format")

    search = commands.add_parser("search", parents=[source], help="Search products grouped by category")
    search.add_argument("query", nargs="?", default="", help="Text matched against name and description")
    search.add_argument("--format", choices={"text", "json", "csv"}, default="text", help="Output format")
    search.add_argument("--output", help="Write results to this file instead of stdout")

    cart = commands.add_parser("cart", help="Manage the quote request cart")
    cart_commands = cart.add_subparsers(dest="cart_command", required=True)
    cart_add = cart_commands.add_parser("add", help="Request a quote for a product")
    cart_add.add_argument("name", help="Product name")
    cart_commands.add_parser("show", help="Show the cart")
    cart_commands.add_parser("clear", help="Empty the cart")

    contact = commands.add_parser("contact", help="Send the contact form with the cart merged in")
    contact.add_argument("--name", required=True, help="Sender name")
    contact.add_argument("--email", required=True, help="Sender email address")
    contact.add_argument("--message", default="", help="Message body")
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")

    settings = Settings.from_env()
    storage = JsonFileStorage(Path(args.state) if args.state else settings.state_file)

    if args.command in ("categories", "search"):
        if args.remote and not settings.has_remote:
            parser.error("--remote requires SUPABASE_URL and SUPABASE_KEY env vars")
        try:
            products = _load_products(args, settings, storage)
        except (RequestFailed, StorageUnavailable, OSError, ValueError) as exc:
            print(f"[error] Failed to load products: {exc}", file=sys.stderr)
            return 1
        categories = build_categories(products, order=CategoryOrder(args.order))
        if args.command == "categories":
            return _print_categories(categories, args.format)
        view = filter_and_group(products, args.query, categories)
        if not view:
            print(f"[warn] No products match {args.query!r}.", file=sys.stderr)
            return 0
        return _write_view(view, args)

    if args.command == "cart":
        return _run_cart(QuoteCart(storage), args)

    return _run_contact(args, settings, storage)


def _load_products(args: argparse.Namespace, settings: Settings, storage: JsonFileStorage) -> List[Product]:
    if args.products:
        store = ProductFile(args.products)
        if not store.path.exists():
            print(f"[warn] Product file {store.path} does not exist. Nothing to read.", file=sys.stderr)
        return store.list()
    if args.remote:
        client = SupabaseClient(settings.supabase_url, settings.supabase_key, settings.supabase_token)
        return client.fetch_products()
    return ProductCache(storage).load()


def _print_categories(categories, fmt: str) -> int:
    if fmt == "json":
        payload = [
            {"id": cat.id, "name": cat.name, "slug": cat.slug, "description": cat.description}
            for cat in categories
        ]
        print(json.dumps(payload, indent=2))
    else:
        for cat in categories:
            print(f"{cat.slug}\t{cat.name}")
    return 0


def _write_view(view: Dict[str, List[Product]], args: argparse.Namespace) -> int:
    if args.format == "csv":
        rows = [product.as_record() for items in view.values() for product in items]
        text = _csv_text(rows)
    elif args.format == "json":
        text = json.dumps(
            {slug: [product.as_record() for product in items] for slug, items in view.items()},
            indent=2,
        )
    else:
        lines: List[str] = []
        for slug, items in view.items():
            lines.append(f"{slug} ({len(items)} items)")
            lines.extend(f"  {product.id}\t{product.name}" for product in items)
        text = "\n".join(lines)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text + "\n", encoding="utf-8")
        if args.verbose:
            total = sum(len(items) for items in view.values())
            print(f"[info] Wrote {total} products to {output_path}", file=sys.stderr)
    else:
        print(text)
    return 0


def _csv_text(rows: List[dict]) -> str:
    import csv
    import io

    handle = io.StringIO()
    writer = csv.DictWriter(handle, fieldnames=union_fieldnames(rows), lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow({key: _csv_cell(value) for key, value in row.items()})
    return handle.getvalue().rstrip("\n")


def _csv_cell(value: object) -> object:
    if isinstance(value, list):
        return "; ".join(str(item) for item in value)
    return value


def _run_cart(cart: QuoteCart, args: argparse.Namespace) -> int:
    if args.cart_command == "add":
        notice = cart.request_quote(args.name)
        print(f"[info] {notice.title}: {notice.description}", file=sys.stderr)
        return 0
    if args.cart_command == "clear":
        cart.clear()
        print("[info] Cart cleared.", file=sys.stderr)
        return 0
    items = cart.current_cart()
    if not items:
        print("[info] Cart is empty.", file=sys.stderr)
    for name in items:
        print(name)
    return 0


def _run_contact(args: argparse.Namespace, settings: Settings, storage: JsonFileStorage) -> int:
    dispatcher = EmailJSClient(
        service_id=settings.emailjs_service_id,
        template_id=settings.emailjs_template_id,
        public_key=settings.emailjs_public_key,
    )
    session = ContactSession(storage, dispatcher)
    session.open()
    session.update(name=args.name, email=args.email)
    if args.message:
        session.update(message=session.cart.merge_into_message(args.message))

    notice = session.submit()
    stream = sys.stdout if notice.variant == "success" else sys.stderr
    label = "info" if notice.variant == "success" else "error"
    print(f"[{label}] {notice.title} {notice.description}", file=stream)
    return 0 if notice.variant == "success" else 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
