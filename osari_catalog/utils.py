"""Utility helpers for the catalog."""

from __future__ import annotations

import re
from typing import Sequence

from .constants import DEFAULT_CATEGORY_SLUG

_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")
_WORD_SEPARATORS = re.compile(r"[-_]+")


def slugify(value: str | None) -> str:
    """Return the URL friendly slug for a category label.

    Every place that needs a category key goes through this function so that
    products and categories always join on the same value.
    """

    value = (value or "").strip().lower()
    value = _SLUG_PATTERN.sub("-", value)
    value = value.strip("-")
    return value or DEFAULT_CATEGORY_SLUG


def split_words(value: str) -> list[str]:
    return [word for word in _WORD_SEPARATORS.split(value.strip()) if word]


def union_fieldnames(rows: Sequence[dict[str, object]]) -> list[str]:
    """Return a deterministic list of field names across all rows."""

    preferred_order: list[str] = [
        "id",
        "name",
        "category",
        "description",
        "image",
        "inStock",
    ]
    extra = set()
    for row in rows:
        extra.update(row.keys())
    ordered = [field for field in preferred_order if field in extra]
    for field in sorted(extra):
        if field not in preferred_order:
            ordered.append(field)
    return ordered
