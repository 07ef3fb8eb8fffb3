from __future__ import annotations

import json
from pathlib import Path
from typing import List

import pytest

from osari_catalog.models import Product, products_from_records

FIXTURE = Path(__file__).parent / "data" / "products.json"


@pytest.fixture
def products() -> List[Product]:
    return products_from_records(json.loads(FIXTURE.read_text(encoding="utf-8")))
