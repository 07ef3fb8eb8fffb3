from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from osari_catalog.repository import ProductFile, ProductNotFound, ValidationError

FIXTURE = Path(__file__).parent / "data" / "products.json"


@pytest.fixture
def store(tmp_path: Path) -> ProductFile:
    path = tmp_path / "products.json"
    shutil.copy(FIXTURE, path)
    return ProductFile(path)


def test_missing_file_lists_nothing(tmp_path: Path) -> None:
    assert ProductFile(tmp_path / "absent.json").list() == []


def test_get_and_list(store: ProductFile) -> None:
    assert len(store.list()) == 5
    assert store.get("2").name == "Green Tea"
    with pytest.raises(ProductNotFound):
        store.get("99")


def test_add_assigns_id_and_appends(store: ProductFile) -> None:
    product = store.add({"name": "Medjool Dates", "category": "dates"})

    assert product.id
    assert store.list()[-1].id == product.id
    raw = json.loads(store.path.read_text(encoding="utf-8"))
    assert raw[-1]["name"] == "Medjool Dates"


def test_add_keeps_supplied_id(store: ProductFile) -> None:
    assert store.add({"id": "abc", "name": "Figs", "category": "dates"}).id == "abc"


def test_add_requires_name_and_category(store: ProductFile) -> None:
    with pytest.raises(ValidationError) as excinfo:
        store.add({"name": "No category"})

    assert "category" in str(excinfo.value)
    assert len(store.list()) == 5


def test_update_merges_changes_but_not_id(store: ProductFile) -> None:
    updated = store.update("3", {"description": "Smoky cumin", "id": "other"})

    assert updated.id == "3"
    assert updated.name == "Cumin Powder"
    assert store.get("3").description == "Smoky cumin"
    with pytest.raises(ProductNotFound):
        store.update("99", {"name": "x"})


def test_delete_returns_removed_product(store: ProductFile) -> None:
    removed = store.delete("1")

    assert removed.name == "Basmati Rice"
    assert [p.id for p in store.list()] == ["2", "3", "4", "5"]
    with pytest.raises(ProductNotFound):
        store.delete("1")
