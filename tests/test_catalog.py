# tests/test_catalog.py
from decimal import Decimal
from itertools import groupby

import pytest

from storefront.catalog import Catalog
from storefront.errors import NotFound


def _grouped(catalog):
    products = sorted(catalog.all_products(), key=lambda p: p.category)
    return {cat: sorted(p.id for p in items) for cat, items in groupby(products, key=lambda p: p.category)}


def _index_ids(catalog):
    return {cat: [p.id for p in items] for cat, items in catalog.category_index().items()}


def test_ids_start_at_base_and_increment():
    cat = Catalog()
    a = cat.add_product("Laptop", "Electronics", Decimal("55000"), 7)
    b = cat.add_product("Shirt", "Clothing", Decimal("799"), 60)
    assert (a.id, b.id) == (1001, 1002)
    assert cat.get_by_id(1002) is b
    assert cat.get_by_id(999) is None


def test_categories_sorted_regardless_of_insertion_order():
    cat = Catalog()
    for name, category in [("Shoes", "Footwear"), ("Phone", "Electronics"), ("Shirt", "Clothing")]:
        cat.add_product(name, category, Decimal("1"), 1)
    assert cat.list_categories() == ["Clothing", "Electronics", "Footwear"]


def test_list_by_category_keeps_insertion_order():
    cat = Catalog()
    cat.add_product("Laptop", "Electronics", Decimal("1"), 1)
    cat.add_product("Shirt", "Clothing", Decimal("1"), 1)
    cat.add_product("Phone", "Electronics", Decimal("1"), 1)
    assert [p.name for p in cat.list_by_category("Electronics")] == ["Laptop", "Phone"]
    assert cat.list_by_category("Toys") == []


def test_category_index_matches_group_by_after_every_add():
    cat = Catalog()
    rows = [("A", "x"), ("B", "y"), ("C", "x"), ("D", "z"), ("E", "y")]
    for name, category in rows:
        cat.add_product(name, category, Decimal("2.50"), 3)
        assert _index_ids(cat) == _grouped(cat)


def test_reduce_stock_floors_at_zero():
    cat = Catalog()
    p = cat.add_product("Laptop", "Electronics", Decimal("55000"), 7)
    cat.reduce_stock(p.id, 999)
    assert p.stock == 0
    cat.increase_stock(p.id, 4)
    assert p.stock == 4


def test_stock_changes_on_unknown_product():
    cat = Catalog()
    with pytest.raises(NotFound):
        cat.reduce_stock(4242, 1)
    with pytest.raises(NotFound):
        cat.increase_stock(4242, 1)


def test_search_is_case_insensitive():
    cat = Catalog()
    cat.add_product("Running Shoes", "Footwear", Decimal("2499"), 20)
    cat.add_product("Jeans", "Clothing", Decimal("1299"), 40)
    assert [p.name for p in cat.search("shoe")] == ["Running Shoes"]
