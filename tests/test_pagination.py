# tests/test_pagination.py
import math

import pytest
from fastapi.testclient import TestClient
from products_api.main import app
from products_api.database import PRODUCTS
from products_api.models import Product

client = TestClient(app)
KEY = {"x-api-key": "test-key"}


@pytest.fixture
def many_products():
    # 3 sample products + 22 more = 25
    for i in range(22):
        PRODUCTS.insert(Product(
            id=f"bulk-{i}", name=f"Item {i}", description="bulk", price=i + 1, category="bulk",
        ))
    return 25


def page(**params):
    r = client.get("/api/products", params=params, headers=KEY)
    assert r.status_code == 200
    return r.json()


@pytest.mark.parametrize("page_no,limit", [(1, 10), (2, 10), (3, 10), (4, 10), (1, 5), (5, 5), (2, 7), (1, 25), (1, 30)])
def test_page_flags(many_products, page_no, limit):
    body = page(page=page_no, limit=limit)
    pg = body["pagination"]
    assert body["count"] == many_products
    assert pg["totalPages"] == math.ceil(many_products / limit)
    assert pg["hasNext"] is (page_no * limit < many_products)
    assert pg["hasPrev"] is (page_no > 1)
    start = (page_no - 1) * limit
    assert len(body["data"]) == max(0, min(limit, many_products - start))


def test_pages_walk_the_store_in_insertion_order(many_products):
    seen = []
    for n in range(1, 4):
        seen += [p["id"] for p in page(page=n, limit=10)["data"]]
    assert seen == [p.id for p in PRODUCTS.list_all()]


def test_count_is_post_filter_pre_pagination(many_products):
    body = page(category="bulk", limit=5, page=2)
    assert body["count"] == 22
    assert [p["id"] for p in body["data"]] == [f"bulk-{i}" for i in range(5, 10)]


def test_non_numeric_values_fall_back_to_defaults():
    pg = page(page="abc", limit="lots")["pagination"]
    assert (pg["page"], pg["limit"]) == (1, 10)


def test_leading_digits_are_parsed():
    pg = page(page="1st", limit="2.9")["pagination"]
    assert (pg["page"], pg["limit"]) == (1, 2)


# Boundary cases: page/limit are not range-checked, results below are the
# documented behaviour rather than a guarantee of sensible output.

def test_zero_limit_falls_back_to_default():
    pg = page(limit=0)["pagination"]
    assert pg["limit"] == 10
    assert pg["totalPages"] == 1


def test_negative_limit_is_passed_through():
    body = page(limit=-2)
    pg = body["pagination"]
    assert pg["limit"] == -2
    assert pg["totalPages"] == -1
    # slice [0:-2] of three products
    assert [p["id"] for p in body["data"]] == ["1"]
    assert pg["hasNext"] is True
    assert pg["hasPrev"] is False


def test_negative_page_slices_from_the_end():
    body = page(page=-1, limit=2)
    # start=-4, end=-2 over three products
    assert [p["id"] for p in body["data"]] == ["1"]
    assert body["pagination"]["hasPrev"] is False
