# tests/test_validation.py
import json

from fastapi.testclient import TestClient
from products_api.main import app
from products_api.database import PRODUCTS

client = TestClient(app)
KEY = {"x-api-key": "test-key"}

VALID = {"name": "Desk Lamp", "description": "LED lamp", "price": 30, "category": "home"}
MISSING = "Missing required fields: name, description, price, category"


def post(body):
    return client.post("/api/products", json=body, headers=KEY)


def test_missing_price_names_required_fields():
    body = {k: v for k, v in VALID.items() if k != "price"}
    r = post(body)
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": MISSING}


def test_falsy_values_count_as_missing():
    for field, value in (("name", ""), ("description", ""), ("category", None), ("price", 0)):
        r = post({**VALID, field: value})
        assert r.status_code == 400, field
        assert r.json()["error"] == MISSING


def test_negative_price_rejected():
    r = post({**VALID, "price": -5})
    assert r.status_code == 400
    assert r.json()["error"] == "Price must be a positive number"


def test_price_must_be_a_number():
    for value in ("10", True, [5]):
        r = post({**VALID, "price": value})
        assert r.status_code == 400
        assert r.json()["error"] == "Price must be a positive number"


def test_name_must_be_non_blank_string():
    for value in ("   ", 42):
        r = post({**VALID, "name": value})
        assert r.status_code == 400
        assert r.json()["error"] == "Name must be a non-empty string"


def test_description_and_category_must_be_strings():
    r = post({**VALID, "description": 7})
    assert r.status_code == 400
    assert r.json()["error"] == "Description and category must be strings"
    r = post({**VALID, "category": {"name": "home"}})
    assert r.status_code == 400


def test_malformed_json_rejected():
    r = client.post(
        "/api/products", content=b"{not json", headers={**KEY, "content-type": "application/json"}
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Request body must be valid JSON"


def test_empty_or_non_object_body_is_missing_fields():
    r = client.post("/api/products", headers=KEY)
    assert r.status_code == 400
    assert r.json()["error"] == MISSING
    r = post([VALID])
    assert r.json()["error"] == MISSING


def test_failed_validation_leaves_store_untouched():
    post({**VALID, "price": -1})
    assert len(PRODUCTS) == 3


def test_update_validates_before_lookup():
    r = client.put("/api/products/missing", json={**VALID, "price": -1}, headers=KEY)
    assert r.status_code == 400


def test_update_rejects_invalid_payload_without_changes():
    r = client.put("/api/products/1", json={**VALID, "name": ""}, headers=KEY)
    assert r.status_code == 400
    assert PRODUCTS.get("1").name == "Laptop"


def test_price_too_large_for_a_float_rejected():
    body = json.dumps({**VALID, "price": 0}).replace('"price": 0', '"price": 1' + "0" * 400)
    r = client.post("/api/products", content=body, headers={**KEY, "content-type": "application/json"})
    assert r.status_code == 400
    assert r.json()["error"] == "Price must be a positive number"
    assert len(PRODUCTS) == 3


def test_empty_containers_count_as_present():
    r = post({**VALID, "name": []})
    assert r.json()["error"] == "Name must be a non-empty string"
    r = post({**VALID, "price": {}})
    assert r.json()["error"] == "Price must be a positive number"
