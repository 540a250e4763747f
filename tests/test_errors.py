# tests/test_errors.py
import logging

import pytest
from fastapi.testclient import TestClient
from products_api.main import app
from products_api.config import Config
from products_api.database import InMemoryProductStore, get_store
from products_api.errors import ApiError, AuthenticationError, NotFoundError, ValidationError

client = TestClient(app)
KEY = {"x-api-key": "test-key"}


class BrokenStore(InMemoryProductStore):
    def list_all(self):
        raise RuntimeError("disk on fire")


@pytest.fixture
def broken_store():
    app.dependency_overrides[get_store] = lambda: BrokenStore()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def development(monkeypatch):
    monkeypatch.setattr(Config, "APP_ENV", "development")


def test_error_kinds_carry_status_codes():
    assert ValidationError("x").status_code == 400
    assert AuthenticationError("x").status_code == 401
    assert NotFoundError("x").status_code == 404
    assert ApiError().status_code == 500
    assert ApiError().message == "Internal Server Error"


def test_unmatched_route_is_404_envelope():
    r = client.get("/nowhere")
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Route /nowhere not found"}


def test_unmatched_route_message_keeps_query_string():
    r = client.get("/nowhere?x=1")
    assert r.json()["error"] == "Route /nowhere?x=1 not found"


def test_unsupported_method_is_404_envelope():
    r = client.patch("/api/products/1", headers=KEY, json={})
    assert r.status_code == 404
    assert r.json()["error"] == "Route /api/products/1 not found"


def test_unexpected_error_is_500_envelope(broken_store):
    c = TestClient(app, raise_server_exceptions=False)
    r = c.get("/api/products", headers=KEY)
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Internal Server Error"}


def test_stack_only_in_development(development):
    r = client.get("/api/products/missing", headers=KEY)
    body = r.json()
    assert r.status_code == 404
    assert body["error"] == "Product not found"
    assert "NotFoundError" in body["stack"]


def test_no_stack_outside_development():
    r = client.get("/api/products/missing", headers=KEY)
    assert "stack" not in r.json()


def test_requests_are_logged(caplog):
    caplog.set_level(logging.INFO, logger="products_api.requests")
    client.get("/api/products?category=kitchen", headers=KEY)
    messages = [rec.getMessage() for rec in caplog.records if rec.name == "products_api.requests"]
    assert any(m.endswith("GET /api/products?category=kitchen") for m in messages)
    assert messages[-1].startswith("[")


def test_configure_logging_installs_single_rich_handler():
    from rich.logging import RichHandler
    from products_api.logging_setup import configure_logging

    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        configure_logging("DEBUG")
        configure_logging("WARNING")
        assert [type(h) for h in root.handlers] == [RichHandler]
        assert root.level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
