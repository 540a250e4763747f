# tests/conftest.py
import pytest

from products_api.database import PRODUCTS, seed


@pytest.fixture(autouse=True)
def seeded_store():
    # every test starts from the three sample products
    seed(PRODUCTS)
    yield PRODUCTS
    PRODUCTS.clear()
