# products_api/database.py
import threading
from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Product

# This file holds the product store and the sample data it starts with.


class ProductStore(ABC):
    """Record store behind the product handlers.

    Handlers only talk to this interface, so a persistent implementation can
    replace the in-memory one without touching them.
    """

    @abstractmethod
    def list_all(self) -> List[Product]:
        """Return a snapshot of every product in insertion order."""

    @abstractmethod
    def get(self, product_id: str) -> Optional[Product]:
        ...

    @abstractmethod
    def insert(self, product: Product) -> Product:
        ...

    @abstractmethod
    def replace(self, product_id: str, product: Product) -> Optional[Product]:
        """Swap the stored record in place; None if the id is unknown."""

    @abstractmethod
    def remove(self, product_id: str) -> bool:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class InMemoryProductStore(ProductStore):
    def __init__(self, products: Optional[List[Product]] = None):
        self._products: List[Product] = list(products or [])
        self._lock = threading.RLock()

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        return -1

    def list_all(self) -> List[Product]:
        with self._lock:
            return list(self._products)

    def get(self, product_id: str) -> Optional[Product]:
        with self._lock:
            idx = self._index_of(product_id)
            return self._products[idx] if idx != -1 else None

    def insert(self, product: Product) -> Product:
        with self._lock:
            if self._index_of(product.id) != -1:
                raise ValueError(f"duplicate product id: {product.id}")
            self._products.append(product)
            return product

    def replace(self, product_id: str, product: Product) -> Optional[Product]:
        with self._lock:
            idx = self._index_of(product_id)
            if idx == -1:
                return None
            self._products[idx] = product
            return product

    def remove(self, product_id: str) -> bool:
        with self._lock:
            idx = self._index_of(product_id)
            if idx == -1:
                return False
            del self._products[idx]
            return True

    def clear(self) -> None:
        with self._lock:
            self._products.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)


def sample_products() -> List[Product]:
    return [
        Product(
            id="1",
            name="Laptop",
            description="High-performance laptop with 16GB RAM",
            price=1200,
            category="electronics",
            in_stock=True,
        ),
        Product(
            id="2",
            name="Smartphone",
            description="Latest model with 128GB storage",
            price=800,
            category="electronics",
            in_stock=True,
        ),
        Product(
            id="3",
            name="Coffee Maker",
            description="Programmable coffee maker with timer",
            price=50,
            category="kitchen",
            in_stock=False,
        ),
    ]


def seed(store: ProductStore) -> None:
    store.clear()
    for p in sample_products():
        store.insert(p)


# Process-wide store used by the app
PRODUCTS = InMemoryProductStore()


def get_store() -> ProductStore:
    return PRODUCTS
