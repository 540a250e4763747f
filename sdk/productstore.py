# sdk/productstore.py
import os
from typing import Any, Dict, Optional

import httpx
import requests

DEFAULT_BASE_URL = os.environ.get("PRODUCTS_API_URL", "http://127.0.0.1:3000")
DEFAULT_API_KEY = os.environ.get("PRODUCTS_API_KEY", "demo-key")


class ProductApiError(Exception):
    """Raised when the API answers with {"success": false, ...}."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


class StoreClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, api_key: Optional[str] = DEFAULT_API_KEY, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = requests.Session()
        self.timeout = timeout
        if api_key:
            self.session.headers.update({"x-api-key": api_key})

    @staticmethod
    def _product_payload(name: str, description: str, price: float, category: str,
                         in_stock: Optional[bool] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": name, "description": description, "price": price, "category": category
        }
        if in_stock is not None:
            payload["inStock"] = in_stock
        return payload

    def _handle(self, r: requests.Response) -> Dict[str, Any]:
        try:
            body = r.json()
        except ValueError:
            r.raise_for_status()
            raise ProductApiError(r.status_code, r.text)
        if r.status_code >= 400 or not body.get("success", False):
            raise ProductApiError(r.status_code, body.get("error", r.reason))
        return body

    def info(self):
        r = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Listing
    def list_products(self, category: Optional[str] = None, in_stock: Optional[bool] = None,
                      search: Optional[str] = None, page: int = 1, limit: int = 10):
        params: Dict[str, Any] = {"page": page, "limit": limit}
        if category:
            params["category"] = category
        if in_stock is not None:
            params["inStock"] = "true" if in_stock else "false"
        if search:
            params["search"] = search
        r = self.session.get(f"{self.base_url}/api/products", params=params, timeout=self.timeout)
        return self._handle(r)

    def search_products(self, q: str):
        r = self.session.get(f"{self.base_url}/api/products/search", params={"q": q}, timeout=self.timeout)
        return self._handle(r)["data"]

    def stats(self):
        r = self.session.get(f"{self.base_url}/api/products/stats", timeout=self.timeout)
        return self._handle(r)["data"]

    def get_product(self, product_id: str):
        r = self.session.get(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        return self._handle(r)["data"]

    # Writes
    def create_product(self, name: str, description: str, price: float, category: str,
                       in_stock: Optional[bool] = None):
        payload = self._product_payload(name, description, price, category, in_stock)
        r = self.session.post(f"{self.base_url}/api/products", json=payload, timeout=self.timeout)
        return self._handle(r)["data"]

    def update_product(self, product_id: str, name: str, description: str, price: float, category: str,
                       in_stock: Optional[bool] = None):
        payload = self._product_payload(name, description, price, category, in_stock)
        r = self.session.put(f"{self.base_url}/api/products/{product_id}", json=payload, timeout=self.timeout)
        return self._handle(r)["data"]

    def delete_product(self, product_id: str):
        r = self.session.delete(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        return self._handle(r)["message"]

    # Async create (used by the concurrent demo)
    async def create_product_async(self, name: str, description: str, price: float, category: str,
                                   in_stock: Optional[bool] = None):
        payload = self._product_payload(name, description, price, category, in_stock)
        headers = {"x-api-key": self.api_key} if self.api_key else {}
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.post(f"{self.base_url}/api/products", json=payload, headers=headers)
            return r


if __name__ == "__main__":
    import argparse

    from rich import print

    parser = argparse.ArgumentParser(description="Products API CLI")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL)
    parser.add_argument("--api-key", default=DEFAULT_API_KEY)
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products with filters and pagination")
    lp.add_argument("--category", help="Filter by category (case-insensitive)")
    stock = lp.add_mutually_exclusive_group()
    stock.add_argument("--in-stock", dest="in_stock", action="store_true", default=None, help="Only products in stock")
    stock.add_argument("--out-of-stock", dest="in_stock", action="store_false", help="Only products out of stock")
    lp.add_argument("--search", help="Substring of the product name")
    lp.add_argument("--page", type=int, default=1)
    lp.add_argument("--limit", type=int, default=10)

    sp = subparsers.add_parser("search", help="Search products by name")
    sp.add_argument("--q", required=True, help="Search term")

    subparsers.add_parser("stats", help="Show product statistics")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    for cmd, help_text in (("create-product", "Create a product"), ("update-product", "Update a product")):
        wp = subparsers.add_parser(cmd, help=help_text)
        if cmd == "update-product":
            wp.add_argument("--product-id", required=True)
        wp.add_argument("--name", required=True)
        wp.add_argument("--description", required=True)
        wp.add_argument("--price", type=float, required=True)
        wp.add_argument("--category", required=True)
        flag = wp.add_mutually_exclusive_group()
        flag.add_argument("--in-stock", dest="in_stock", action="store_true", default=None)
        flag.add_argument("--out-of-stock", dest="in_stock", action="store_false")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True)

    args = parser.parse_args()
    c = StoreClient(base_url=args.base_url, api_key=args.api_key)

    if args.command == "list-products":
        print(c.list_products(args.category, args.in_stock, args.search, args.page, args.limit))
    elif args.command == "search":
        print(c.search_products(args.q))
    elif args.command == "stats":
        print(c.stats())
    elif args.command == "get-product":
        print(c.get_product(args.product_id))
    elif args.command == "create-product":
        print(c.create_product(args.name, args.description, args.price, args.category, args.in_stock))
    elif args.command == "update-product":
        print(c.update_product(args.product_id, args.name, args.description, args.price, args.category, args.in_stock))
    elif args.command == "delete-product":
        print(c.delete_product(args.product_id))
