# products_api/handlers.py
import math
import uuid
from typing import Any, Dict, List, Optional

from .config import Config
from .core import is_truthy, parse_bool, parse_int
from .database import ProductStore
from .errors import NotFoundError, ValidationError
from .models import Product

# This file contains the core logic for all product endpoints.
# Routes in main.py only unpack the request and call into here.


def _name_matches(product: Product, term: str) -> bool:
    return term.lower() in product.name.lower()


def _finite_or_none(value: Optional[float]) -> Optional[float]:
    if value is None or not math.isfinite(value):
        return None
    return value


def _as_list(products: List[Product]) -> List[Dict[str, Any]]:
    return [p.to_dict() for p in products]


# GET /api/products
async def list_products_logic(
    store: ProductStore,
    category: Optional[str] = None,
    in_stock: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Dict[str, Any]:
    out = store.list_all()

    if category:
        wanted = category.lower()
        out = [p for p in out if p.category.lower() == wanted]

    if in_stock:
        flag = parse_bool(in_stock)
        out = [p for p in out if p.in_stock == flag]

    if search:
        out = [p for p in out if _name_matches(p, search)]

    page_no = parse_int(page, Config.DEFAULT_PAGE)
    per_page = parse_int(limit, Config.DEFAULT_LIMIT)
    start = (page_no - 1) * per_page
    end = start + per_page
    count = len(out)

    # Negative page/limit are passed through untouched; slicing then counts
    # from the end of the filtered list.
    return {
        "success": True,
        "count": count,
        "pagination": {
            "page": page_no,
            "limit": per_page,
            "totalPages": math.ceil(count / per_page),
            "hasNext": end < count,
            "hasPrev": start > 0,
        },
        "data": _as_list(out[start:end]),
    }


# GET /api/products/search
async def search_products_logic(store: ProductStore, q: Optional[str]) -> Dict[str, Any]:
    if not q:
        raise ValidationError('Search query parameter "q" is required')
    results = [p for p in store.list_all() if _name_matches(p, q)]
    return {"success": True, "query": q, "count": len(results), "data": _as_list(results)}


# GET /api/products/stats
async def product_stats_logic(store: ProductStore) -> Dict[str, Any]:
    products = store.list_all()
    prices = [p.price for p in products]

    categories: Dict[str, int] = {}
    for p in products:
        categories[p.category] = categories.get(p.category, 0) + 1

    in_stock = sum(1 for p in products if p.in_stock)
    stats = {
        "totalProducts": len(products),
        "totalInStock": in_stock,
        "totalOutOfStock": len(products) - in_stock,
        "categories": categories,
        # No prices on an empty store, or a sum that overflows: report nulls
        "priceStats": {
            "highest": max(prices) if prices else None,
            "lowest": min(prices) if prices else None,
            "average": _finite_or_none(sum(float(p) for p in prices) / len(prices)) if prices else None,
        },
    }
    return {"success": True, "data": stats}


# GET /api/products/{id}
async def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    p = store.get(product_id)
    if p is None:
        raise NotFoundError("Product not found")
    return {"success": True, "data": p.to_dict()}


# POST /api/products
async def create_product_logic(store: ProductStore, payload: Dict[str, Any]) -> Dict[str, Any]:
    product = Product(
        id=str(uuid.uuid4()),
        name=payload["name"].strip(),
        description=payload["description"].strip(),
        price=payload["price"],
        category=payload["category"].strip(),
        in_stock=is_truthy(payload.get("inStock", True)),
    )
    store.insert(product)
    return {"success": True, "data": product.to_dict()}


# PUT /api/products/{id}
async def update_product_logic(store: ProductStore, product_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    current = store.get(product_id)
    if current is None:
        raise NotFoundError("Product not found")

    changes: Dict[str, Any] = {
        "name": payload["name"].strip(),
        "description": payload["description"].strip(),
        "price": payload["price"],
        "category": payload["category"].strip(),
    }
    # inStock only changes when the caller sent it
    if "inStock" in payload:
        changes["in_stock"] = is_truthy(payload["inStock"])

    updated = current.model_copy(update=changes)
    if store.replace(product_id, updated) is None:
        raise NotFoundError("Product not found")
    return {"success": True, "data": updated.to_dict()}


# DELETE /api/products/{id}
async def delete_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    if not store.remove(product_id):
        raise NotFoundError("Product not found")
    return {"success": True, "message": "Product deleted successfully"}
