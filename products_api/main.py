# products_api/main.py
import logging
import traceback
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Config
from .core import validate_product
from .database import ProductStore, get_store, seed
from .errors import ApiError, AuthenticationError, NotFoundError
from .handlers import (
    create_product_logic, delete_product_logic, get_product_logic,
    list_products_logic, product_stats_logic, search_products_logic,
    update_product_logic,
)
from .logging_setup import configure_logging
from .middleware import PROTECTED_PREFIX, check_api_key, log_requests

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(Config.LOG_LEVEL)
    if Config.SEED_SAMPLE_DATA:
        seed(get_store())
        logger.info("Seeded product store with sample data")
    yield


app = FastAPI(title="products-api (in-memory demo)", lifespan=lifespan)


async def api_key_gate(request: Request, call_next):
    # Runs before routing so unknown paths under the prefix are gated too
    try:
        check_api_key(request)
    except AuthenticationError as exc:
        return await api_error_handler(request, exc)
    return await call_next(request)


# Last registered runs first: logging -> CORS -> API key gate -> routes
app.middleware("http")(api_key_gate)
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(log_requests)


# ---------------------------
# Error handling
# ---------------------------
def _error_response(exc: Exception, status_code: int, message: Optional[str]) -> JSONResponse:
    body: Dict[str, Any] = {"success": False, "error": message or "Internal Server Error"}
    if Config.is_development():
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=status_code, content=body)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    logger.warning("%s: %s", type(exc).__name__, exc.message)
    return _error_response(exc, exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Routing failures (unknown path or unsupported method) surface as 404
    if exc.status_code in (404, 405):
        url = request.url.path
        if request.url.query:
            url += f"?{request.url.query}"
        return await api_error_handler(request, NotFoundError(f"Route {url} not found"))
    logger.warning("HTTP %s: %s", exc.status_code, exc.detail)
    return _error_response(exc, exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(exc, 500, "Internal Server Error")


# ---------------------------
# Root
# ---------------------------
@app.get("/")
async def root():
    return {
        "message": "Welcome to the Product API!",
        "endpoints": {
            "getAllProducts": "GET /api/products",
            "getProduct": "GET /api/products/:id",
            "createProduct": "POST /api/products",
            "updateProduct": "PUT /api/products/:id",
            "deleteProduct": "DELETE /api/products/:id",
            "searchProducts": "GET /api/products/search?q=query",
            "productStats": "GET /api/products/stats",
        },
        "note": "All /api/products routes require x-api-key header",
    }


# ---------------------------
# Product endpoints (API key required)
# ---------------------------
router = APIRouter(prefix=PROTECTED_PREFIX)


@router.get("")
async def list_products(
    category: Optional[str] = None,
    in_stock: Optional[str] = Query(None, alias="inStock"),
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    store: ProductStore = Depends(get_store),
):
    return await list_products_logic(store, category, in_stock, search, page, limit)


# search and stats must be registered before /{product_id}
@router.get("/search")
async def search_products(q: Optional[str] = None, store: ProductStore = Depends(get_store)):
    return await search_products_logic(store, q)


@router.get("/stats")
async def product_stats(store: ProductStore = Depends(get_store)):
    return await product_stats_logic(store)


@router.get("/{product_id}")
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    return await get_product_logic(store, product_id)


@router.post("", status_code=201)
async def create_product(payload: Dict[str, Any] = Depends(validate_product), store: ProductStore = Depends(get_store)):
    return await create_product_logic(store, payload)


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    payload: Dict[str, Any] = Depends(validate_product),
    store: ProductStore = Depends(get_store),
):
    return await update_product_logic(store, product_id, payload)


@router.delete("/{product_id}")
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    return await delete_product_logic(store, product_id)


app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=Config.HOST, port=Config.PORT, log_level=Config.LOG_LEVEL.lower())
