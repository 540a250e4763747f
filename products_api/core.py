# products_api/core.py
import json
import math
import re
from typing import Any, Dict, Optional

from fastapi import Request

from .errors import ValidationError

REQUIRED_FIELDS = ("name", "description", "price", "category")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


# ---------------------------
# Query helpers
# ---------------------------
def parse_int(raw: Optional[str], default: int) -> int:
    """
    Parse a query value the lenient way: "3", " 3", "3abc" and "3.9" all give 3.
    Anything without leading digits, and a parsed 0, falls back to default.
    """
    if raw is None:
        return default
    m = _LEADING_INT.match(raw)
    if not m:
        return default
    value = int(m.group(1))
    return value or default


def parse_bool(raw: str) -> bool:
    return raw.lower() == "true"


# ---------------------------
# Body helpers
# ---------------------------
async def read_json_body(request: Request) -> Dict[str, Any]:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        raise ValidationError("Request body must be valid JSON")
    # arrays and scalars carry no fields
    if not isinstance(data, dict):
        return {}
    return data


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite(value: Any) -> bool:
    # ints too large for a float overflow; treat them like inf
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _is_missing(value: Any) -> bool:
    # Only None, False, "", 0 and NaN count as missing; [] and {} are present
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if _is_number(value):
        return value == 0 or value != value
    return False


def is_truthy(value: Any) -> bool:
    return not _is_missing(value)


def check_product_payload(body: Dict[str, Any]) -> None:
    if any(_is_missing(body.get(field)) for field in REQUIRED_FIELDS):
        raise ValidationError("Missing required fields: name, description, price, category")

    name = body["name"]
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Name must be a non-empty string")

    price = body["price"]
    if not _is_number(price) or not _is_finite(price) or price <= 0:
        raise ValidationError("Price must be a positive number")

    if not isinstance(body["description"], str) or not isinstance(body["category"], str):
        raise ValidationError("Description and category must be strings")


# ---------------------------
# Validation middleware (route dependency for POST/PUT)
# ---------------------------
async def validate_product(request: Request) -> Dict[str, Any]:
    body = await read_json_body(request)
    check_product_payload(body)
    return body
