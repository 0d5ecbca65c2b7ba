from typing import Any, Dict, List, Optional

from fastapi import Request

from .errors import ValidationError
from .models import ProductIn, _product_dict
from .store import ProductStore
from .validation import validate_product_payload

# This file contains the logic behind each product endpoint.


async def read_product_payload(request: Request) -> ProductIn:
    try:
        body = await request.json()
    except ValueError:
        raise ValidationError("Invalid product data")
    if not validate_product_payload(body):
        raise ValidationError("Invalid product data")
    return ProductIn.model_validate(body)


def list_products_logic(store: ProductStore) -> List[Dict[str, Any]]:
    return [_product_dict(p) for p in store.list_all()]


def search_products_logic(store: ProductStore, q: Optional[str]) -> Dict[str, Any]:
    if not q:
        raise ValidationError("Missing search query (q)")
    total, results = store.filter_by_name_substring(q)
    return {"total": total, "results": [_product_dict(p) for p in results]}


def product_stats_logic(store: ProductStore) -> Dict[str, int]:
    return store.count_by_category()


def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    return _product_dict(store.find_by_id(product_id))


def create_product_logic(store: ProductStore, payload: ProductIn) -> Dict[str, Any]:
    return _product_dict(store.insert(payload))


def update_product_logic(store: ProductStore, product_id: str, payload: ProductIn) -> Dict[str, Any]:
    return _product_dict(store.update(product_id, payload))


def delete_product_logic(store: ProductStore, product_id: str) -> None:
    store.delete(product_id)
