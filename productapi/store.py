# productapi/store.py
import threading
import uuid
from typing import Dict, Iterable, List, Tuple

from .errors import NotFoundError
from .models import Product, ProductIn, _make_product

# This file holds the in-memory product collection and the lock guarding it.


class ProductStore:
    """Process-local product collection keyed by id.

    Every public method runs under a single lock, and products handed out
    are copies, so callers never hold a live reference into the store.
    """

    def __init__(self, products: Iterable[Product] = ()):
        self._products: Dict[str, Product] = {}
        self._lock = threading.Lock()
        self.seed(products)

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def __contains__(self, product_id: str) -> bool:
        with self._lock:
            return product_id in self._products

    def seed(self, products: Iterable[Product]) -> None:
        with self._lock:
            for p in products:
                self._products[p.id] = p.model_copy()

    def clear(self) -> None:
        with self._lock:
            self._products.clear()

    def list_all(self) -> List[Product]:
        with self._lock:
            return [p.model_copy() for p in self._products.values()]

    def find_by_id(self, product_id: str) -> Product:
        with self._lock:
            p = self._products.get(product_id)
            if p is None:
                raise NotFoundError("Product not found")
            return p.model_copy()

    def insert(self, fields: ProductIn) -> Product:
        with self._lock:
            pid = str(uuid.uuid4())
            while pid in self._products:
                pid = str(uuid.uuid4())
            p = _make_product(pid, fields)
            self._products[pid] = p
            return p.model_copy()

    def update(self, product_id: str, fields: ProductIn) -> Product:
        with self._lock:
            if product_id not in self._products:
                raise NotFoundError("Product not found")
            # reassigning an existing key keeps its listing position
            p = _make_product(product_id, fields)
            self._products[product_id] = p
            return p.model_copy()

    def delete(self, product_id: str) -> None:
        with self._lock:
            if self._products.pop(product_id, None) is None:
                raise NotFoundError("Product not found")

    def filter_by_name_substring(self, query: str) -> Tuple[int, List[Product]]:
        term = query.lower()
        with self._lock:
            results = [p.model_copy() for p in self._products.values() if term in p.name.lower()]
        return len(results), results

    def count_by_category(self) -> Dict[str, int]:
        stats: Dict[str, int] = {}
        with self._lock:
            for p in self._products.values():
                stats[p.category] = stats.get(p.category, 0) + 1
        return stats
