# sdk/client.py
import httpx
import requests
from typing import Any, Dict, Optional

API_KEY_HEADER = "x-api-key"


class ProductClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = "12345", timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = requests.Session()
        self.timeout = timeout
        if api_key:
            self.session.headers.update({API_KEY_HEADER: api_key})

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _payload(name: str, description: str, price: float, category: str, in_stock: bool) -> Dict[str, Any]:
        return {
            "name": name,
            "description": description,
            "price": price,
            "category": category,
            "inStock": in_stock,
        }

    def welcome(self) -> str:
        r = self.session.get(self._url("/"), timeout=self.timeout)
        r.raise_for_status()
        return r.text

    # Products
    def list_products(self):
        r = self.session.get(self._url("/api/products"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_product(self, name: str, description: str, price: float, category: str, in_stock: bool = True):
        r = self.session.post(
            self._url("/api/products"),
            json=self._payload(name, description, price, category, in_stock),
            timeout=self.timeout,
        )
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: str, name: str, description: str, price: float, category: str, in_stock: bool):
        r = self.session.put(
            self._url(f"/api/products/{product_id}"),
            json=self._payload(name, description, price, category, in_stock),
            timeout=self.timeout,
        )
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: str) -> None:
        r = self.session.delete(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        r.raise_for_status()

    def search_products(self, q: str):
        r = self.session.get(self._url("/api/products/search"), params={"q": q}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def stats(self) -> Dict[str, int]:
        r = self.session.get(self._url("/api/products/stats"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Async create (used by the concurrency demo)
    async def create_product_async(self, name: str, description: str, price: float, category: str, in_stock: bool = True):
        headers = {API_KEY_HEADER: self.api_key} if self.api_key else {}
        async with httpx.AsyncClient(timeout=self.timeout, headers=headers) as client:
            r = await client.post(
                self._url("/api/products"),
                json=self._payload(name, description, price, category, in_stock),
            )
            r.raise_for_status()
            return r.json()


def _parse_bool(value: str) -> bool:
    return value.lower() in {"1", "true", "yes", "y"}


if __name__ == "__main__":
    import argparse
    from rich import print

    parser = argparse.ArgumentParser(description="Product API CLI")
    parser.add_argument("--base-url", default="http://127.0.0.1:3000", help="API base URL")
    parser.add_argument("--api-key", default="12345", help="Value sent in the x-api-key header")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-products", help="List all products")
    subparsers.add_parser("stats", help="Count products per category")

    sp = subparsers.add_parser("search", help="Search products by name")
    sp.add_argument("--q", required=True, help="Case-insensitive name fragment")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True, help="ID of the product")

    dp = subparsers.add_parser("delete-product", help="Delete a product by its ID")
    dp.add_argument("--product-id", required=True, help="ID of the product")

    for cmd, help_text in (("create-product", "Create a new product"), ("update-product", "Replace a product")):
        p = subparsers.add_parser(cmd, help=help_text)
        if cmd == "update-product":
            p.add_argument("--product-id", required=True, help="ID of the product")
        p.add_argument("--name", required=True, help="Product name")
        p.add_argument("--description", required=True, help="Product description")
        p.add_argument("--price", type=float, required=True, help="Price")
        p.add_argument("--category", required=True, help="Product category")
        p.add_argument("--in-stock", type=_parse_bool, default=True, help="true/false")

    args = parser.parse_args()
    c = ProductClient(base_url=args.base_url, api_key=args.api_key)

    if args.command == "list-products":
        print(c.list_products())
    elif args.command == "stats":
        print(c.stats())
    elif args.command == "search":
        print(c.search_products(args.q))
    elif args.command == "get-product":
        print(c.get_product(args.product_id))
    elif args.command == "delete-product":
        c.delete_product(args.product_id)
        print(f"[green]Deleted {args.product_id}[/green]")
    elif args.command == "create-product":
        print(c.create_product(args.name, args.description, args.price, args.category, args.in_stock))
    elif args.command == "update-product":
        print(c.update_product(args.product_id, args.name, args.description, args.price, args.category, args.in_stock))
