#!/usr/bin/env python
import requests
from sdk.client import ProductClient

def main():
    c = ProductClient(base_url="http://127.0.0.1:3000", api_key="12345")

    print(c.welcome())

    # -----------------------------
    # List seeded products
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())

    # -----------------------------
    # Create a product
    # -----------------------------
    print("\nCreating a product...")
    mug = c.create_product("Mug", "Ceramic", 10, "kitchen", True)
    print(mug)

    # -----------------------------
    # Search and stats
    # -----------------------------
    print("\nSearching for 'lap'...")
    print(c.search_products("lap"))

    print("\nProducts per category...")
    print(c.stats())

    # -----------------------------
    # Update then delete
    # -----------------------------
    print("\nMarking the mug out of stock...")
    print(c.update_product(mug["id"], "Mug", "Ceramic", 12.5, "kitchen", False))

    print("\nDeleting the mug...")
    c.delete_product(mug["id"])
    try:
        c.get_product(mug["id"])
    except requests.exceptions.HTTPError as e:
        print(f"Gone: {e.response.status_code} {e.response.json()}")

    # -----------------------------
    # Wrong key is rejected
    # -----------------------------
    print("\nUsing a wrong API key...")
    bad = ProductClient(base_url=c.base_url, api_key="wrong")
    try:
        bad.list_products()
    except requests.exceptions.HTTPError as e:
        print(f"Rejected: {e.response.status_code} {e.response.json()}")

if __name__ == "__main__":
    main()
