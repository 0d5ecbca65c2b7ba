# tests/test_products_api.py
from fastapi.testclient import TestClient
from productapi.config import Settings
from productapi.main import create_app
from productapi.models import SAMPLE_PRODUCTS
from productapi.store import ProductStore

KEY = "test-key"
STORE = ProductStore()
app = create_app(Settings(api_key=KEY, seed_sample_data=False), store=STORE)

client = TestClient(app, headers={"x-api-key": KEY})

MUG = {"name": "Mug", "description": "Ceramic", "price": 10, "category": "kitchen", "inStock": True}

def reset():
    STORE.clear()
    STORE.seed(SAMPLE_PRODUCTS)

def test_welcome_needs_no_key():
    r = TestClient(app).get("/")
    assert r.status_code == 200
    assert r.text.startswith("Welcome to the Product API!")

def test_list_products_returns_seed():
    reset()
    r = client.get("/api/products")
    assert r.status_code == 200
    body = r.json()
    assert [p["id"] for p in body] == ["1", "2", "3"]
    assert body[0] == {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "inStock": True,
    }

def test_create_then_get():
    reset()
    r = client.post("/api/products", json=MUG)
    assert r.status_code == 201
    created = r.json()
    assert created.pop("id")
    assert created == MUG

    pid = r.json()["id"]
    r2 = client.get(f"/api/products/{pid}")
    assert r2.status_code == 200
    assert r2.json() == {**MUG, "id": pid}

def test_create_ignores_client_id():
    reset()
    r = client.post("/api/products", json={**MUG, "id": "1"})
    assert r.status_code == 201
    assert r.json()["id"] != "1"
    assert client.get("/api/products/1").json()["name"] == "Laptop"

def test_create_missing_price_is_rejected():
    reset()
    payload = {k: v for k, v in MUG.items() if k != "price"}
    r = client.post("/api/products", json=payload)
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid product data"}
    assert len(STORE) == 3

def test_create_with_bad_shapes():
    reset()
    for bad in (
        {**MUG, "name": ""},
        {**MUG, "price": "10"},
        {**MUG, "price": True},
        {**MUG, "inStock": "yes"},
        {**MUG, "category": None},
        [MUG],
    ):
        r = client.post("/api/products", json=bad)
        assert r.status_code == 400, bad
    assert len(STORE) == 3

def test_create_with_malformed_json():
    reset()
    r = client.post("/api/products", content=b"{not json", headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid product data"}

def test_create_with_non_finite_price():
    reset()
    for raw in (b"1e400", b"-1e400", b"NaN", b"Infinity"):
        body = b'{"name":"Big","description":"d","price":' + raw + b',"category":"x","inStock":true}'
        r = client.post("/api/products", content=body, headers={"content-type": "application/json"})
        assert r.status_code == 400, raw
        assert r.json() == {"error": "Invalid product data"}
    r2 = client.get("/api/products")
    assert r2.status_code == 200
    assert len(r2.json()) == 3
    assert client.get("/api/products/stats").json() == {"electronics": 2, "kitchen": 1}

def test_update_with_non_finite_price():
    reset()
    body = b'{"name":"Big","description":"d","price":1e400,"category":"x","inStock":true}'
    r = client.put("/api/products/1", content=body, headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert client.get("/api/products/1").json()["price"] == 1200

def test_update_replaces_fields_and_keeps_id():
    reset()
    new = {"name": "Gaming Laptop", "description": "32GB RAM", "price": 1999.99, "category": "gaming", "inStock": False}
    r = client.put("/api/products/1", json=new)
    assert r.status_code == 200
    assert r.json() == {**new, "id": "1"}
    assert client.get("/api/products/1").json() == {**new, "id": "1"}
    # position in the listing is unchanged
    assert client.get("/api/products").json()[0]["id"] == "1"

def test_update_invalid_payload():
    reset()
    r = client.put("/api/products/1", json={**MUG, "inStock": 1})
    assert r.status_code == 400
    assert client.get("/api/products/1").json()["name"] == "Laptop"

def test_unknown_id_is_404_everywhere():
    reset()
    missing = "does-not-exist"
    assert client.get(f"/api/products/{missing}").status_code == 404
    r = client.put(f"/api/products/{missing}", json=MUG)
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}
    assert client.delete(f"/api/products/{missing}").status_code == 404
    assert len(STORE) == 3

def test_delete_then_get_is_404():
    reset()
    r = client.delete("/api/products/2")
    assert r.status_code == 204
    assert r.content == b""
    r2 = client.get("/api/products/2")
    assert r2.status_code == 404
    assert r2.json() == {"error": "Product not found"}
    assert client.delete("/api/products/2").status_code == 404

def test_search_by_name():
    reset()
    r = client.get("/api/products/search", params={"q": "lap"})
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 1
    assert body["results"][0]["name"] == "Laptop"

def test_search_is_case_insensitive():
    reset()
    body = client.get("/api/products/search", params={"q": "MAKER"}).json()
    assert body["total"] == 1
    assert body["results"][0]["id"] == "3"
    assert client.get("/api/products/search", params={"q": "zzz"}).json() == {"total": 0, "results": []}

def test_search_requires_query():
    reset()
    for params in ({}, {"q": ""}):
        r = client.get("/api/products/search", params=params)
        assert r.status_code == 400
        assert r.json() == {"error": "Missing search query (q)"}

def test_stats():
    reset()
    r = client.get("/api/products/stats")
    assert r.status_code == 200
    assert r.json() == {"electronics": 2, "kitchen": 1}

def test_stats_follow_mutations():
    reset()
    client.post("/api/products", json=MUG)
    client.delete("/api/products/1")
    stats = client.get("/api/products/stats").json()
    assert stats == {"electronics": 1, "kitchen": 2}
    assert sum(stats.values()) == len(client.get("/api/products").json())

def test_unknown_route_uses_error_body():
    r = client.get("/api/nothing-here")
    assert r.status_code == 404
    assert "error" in r.json()
