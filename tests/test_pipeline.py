# tests/test_pipeline.py
from fastapi.testclient import TestClient
from loguru import logger
from productapi.config import Settings
from productapi.errors import ErrorKind, NotFoundError, ValidationError
from productapi.main import create_app
from productapi.models import SAMPLE_PRODUCTS
from productapi.store import ProductStore

KEY = "s3cret"
MUG = {"name": "Mug", "description": "Ceramic", "price": 10, "category": "kitchen", "inStock": True}

def make_app():
    store = ProductStore(SAMPLE_PRODUCTS)
    return create_app(Settings(api_key=KEY, seed_sample_data=False), store=store), store

def test_missing_key_is_forbidden():
    app, _ = make_app()
    r = TestClient(app).get("/api/products")
    assert r.status_code == 403
    assert r.json() == {"error": "Forbidden - Invalid API Key"}

def test_wrong_key_is_forbidden():
    app, _ = make_app()
    r = TestClient(app).get("/api/products/stats", headers={"x-api-key": "12345"})
    assert r.status_code == 403

def test_rejected_requests_never_touch_the_store():
    app, store = make_app()
    anon = TestClient(app)
    assert anon.post("/api/products", json=MUG).status_code == 403
    assert anon.put("/api/products/1", json=MUG).status_code == 403
    assert anon.delete("/api/products/1").status_code == 403

    listing = TestClient(app, headers={"x-api-key": KEY}).get("/api/products").json()
    assert [p["id"] for p in listing] == ["1", "2", "3"]
    assert listing[0]["name"] == "Laptop"
    assert len(store) == 3

def test_key_check_runs_before_routing():
    app, _ = make_app()
    # even unknown paths answer 403 without a key
    assert TestClient(app).get("/api/unknown").status_code == 403

def test_unhandled_errors_become_500():
    app, _ = make_app()

    @app.get("/api/boom")
    async def boom():
        raise RuntimeError("secret internals")

    r = TestClient(app, headers={"x-api-key": KEY}).get("/api/boom")
    assert r.status_code == 500
    assert r.json() == {"error": "Internal Server Error"}
    assert "secret internals" not in r.text

def test_requests_and_errors_are_logged():
    app, _ = make_app()
    messages = []
    sink = logger.add(messages.append, format="{message}")
    try:
        client = TestClient(app, headers={"x-api-key": KEY})
        client.get("/api/products")
        client.get("/api/products/nope")
    finally:
        logger.remove(sink)
    lines = [str(m) for m in messages]
    assert any("GET /api/products" in line for line in lines)
    assert any("404" in line and "Product not found" in line for line in lines)

def test_error_kinds_carry_status():
    assert ValidationError().status_code == 400
    assert NotFoundError().status_code == 404
    assert NotFoundError().message == "Product not found"
    assert ErrorKind.FORBIDDEN == 403

def test_error_message_falls_back_to_default():
    assert ValidationError(None).message == "Invalid product data"
    assert ValidationError("Missing search query (q)").message == "Missing search query (q)"
    assert str(NotFoundError()) == "Product not found"
