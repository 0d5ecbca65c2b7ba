# productapi/main.py
from typing import Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from loguru import logger

from .config import Settings, get_settings
from .handlers import (
    create_product_logic,
    delete_product_logic,
    get_product_logic,
    list_products_logic,
    product_stats_logic,
    read_product_payload,
    search_products_logic,
    update_product_logic,
)
from .log import configure_logging
from .models import SAMPLE_PRODUCTS
from .pipeline import install_pipeline
from .store import ProductStore

WELCOME_TEXT = "Welcome to the Product API! Go to /api/products to see all products."


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    if store is None:
        store = ProductStore(SAMPLE_PRODUCTS if settings.seed_sample_data else ())

    app = FastAPI(title="Product API (in-memory)")
    app.state.settings = settings
    app.state.store = store

    install_pipeline(app, api_key=settings.api_key)
    # added last so it sits outside the pipeline and answers preflights itself
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    logger.debug("app created with {} products", len(store))
    return app


def register_routes(app: FastAPI) -> None:
    # ---------------------------
    # Welcome page (no API key)
    # ---------------------------
    @app.get("/", response_class=PlainTextResponse)
    async def welcome():
        return WELCOME_TEXT

    # ---------------------------
    # Product endpoints
    # ---------------------------
    # search and stats must be registered before /{product_id}
    @app.get("/api/products")
    async def list_products(store: ProductStore = Depends(get_store)):
        return list_products_logic(store)

    @app.get("/api/products/search")
    async def search_products(q: Optional[str] = None, store: ProductStore = Depends(get_store)):
        return search_products_logic(store, q)

    @app.get("/api/products/stats")
    async def product_stats(store: ProductStore = Depends(get_store)):
        return product_stats_logic(store)

    @app.get("/api/products/{product_id}")
    async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
        return get_product_logic(store, product_id)

    @app.post("/api/products", status_code=201)
    async def create_product(request: Request, store: ProductStore = Depends(get_store)):
        payload = await read_product_payload(request)
        return create_product_logic(store, payload)

    @app.put("/api/products/{product_id}")
    async def update_product(product_id: str, request: Request, store: ProductStore = Depends(get_store)):
        payload = await read_product_payload(request)
        return update_product_logic(store, product_id, payload)

    @app.delete("/api/products/{product_id}", status_code=204)
    async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
        delete_product_logic(store, product_id)
        return Response(status_code=204)


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    logger.info("Server is running on http://localhost:{}", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
