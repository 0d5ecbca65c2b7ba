# productapi/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Union


class ProductIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    price: Union[int, float]
    category: str
    in_stock: bool = Field(alias="inStock")


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    price: Union[int, float]
    category: str
    in_stock: bool = Field(alias="inStock")


def _make_product(product_id: str, p: ProductIn) -> Product:
    return Product(id=product_id, **p.model_dump())


def _product_dict(p: Product) -> Dict[str, Any]:
    # wire format keeps the camelCase "inStock" key
    return p.model_dump(by_alias=True)


SAMPLE_PRODUCTS = [
    Product(
        id="1",
        name="Laptop",
        description="High-performance laptop with 16GB RAM",
        price=1200,
        category="electronics",
        in_stock=True,
    ),
    Product(
        id="2",
        name="Smartphone",
        description="Latest model with 128GB storage",
        price=800,
        category="electronics",
        in_stock=True,
    ),
    Product(
        id="3",
        name="Coffee Maker",
        description="Programmable coffee maker with timer",
        price=50,
        category="kitchen",
        in_stock=False,
    ),
]
