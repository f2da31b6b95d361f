"""Pydantic request/response schemas for the Catalogue API."""

from decimal import Decimal

from pydantic import BaseModel, Field

from catalogue.product_catalog.port import Product


class AddProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    price: Decimal = Field(ge=0)
    images: list[str] = Field(default_factory=list, max_length=5)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Classic Black T-Shirt",
                    "description": "Premium cotton crew-neck tee in black.",
                    "price": "19.99",
                    "images": [],
                }
            ]
        }
    }


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: Decimal
    images: list[str] = []

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            images=list(product.images),
        )
