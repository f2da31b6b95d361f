"""FastAPI routes for the Catalogue: public listing and admin-only additions."""

from fastapi import APIRouter, Depends

from catalogue.api.schemas import AddProductRequest, ProductResponse
from catalogue.management import register_product
from catalogue.product_catalog import get_catalog
from identity.auth.dependencies import current_principal
from identity.auth.port import Principal
from shared.deadlines import bounded
from shared.settings import get_settings

product_router = APIRouter(tags=["products"])


@product_router.get("/products", response_model=list[ProductResponse])
async def list_products() -> list[ProductResponse]:
    products = await bounded(get_catalog().list_products(), get_settings().catalog_timeout_seconds, "catalogue")
    return [ProductResponse.from_product(product) for product in products]


@product_router.post("/add-product", status_code=201, response_model=ProductResponse)
async def add_product(
    body: AddProductRequest,
    principal: Principal = Depends(current_principal),
) -> ProductResponse:
    product = await register_product(
        get_catalog(),
        principal,
        name=body.name,
        price=body.price,
        description=body.description,
        images=tuple(body.images),
        timeout=get_settings().catalog_timeout_seconds,
    )
    return ProductResponse.from_product(product)
