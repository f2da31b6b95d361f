"""Catalogue mutation, restricted to administrators."""

import structlog

from catalogue.product_catalog.port import Product, ProductCatalog
from identity.auth.port import Principal
from shared.deadlines import bounded
from shared.errors import AuthenticationFailure, AuthorizationFailure

logger = structlog.get_logger(__name__)


async def register_product(
    catalog: ProductCatalog,
    principal: Principal | None,
    name: str,
    price,
    description: str | None = None,
    images: tuple[str, ...] = (),
    timeout: float = 2.0,
) -> Product:
    if principal is None:
        raise AuthenticationFailure("Access denied: no principal")
    if not principal.is_admin:
        raise AuthorizationFailure(
            "Only administrators can add products",
            subject_id=principal.subject_id,
        )

    product = await bounded(
        catalog.add_product(name=name, price=price, description=description, images=images),
        timeout,
        "catalogue",
    )
    logger.info("Product added to catalogue", product_id=product.id, added_by=principal.subject_id)
    return product
