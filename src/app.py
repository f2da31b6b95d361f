"""ShopCart FastAPI application.

Serves account registration and login, the per-user cart (add, read,
total) and the product listing. Each cart request is wrapped in the
ordering domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 3001
"""

from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.logging import bind_request_context, clear_request_context, configure_logging

configure_logging()

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
from ordering.cart.cart import Cart, CartLineItem  # noqa: E402,F401
from ordering.domain import ordering  # noqa: E402

ordering.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/add-to-cart": ordering,
    "/get-cart": ordering,
    "/calculate-total": ordering,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="ShopCart API",
    description="Authenticated shopping cart and product catalogue",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the ordering domain context for cart requests and tag log lines."""
    clear_request_context()
    bind_request_context(request_id=request.headers.get("x-request-id", uuid4().hex), path=request.url.path)

    domain = _resolve_domain(request.url.path)
    if domain is not None:
        with domain.domain_context():
            response = await call_next(request)
        return response
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers and error handlers
# ---------------------------------------------------------------------------
from catalogue.api import product_router  # noqa: E402
from identity.api import account_router  # noqa: E402
from ordering.api.routes import cart_router  # noqa: E402
from shared.api_errors import install_error_handlers  # noqa: E402

app.include_router(cart_router)
app.include_router(product_router)
app.include_router(account_router)
install_error_handlers(app)


@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domains": {"ordering": {"name": ordering.name}}})
