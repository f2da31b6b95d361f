"""Identity API package."""

from identity.api.routes import account_router

__all__ = ["account_router"]
