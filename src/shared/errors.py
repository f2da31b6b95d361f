"""Failure taxonomy shared by every bounded context.

Each failure carries a stable ``kind`` so the HTTP boundary can map it to a
status code without inspecting messages. Input validation failures are
protean's ``ValidationError`` and are not redefined here.
"""


class ShopCartError(Exception):
    """Base class for failures surfaced to the boundary layer."""

    kind = "internal"

    def __init__(self, message: str, **context) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message, **self.context}


class AuthenticationFailure(ShopCartError):
    """Missing, malformed, badly signed or expired credential."""

    kind = "unauthenticated"


class AuthorizationFailure(ShopCartError):
    """Valid principal, insufficient role."""

    kind = "forbidden"


class UsernameTaken(ShopCartError):
    kind = "already_exists"

    def __init__(self, username) -> None:
        super().__init__(f"Username {username} is already registered", username=str(username))


class NotFound(ShopCartError):
    kind = "not_found"


class ProductNotFound(NotFound):
    def __init__(self, product_id) -> None:
        super().__init__(f"Product {product_id} not found", product_id=str(product_id))
        self.product_id = str(product_id)


class DependencyFailure(ShopCartError):
    """A storage or catalogue call failed."""

    kind = "dependency_failure"

    def __init__(self, dependency: str, message: str, **context) -> None:
        super().__init__(message, dependency=dependency, **context)
        self.dependency = dependency


class DependencyTimeout(DependencyFailure):
    kind = "timeout"


class ConcurrentUpdateConflict(DependencyFailure):
    """An optimistic write kept losing the race for the same cart."""

    kind = "conflict"
