"""Marketplace domain errors.

Field-level problems are raised as ``protean.exceptions.ValidationError`` and
missing records as ``protean.exceptions.ObjectNotFoundError``, like the rest of
the domain. The classes here cover the outcomes that are not about a single
field: who may act, and whether the current state allows the act.

Each error carries the HTTP status the API layer answers with.
"""


class MarketplaceError(Exception):
    """Base exception for all marketplace rule violations."""

    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class Unauthenticated(MarketplaceError):
    """Raised when a request carries no actor identity."""

    status_code = 401


class Forbidden(MarketplaceError):
    """Raised when the actor is not a party allowed to read or act."""

    status_code = 403


class OwnListingRequest(Forbidden):
    """Raised when a company requests waste from its own listing.

    Reported to clients as a bad request rather than a permission failure.
    """

    status_code = 400

    def __init__(self):
        super().__init__("You cannot request your own textile waste")


class Conflict(MarketplaceError):
    """Raised when the current inventory or listing state does not allow the act."""


class InvalidState(Conflict):
    """Raised when a lifecycle transition is not allowed from the current status."""

    def __init__(self, current: str, action: str, message: str | None = None):
        self.current = current
        self.action = action
        super().__init__(message or f"Cannot {action} an exchange that is {current}")


class InvalidAction(MarketplaceError):
    """Raised when an exchange action is not one of the known actions."""

    def __init__(self, action):
        self.action = action
        super().__init__(f"Invalid action: {action}")


class InsufficientStock(Conflict):
    """Raised when a product has less stock than an order line requests."""

    def __init__(self, product_id: str, product_name: str | None, available: int, requested: int):
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for {product_name or product_id}. Available: {available}, Requested: {requested}"
        )

    def to_dict(self) -> dict:
        return {
            "error": self.message,
            "product_id": self.product_id,
            "available": self.available,
            "requested": self.requested,
        }
