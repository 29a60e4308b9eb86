"""Failure taxonomy shared by services and the HTTP layer.

Every failure a request can end in is one of these kinds. Each carries a
stable ``code`` for clients and the HTTP status used at the boundary.
"""


class MarketplaceError(Exception):
    """Base class for all request-terminating failures."""

    code = "internal_error"
    http_status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict[str, object]:
        """Return the JSON error envelope."""
        return {"error": {"code": self.code, "message": self.message}}


class AuthenticationFailure(MarketplaceError):
    """Missing, malformed, forged or expired credential."""

    code = "authentication_failed"
    http_status = 401

    def __init__(
        self, message: str = "Unauthorized access", reason: str = "invalid_or_expired"
    ) -> None:
        super().__init__(message)
        self.reason = reason


class AuthorizationFailure(MarketplaceError):
    """Verified identity does not match the resource owner or actor."""

    code = "authorization_failed"
    http_status = 403


class ValidationFailure(MarketplaceError):
    """Malformed or out-of-range input."""

    code = "validation_failed"
    http_status = 400


class NotFound(MarketplaceError):
    """Referenced resource does not exist."""

    code = "not_found"
    http_status = 404


class CapacityExceeded(MarketplaceError):
    """Not enough stock to satisfy a purchase."""

    code = "capacity_exceeded"
    http_status = 409


class StoreFailure(MarketplaceError):
    """The backing store is unreachable or an operation could not complete."""

    code = "store_failure"
    http_status = 503
