"""Ownership checks guarding every mutating operation."""

from nexyn_foods.domain.errors import AuthorizationFailure


def authorize(principal: str, owner: str, message: str = "Forbidden access") -> None:
    """Raise AuthorizationFailure unless the principal is exactly the owner."""
    if principal != owner:
        raise AuthorizationFailure(message)


def authorize_claim(principal: str, claimed: str | None) -> None:
    """Require a caller-supplied owner/actor value, when given, to match too.

    The claim never replaces the check against the stored record.
    """
    if claimed is not None:
        authorize(principal, claimed)
