"""Request authentication dependency."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Header, Request

from nexyn_foods.services.identity import IdentityVerifier, parse_bearer

if TYPE_CHECKING:
    from nexyn_foods.containers import AppContainer


def _get_verifier(request: Request) -> IdentityVerifier:
    container: AppContainer = request.app.state.container
    return container.identity_verifier


async def require_principal(
    authorization: str | None = Header(default=None),
    verifier: IdentityVerifier = Depends(_get_verifier),
) -> str:
    """Return the verified principal for the request's bearer token."""
    return verifier.verify(parse_bearer(authorization))
