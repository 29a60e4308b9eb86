"""Bearer credential verification."""

import logging
from dataclasses import dataclass, field

import jwt

from nexyn_foods.domain.errors import AuthenticationFailure

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentityVerifier:
    """Validates signed access tokens and extracts the embedded principal.

    The signing secret is process-wide configuration handed in at startup.
    No store lookup is performed; the ``email`` claim is trusted as encoded.
    """

    secret: str = field(repr=False)
    algorithm: str = "HS256"

    def verify(self, credential: str) -> str:
        """Return the principal for a valid token or raise AuthenticationFailure."""
        try:
            claims = jwt.decode(
                credential,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.InvalidTokenError as exc:
            _logger.info("Rejected access token: %s", type(exc).__name__)
            raise AuthenticationFailure("Invalid or expired token") from exc
        email = claims.get("email")
        if not isinstance(email, str) or not email:
            raise AuthenticationFailure("Token does not carry a principal")
        return email


def parse_bearer(authorization: str | None) -> str:
    """Extract the token from an ``Authorization: Bearer`` header value."""
    if not authorization:
        raise AuthenticationFailure("Unauthorized access", reason="missing")
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationFailure("Unauthorized access", reason="malformed")
    return token
