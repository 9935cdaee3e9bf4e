"""HS256 JWT access tokens, signed and verified with joserfc."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from joserfc import jwt
from joserfc.errors import JoseError
from joserfc.jwk import OctKey

from ..domain.ports import TokenClaims

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..domain.model import User

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_TTL_SECONDS = 3600


class JwtTokenGenerator:
    """Issues and parses access tokens.

    Claims: ``iss``, ``iat``, ``exp``, ``sub`` (user id), ``email`` and
    ``roles``. Parsing checks the signature, the issuer and the expiry;
    any failure yields ``None``.
    """

    def __init__(
        self,
        secret: str,
        issuer: str,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("JWT secret cannot be empty")
        if ttl_seconds <= 0:
            raise ValueError("Token TTL must be positive")
        self._key = OctKey.import_key(secret)
        self._issuer = issuer
        self._ttl = ttl_seconds
        self._clock = clock

    def generate_token(self, user: User) -> str:
        now = int(self._clock())
        claims: dict[str, Any] = {
            "iss": self._issuer,
            "iat": now,
            "exp": now + self._ttl,
            "sub": user.id,
            "email": user.email.value,
            "roles": list(user.roles),
        }
        return jwt.encode({"alg": ALGORITHM}, claims, self._key)

    def parse_token(self, token: str) -> TokenClaims | None:
        try:
            decoded = jwt.decode(token, self._key, algorithms=[ALGORITHM])
            registry = jwt.JWTClaimsRegistry(
                now=int(self._clock()),
                iss={"essential": True, "value": self._issuer},
                exp={"essential": True},
                sub={"essential": True},
            )
            registry.validate(decoded.claims)
        except (JoseError, ValueError) as e:
            logger.debug("Rejected access token: %s", e)
            return None

        claims = decoded.claims
        return TokenClaims(
            user_id=str(claims["sub"]),
            email=str(claims.get("email", "")),
            roles=list(claims.get("roles", [])),
        )
