"""Bearer token authentication."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .exceptions import InvalidTokenError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ...shared.ports.unit_of_work import UnitOfWork
    from ..domain.model import User
    from ..domain.ports import ITokenGenerator, IUserRepository

BEARER_PREFIX = "Bearer "


def extract_bearer_token(headers: Mapping[str, str]) -> str:
    """Token part of the ``Authorization`` header (header name is case-insensitive).

    Raises:
        InvalidTokenError: If the header is missing or not a bearer token.
    """
    value = next(
        (v for k, v in headers.items() if k.lower() == "authorization"),
        None,
    )
    if not value or not value.startswith(BEARER_PREFIX):
        raise InvalidTokenError("No Bearer token provided")
    token = value[len(BEARER_PREFIX) :].strip()
    if not token:
        raise InvalidTokenError("No Bearer token provided")
    return token


async def authenticate_bearer(
    headers: Mapping[str, str],
    tokens: ITokenGenerator,
    users: IUserRepository,
    uow: UnitOfWork | None = None,
) -> User:
    """Resolve the user behind an ``Authorization: Bearer`` header.

    Raises:
        InvalidTokenError: If the header is missing, the token does not
            verify or has expired, or its user no longer exists.
    """
    claims = tokens.parse_token(extract_bearer_token(headers))
    if claims is None:
        raise InvalidTokenError("Invalid or expired token")
    user = await users.get(claims.user_id, uow)
    if user is None:
        raise InvalidTokenError("User not found")
    return user
