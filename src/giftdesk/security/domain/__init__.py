from __future__ import annotations

from .events import UserRegistered
from .model import User
from .ports import IPasswordHasher, ITokenGenerator, IUserRepository, TokenClaims
from .value_objects import HashedPassword, UserId

__all__ = [
    "HashedPassword",
    "IPasswordHasher",
    "ITokenGenerator",
    "IUserRepository",
    "TokenClaims",
    "User",
    "UserId",
    "UserRegistered",
]
