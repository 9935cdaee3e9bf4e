from __future__ import annotations

from .hasher import BcryptPasswordHasher
from .memory import InMemoryUserRepository
from .models import UserModel
from .sqlalchemy_repositories import SQLAlchemyUserRepository
from .tokens import JwtTokenGenerator

__all__ = [
    "BcryptPasswordHasher",
    "InMemoryUserRepository",
    "JwtTokenGenerator",
    "SQLAlchemyUserRepository",
    "UserModel",
]
