from __future__ import annotations

from .authentication import authenticate_bearer, extract_bearer_token
from .commands import Login, RegisterUser
from .dto import TokenDTO, UserDTO
from .exceptions import (
    AuthenticationError,
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from .handlers import GetCurrentUserHandler, LoginHandler, RegisterUserHandler
from .queries import GetCurrentUser
from .subscribers import UserRegisteredSubscriber

__all__ = [
    "AuthenticationError",
    "EmailAlreadyExistsError",
    "GetCurrentUser",
    "GetCurrentUserHandler",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "Login",
    "LoginHandler",
    "RegisterUser",
    "RegisterUserHandler",
    "TokenDTO",
    "UserDTO",
    "UserRegisteredSubscriber",
    "authenticate_bearer",
    "extract_bearer_token",
]
