from __future__ import annotations

from ...shared.primitives.exceptions import DomainError, GiftDeskError


class EmailAlreadyExistsError(DomainError):
    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f'A user with email "{email}" already exists')


class AuthenticationError(GiftDeskError):
    """Base for login and token failures."""


class InvalidCredentialsError(AuthenticationError):
    """Unknown e-mail or wrong password. The message never says which."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class InvalidTokenError(AuthenticationError):
    pass
