from __future__ import annotations

from pydantic import Field, SecretStr

from ...shared.cqrs.command import Command
from ..domain.value_objects import UserId
from .dto import TokenDTO


class RegisterUser(Command[UserId]):
    email: str
    password: SecretStr
    roles: list[str] = Field(default_factory=lambda: ["ROLE_USER"])


class Login(Command[TokenDTO]):
    email: str
    password: SecretStr
