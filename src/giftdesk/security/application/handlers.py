"""Handlers of the security context."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...shared.cqrs.handler import CommandHandler, QueryHandler
from ...shared.cqrs.mediator import get_current_uow
from ...shared.cqrs.response import CommandResponse, QueryResponse
from ...shared.domain.value_objects import Email
from ..domain.model import User
from ..domain.value_objects import HashedPassword, UserId
from .commands import Login, RegisterUser
from .dto import TokenDTO, UserDTO
from .exceptions import EmailAlreadyExistsError, InvalidCredentialsError
from .queries import GetCurrentUser

if TYPE_CHECKING:
    from ...shared.primitives.id_generator import IIDGenerator
    from ..domain.ports import IPasswordHasher, ITokenGenerator, IUserRepository

logger = logging.getLogger(__name__)


class RegisterUserHandler(CommandHandler[RegisterUser, UserId]):
    def __init__(
        self,
        users: IUserRepository,
        hasher: IPasswordHasher,
        id_generator: IIDGenerator,
    ) -> None:
        self._users = users
        self._hasher = hasher
        self._ids = id_generator

    async def handle(self, command: RegisterUser) -> CommandResponse[UserId]:
        uow = get_current_uow()
        email = Email(command.email)
        if await self._users.email_exists(email, uow):
            raise EmailAlreadyExistsError(email.value)

        user = User.register(
            UserId(self._ids.next_id()),
            email,
            HashedPassword(self._hasher.hash(command.password.get_secret_value())),
            command.roles,
        )
        await self._users.save(user, uow)
        logger.info("Registered user %s", user.id)
        return CommandResponse(result=user.user_id)


class LoginHandler(CommandHandler[Login, TokenDTO]):
    """Checks the credentials, stamps the login and issues a token."""

    def __init__(
        self,
        users: IUserRepository,
        hasher: IPasswordHasher,
        tokens: ITokenGenerator,
    ) -> None:
        self._users = users
        self._hasher = hasher
        self._tokens = tokens

    async def handle(self, command: Login) -> CommandResponse[TokenDTO]:
        uow = get_current_uow()
        try:
            email = Email(command.email)
        except ValueError:
            raise InvalidCredentialsError() from None

        user = await self._users.find_by_email(email, uow)
        if user is None:
            raise InvalidCredentialsError()
        if not user.verify_password(command.password.get_secret_value(), self._hasher):
            logger.warning("Failed login for user %s", user.id)
            raise InvalidCredentialsError()

        user.record_login()
        await self._users.save(user, uow)

        return CommandResponse(
            result=TokenDTO(
                token=self._tokens.generate_token(user),
                user_id=user.id,
                email=user.email.value,
                roles=list(user.roles),
            )
        )


class GetCurrentUserHandler(QueryHandler[GetCurrentUser, UserDTO | None]):
    def __init__(self, users: IUserRepository) -> None:
        self._users = users

    async def handle(self, query: GetCurrentUser) -> QueryResponse[UserDTO | None]:
        user = await self._users.get(query.user_id, get_current_uow())
        return QueryResponse(result=None if user is None else UserDTO.from_entity(user))
