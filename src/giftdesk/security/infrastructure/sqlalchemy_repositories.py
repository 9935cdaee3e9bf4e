from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import exists, select

from ...shared.adapters.sqlalchemy.repository import SQLAlchemyRepository
from ...shared.domain.value_objects import Email
from ...shared.events.serialization import as_utc
from ..domain.model import User
from ..domain.value_objects import HashedPassword
from .models import UserModel

if TYPE_CHECKING:
    from ...shared.ports.unit_of_work import UnitOfWork


class SQLAlchemyUserRepository(SQLAlchemyRepository[User, UserModel]):
    entity_cls = User
    model_cls = UserModel

    def to_model(self, entity: User) -> UserModel:
        return UserModel(
            id=entity.id,
            email=entity.email.value,
            password=entity.password.value,
            roles=list(entity.roles),
            created_at=as_utc(entity.created_at),
            last_login_at=as_utc(entity.last_login_at) if entity.last_login_at else None,
        )

    def from_model(self, model: UserModel) -> User:
        return User(
            id=model.id,
            email=Email(model.email),
            password=HashedPassword(model.password),
            roles=list(model.roles or []),
            created_at=as_utc(model.created_at),
            last_login_at=as_utc(model.last_login_at) if model.last_login_at else None,
        )

    async def find_by_email(self, email: Email, uow: UnitOfWork | None = None) -> User | None:
        return await self._fetch_one(select(UserModel).where(UserModel.email == email.value), uow)

    async def email_exists(self, email: Email, uow: UnitOfWork | None = None) -> bool:
        stmt = select(exists().where(UserModel.email == email.value))
        result = await self._session(uow).execute(stmt)
        return bool(result.scalar())
