from __future__ import annotations

from ...shared.cqrs.query import Query
from .dto import UserDTO


class GetCurrentUser(Query[UserDTO | None]):
    user_id: str
