from datetime import datetime
from typing import Any

from sqlalchemy import BigInteger, Index, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .types import JSONType, UTCDateTime


class Base(DeclarativeBase):
    """
    Declarative base for every giftdesk table.

    Context packages declare their own models on this base so one
    ``Base.metadata.create_all`` builds the whole schema.
    """


class StoredEventModel(Base):
    """
    Append-only audit log of published domain events.

    ``position`` is the autoincrement primary key and doubles as the
    insertion order used to break ``occurred_on`` ties.
    """

    __tablename__ = "event_store"

    position: Mapped[int] = mapped_column(
        Integer().with_variant(BigInteger, "postgresql"),
        primary_key=True,
        autoincrement=True,
    )
    event_id: Mapped[str] = mapped_column(String(36), unique=True, index=True)
    event_type: Mapped[str] = mapped_column(String(255), index=True)
    aggregate_id: Mapped[str] = mapped_column(String(255), index=True)
    payload: Mapped[dict[str, Any]] = mapped_column(JSONType)
    occurred_on: Mapped[datetime] = mapped_column(UTCDateTime(), index=True)
    recorded_at: Mapped[datetime] = mapped_column(UTCDateTime())

    __table_args__ = (
        Index("ix_event_store_aggregate_occurred", "aggregate_id", "occurred_on"),
    )
