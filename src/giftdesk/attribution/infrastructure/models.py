from datetime import datetime

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...shared.adapters.sqlalchemy.models import Base
from ...shared.adapters.sqlalchemy.types import UTCDateTime


class ResidentModel(Base):
    __tablename__ = "residents"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100), index=True)
    age: Mapped[int] = mapped_column(Integer)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)


class GiftModel(Base):
    __tablename__ = "gifts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), index=True)
    description: Mapped[str] = mapped_column(Text, default="")
    quantity: Mapped[int] = mapped_column(Integer, default=0)


class AttributionModel(Base):
    __tablename__ = "attributions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    resident_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("residents.id"), index=True
    )
    gift_id: Mapped[str] = mapped_column(String(36), ForeignKey("gifts.id"), index=True)
    attributed_at: Mapped[datetime] = mapped_column(UTCDateTime(), index=True)
