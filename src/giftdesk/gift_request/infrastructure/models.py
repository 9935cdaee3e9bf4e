from datetime import datetime

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...shared.adapters.sqlalchemy.models import Base
from ...shared.adapters.sqlalchemy.types import UTCDateTime


class GiftRequestModel(Base):
    __tablename__ = "gift_requests"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    requester_name: Mapped[str] = mapped_column(String(100))
    requester_email: Mapped[str] = mapped_column(String(255), index=True)
    requester_phone: Mapped[str] = mapped_column(String(20), default="")
    requested_gift: Mapped[str] = mapped_column(String(255))
    motivation: Mapped[str] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(20), index=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime())
