from __future__ import annotations
import uuid
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Boolean, DateTime, Integer, String, Text, Uuid, func
from reservoir.db import Base

# column limits; submissions are validated against these before any upload
LITRES_MAX = 2**31 - 1   # postgres int4
POSTCODE_MAX = 16


class WaterButt(Base):
    __tablename__ = "water_butts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # nullable at the table level; aggregation counts NULL as 0
    litres: Mapped[int | None] = mapped_column(Integer(), nullable=True)
    postcode: Mapped[str] = mapped_column(String(POSTCODE_MAX), index=True, nullable=False)  # trimmed, upper-cased
    photo_url: Mapped[str] = mapped_column(Text(), nullable=False)  # blob key, not a URL
    approved: Mapped[bool] = mapped_column(Boolean, index=True, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
