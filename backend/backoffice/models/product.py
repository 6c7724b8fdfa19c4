"""Product ORM — catalog item with wholesale/retail prices and a stored image key."""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import String, Text, Boolean, Numeric, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from backoffice.db.base import Base


class Product(Base):
    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(String(40), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    price_wholesale: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    price_retail: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    promotional_price: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True,
    )
    is_on_promotion: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    current_stock: Mapped[Decimal] = mapped_column(
        Numeric(12, 3), nullable=False, default=Decimal("0"),
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
