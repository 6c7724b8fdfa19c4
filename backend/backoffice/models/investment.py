"""Investment ORM — companies, investor profiles, holdings and gifted share lots.

Invariants:
    - Share counts are BigInteger (can exceed 2^53); prices are Numeric(18, 6)
    - One InvestorProfile per customer; one holding row per (investor, company)
    - Holdings include gifted shares; purchased = held - gifted
"""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    String, Text, BigInteger, Numeric, Date, DateTime, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from backoffice.db.base import Base


class InvestmentCompany(Base):
    __tablename__ = "investment_companies"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    ticker: Mapped[str | None] = mapped_column(String(12), nullable=True)
    current_price: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    total_shares: Mapped[int] = mapped_column(BigInteger, nullable=False)


class InvestorProfile(Base):
    __tablename__ = "investor_profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    customer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("customers.id"), nullable=False, unique=True,
    )
    balance: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0"),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )


class InvestorPortfolio(Base):
    """Shares of one company held by one investor (purchased + gifted)."""
    __tablename__ = "investor_portfolios"
    __table_args__ = (UniqueConstraint("investor_id", "company_id"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    investor_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("investor_profiles.id"), nullable=False, index=True,
    )
    company_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("investment_companies.id"), nullable=False,
    )
    shares: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    avg_price: Mapped[Decimal] = mapped_column(
        Numeric(18, 6), nullable=False, default=Decimal("0"),
    )

    company: Mapped[InvestmentCompany] = relationship(
        InvestmentCompany, lazy="selectin",
    )


class InvestorGiftedShares(Base):
    """A lot of shares granted to an investor, sellable after vesting_date."""
    __tablename__ = "investor_gifted_shares"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    investor_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("investor_profiles.id"), nullable=False, index=True,
    )
    company_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("investment_companies.id"), nullable=False,
    )
    shares: Mapped[int] = mapped_column(BigInteger, nullable=False)
    vesting_date: Mapped[date] = mapped_column(Date, nullable=False)
    grant_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    company: Mapped[InvestmentCompany] = relationship(
        InvestmentCompany, lazy="selectin",
    )
