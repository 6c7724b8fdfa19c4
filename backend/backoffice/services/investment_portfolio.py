"""Investment Portfolio — an investor's per-company share breakdown.

Invariants:
    - Read-only: a customer without an investor profile gets [] (no profile created)
    - Share math lives in core/portfolio.py
"""

from datetime import date
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.portfolio import PortfolioPosition, build_positions
from backoffice.models.investment import (
    InvestorGiftedShares, InvestorPortfolio, InvestorProfile,
)


async def load_positions(
    db: AsyncSession, customer_id: UUID, today: date,
) -> list[PortfolioPosition]:
    profile = (await db.execute(
        select(InvestorProfile).where(InvestorProfile.customer_id == customer_id),
    )).scalar_one_or_none()
    if profile is None:
        return []

    holdings = (await db.execute(
        select(InvestorPortfolio).where(InvestorPortfolio.investor_id == profile.id),
    )).scalars().all()
    gifts = (await db.execute(
        select(InvestorGiftedShares).where(
            InvestorGiftedShares.investor_id == profile.id,
        ),
    )).scalars().all()
    return build_positions(holdings, gifts, today)
