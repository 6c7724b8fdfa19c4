"""Portfolio Breakdown — purchased vs gifted (vested / unvested) shares per company.

Invariants:
    - Share counts are ints end to end (BigInteger in storage, strings on the wire)
    - purchased = max(0, held - gifted); sellable = purchased + vested
    - Only companies with a positive holding appear; gifts for a company the
      investor no longer holds are dropped with it
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

SHARE_FIELDS = (
    "shares", "purchased_shares", "gifted_shares",
    "vested_shares", "unvested_shares", "sellable_shares",
)


@dataclass
class GiftedLot:
    id: str
    shares: int
    vesting_date: date
    grant_date: date | None
    description: str | None
    is_vested: bool


@dataclass
class PortfolioPosition:
    company_id: str
    company_name: str
    ticker: str | None
    current_price: Decimal
    avg_price: Decimal
    shares: int
    purchased_shares: int
    gifted_shares: int
    vested_shares: int
    unvested_shares: int
    sellable_shares: int
    gifted_lots: list[GiftedLot] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "company_id": self.company_id,
            "company_name": self.company_name,
            "ticker": self.ticker,
            "current_price": self.current_price,
            "avg_price": self.avg_price,
            "shares": self.shares,
            "purchased_shares": self.purchased_shares,
            "gifted_shares": self.gifted_shares,
            "vested_shares": self.vested_shares,
            "unvested_shares": self.unvested_shares,
            "sellable_shares": self.sellable_shares,
            "gifted_lots": [
                {
                    "id": lot.id,
                    "shares": lot.shares,
                    "vesting_date": lot.vesting_date,
                    "grant_date": lot.grant_date,
                    "description": lot.description,
                    "is_vested": lot.is_vested,
                }
                for lot in self.gifted_lots
            ],
        }


def build_positions(
    holdings: Iterable[Any], gifts: Iterable[Any], today: date,
) -> list[PortfolioPosition]:
    """Combine holding rows and gifted-share lots into per-company positions.

    holdings and gifts must have their `company` relationship loaded.
    """
    by_company: dict[Any, dict[str, Any]] = {}
    for h in holdings:
        by_company[h.company_id] = {"company": h.company, "held": h.shares or 0,
                                    "avg_price": h.avg_price, "gifts": []}
    for g in gifts:
        if g.company_id in by_company:
            by_company[g.company_id]["gifts"].append(g)

    positions = []
    for company_id, entry in by_company.items():
        lots = sorted(entry["gifts"], key=lambda g: g.vesting_date)
        gifted = sum(g.shares for g in lots)
        vested = sum(g.shares for g in lots if g.vesting_date <= today)
        held = entry["held"]
        if held <= 0:
            continue
        purchased = max(0, held - gifted)
        company = entry["company"]
        positions.append(PortfolioPosition(
            company_id=str(company_id),
            company_name=company.name,
            ticker=company.ticker,
            current_price=company.current_price,
            avg_price=entry["avg_price"] or Decimal("0"),
            shares=held,
            purchased_shares=purchased,
            gifted_shares=gifted,
            vested_shares=vested,
            unvested_shares=gifted - vested,
            sellable_shares=purchased + vested,
            gifted_lots=[
                GiftedLot(
                    id=str(g.id), shares=g.shares, vesting_date=g.vesting_date,
                    grant_date=g.grant_date, description=g.description,
                    is_vested=g.vesting_date <= today,
                )
                for g in lots
            ],
        ))
    positions.sort(key=lambda p: p.company_name)
    return positions
