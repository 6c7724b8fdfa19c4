"""Query Parameter Models — the filters, sorts and paging each list endpoint accepts.

Invariants:
    - extra="forbid": an unrecognized query parameter is a 400, never silently ignored
    - Sort keys and directions are Literals; only enumerated columns reach ORDER BY
    - Status filters are domain enums; free-text filters are length-bounded
    - date (YYYY-MM-DD) and month (YYYY-MM) are mutually exclusive

Design Decisions:
    - Models are bound with Annotated[Model, Query()] so FastAPI validates the whole
      set before the handler (and therefore persistence) runs
"""

import datetime as dt
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from backoffice.core.domain_types import (
    EmployeeStatus, ExpenseStatus, ExpenseType, OrderStatus, PaymentStatus,
)

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
MONTH_PATTERN = r"^\d{4}-\d{2}$"

SortDirection = Literal["asc", "desc"]


class _QueryModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class PageQuery(_QueryModel):
    limit: int = Field(50, ge=1, le=200)
    offset: int = Field(0, ge=0)


class _PeriodFields(BaseModel):
    date: str | None = Field(None, pattern=DATE_PATTERN)
    month: str | None = Field(None, pattern=MONTH_PATTERN)

    @model_validator(mode="after")
    def one_period_only(self):
        if self.date and self.month:
            raise ValueError("use either date or month, not both")
        return self


class PeriodQuery(_QueryModel, _PeriodFields):
    """Reporting period for totals endpoints."""


class OrderQuery(PageQuery, _PeriodFields):
    """Order list filters. date/month apply to delivery_date."""
    status: OrderStatus | None = None
    payment_status: PaymentStatus | None = None
    customer_id: UUID | None = None
    sort: Literal["created_at", "delivery_date", "total"] = "created_at"
    direction: SortDirection = "desc"


class CustomerQuery(PageQuery):
    """Customer list filters. month applies to created_at."""
    is_active: bool | None = None
    city: str | None = Field(None, min_length=1, max_length=120)
    payment_terms_days: int | None = Field(None, ge=0, le=365)
    month: str | None = Field(None, pattern=MONTH_PATTERN)
    sort: Literal["name", "created_at"] = "name"
    direction: SortDirection = "asc"


class EmployeeQuery(PageQuery):
    status: EmployeeStatus | None = None
    department: str | None = Field(None, min_length=1, max_length=120)
    supervisor_id: UUID | None = None


class ExpenseQuery(PageQuery):
    """Expense list filters. date_from/date_to bound due_date (inclusive)."""
    expense_type: ExpenseType | None = None
    status: ExpenseStatus | None = None
    date_from: dt.date | None = None
    date_to: dt.date | None = None

    @model_validator(mode="after")
    def ordered_range(self):
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError("date_from must not be after date_to")
        return self


class ProductQuery(_QueryModel):
    include_inactive: bool = False
    category: str | None = Field(None, min_length=1, max_length=40)
    month: str | None = Field(None, pattern=MONTH_PATTERN)


class PortfolioQuery(_QueryModel):
    customer_id: UUID | None = None


class FileQuery(_QueryModel):
    key: str | None = None
