"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Monetary columns are Numeric, share counts BigInteger

Design Decisions:
    - One file per aggregate
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from backoffice.models.seller import Seller  # noqa: F401
from backoffice.models.customer import Customer  # noqa: F401
from backoffice.models.employee import Employee, EmployeeDocument  # noqa: F401
from backoffice.models.product import Product  # noqa: F401
from backoffice.models.order import Order, OrderItem  # noqa: F401
from backoffice.models.receivable import Receivable  # noqa: F401
from backoffice.models.expense import Expense  # noqa: F401
from backoffice.models.investment import (  # noqa: F401
    InvestmentCompany, InvestorProfile, InvestorPortfolio, InvestorGiftedShares,
)
from backoffice.models.audit_log import AuditLog  # noqa: F401
